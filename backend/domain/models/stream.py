import json
from enum import IntEnum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from sqlmodel import Field, SQLModel

from domain.errors import InvalidCursor, InvalidCursorCombination, InvalidLimit, InvalidOrder

RawParam = Union[str, int, None]


class StreamRecord(SQLModel):
    """
    ストリームのカタログエントリ
    テーブル定義は infra/database/schema.py の Raw SQL 側が正
    """
    id: Optional[int] = None
    stream_name: str = ""
    stream_type: str = ""
    description: str = ""
    songname: str = ""
    url: str = ""
    avg_listening_time: Optional[float] = None
    codec_sub_types: List[str] = Field(default_factory=list)
    bitrate: Optional[int] = None
    hits: Optional[int] = None
    cm: Optional[int] = None
    samplerate: Optional[int] = None
    channels: Optional[int] = None
    quality: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    listenurls: List[str] = Field(default_factory=list)
    listeners: int = 0
    max_listeners: int = 0


class SortOrder(IntEnum):
    RANDOM = -1
    DESCENDING = 0
    ASCENDING = 1


def _clean(value: RawParam) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


class QueryFilter(BaseModel):
    """Validated listing request. Build it with QueryFilter.parse()."""

    model_config = ConfigDict(frozen=True)

    format: Optional[str] = None
    genre: Optional[str] = None
    q: Optional[str] = None
    order: SortOrder = SortOrder.DESCENDING
    limit: Optional[int] = None
    starting_after: Optional[int] = None
    ending_before: Optional[int] = None

    @classmethod
    def parse(
        cls,
        format: RawParam = None,
        genre: RawParam = None,
        q: RawParam = None,
        order: RawParam = None,
        limit: RawParam = None,
        starting_after: RawParam = None,
        ending_before: RawParam = None,
    ) -> "QueryFilter":
        starting_after = _clean(starting_after)
        ending_before = _clean(ending_before)
        order = _clean(order)
        limit = _clean(limit)

        if starting_after is not None and ending_before is not None:
            raise InvalidCursorCombination("starting_after and ending_before cannot be used together")

        sort_order = SortOrder.DESCENDING
        if order is not None:
            order_value = _to_int(order)
            if order_value not in (-1, 0, 1):
                raise InvalidOrder("order must be one of -1 (random), 0 (descending) or 1 (ascending)")
            sort_order = SortOrder(order_value)

        limit_value = None
        if limit is not None:
            limit_value = _to_int(limit)
            if limit_value is None or limit_value < 1:
                raise InvalidLimit("limit must be a positive integer")

        after_id = before_id = None
        if starting_after is not None:
            after_id = _to_int(starting_after)
            if after_id is None:
                raise InvalidCursor("starting_after must be a stream id")
        if ending_before is not None:
            before_id = _to_int(ending_before)
            if before_id is None:
                raise InvalidCursor("ending_before must be a stream id")

        if sort_order is SortOrder.RANDOM and (after_id is not None or before_id is not None):
            raise InvalidCursorCombination("starting_after and ending_before cannot be used with random order")

        return cls(
            format=_clean(format),
            genre=_clean(genre),
            q=_clean(q),
            order=sort_order,
            limit=limit_value,
            starting_after=after_id,
            ending_before=before_id,
        )

    @property
    def has_cursor(self) -> bool:
        return self.starting_after is not None or self.ending_before is not None

    def signature(self) -> str:
        return "streams:" + json.dumps(self.model_dump(mode="json"), sort_keys=True)


class Page(BaseModel):
    streams: List[StreamRecord] = []
    next_url: Optional[str] = None
    prev_url: Optional[str] = None
