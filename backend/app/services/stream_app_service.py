from typing import Iterable, List, Tuple

from config import Settings
from domain.errors import NotFound, StorageError
from domain.models.stream import Page, QueryFilter, StreamRecord
from domain.services.pagination import build_page_links
from infra.cache import TTLCache
from infra.repositories.stream_repository import StreamRepository
from utils.logger import get_logger

logger = get_logger(__name__)

LISTING_PARAMS = ("format", "genre", "q", "order", "limit", "starting_after", "ending_before")


class StreamAppService:
    """
    Stream Finder: リクエストパラメータの検証、キャッシュ参照、検索実行、ページURLの組み立て
    """

    def __init__(self, repository: StreamRepository, cache: TTLCache, settings: Settings):
        self.repository = repository
        self.cache = cache
        self.default_limit = settings.DEFAULT_LIMIT
        self.max_limit = settings.MAX_LIMIT

    def _effective_limit(self, query_filter: QueryFilter) -> int:
        limit = query_filter.limit or self.default_limit
        return min(limit, self.max_limit)

    def search(self, query_filter: QueryFilter) -> List[StreamRecord]:
        key = query_filter.signature()
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return list(cached)

        logger.debug(f"Cache miss: {key}")
        streams = self.repository.find_streams(query_filter, self._effective_limit(query_filter))
        self.cache.set(key, tuple(streams))
        return streams

    def find_streams(self, params: Iterable[Tuple[str, str]], path: str) -> Page:
        """
        params はリクエストのクエリ文字列 (key, value) の並び。未知のキーもURL組み立て用に保持する。
        """
        params = list(params)
        raw = {key: value for key, value in params if key in LISTING_PARAMS}
        query_filter = QueryFilter.parse(**raw)

        streams = self.search(query_filter)

        next_url = prev_url = None
        if query_filter.limit:
            # 上限で切り詰めた場合は実際の件数上限で満杯判定する
            next_url, prev_url = build_page_links(
                path, params, streams, self._effective_limit(query_filter)
            )
        return Page(streams=streams, next_url=next_url, prev_url=prev_url)

    def get_stream(self, stream_id: int) -> StreamRecord:
        key = f"stream:{stream_id}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        stream = self.repository.get_by_id(stream_id)
        if stream is None:
            raise NotFound(f"Stream {stream_id} not found")
        self.cache.set(key, stream)
        return stream

    def _cached_values(self, key: str, loader) -> List[str]:
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)
        values = loader()
        self.cache.set(key, tuple(values))
        return values

    def get_all_genres(self) -> List[str]:
        """取得に失敗した場合は空リストを返す (ログのみ)"""
        try:
            return self._cached_values("genres", self.repository.get_all_genres)
        except StorageError as e:
            logger.error(f"Failed to list genres: {e.message}")
            return []

    def get_all_formats(self) -> List[str]:
        try:
            return self._cached_values("formats", self.repository.get_all_formats)
        except StorageError as e:
            logger.error(f"Failed to list formats: {e.message}")
            return []
