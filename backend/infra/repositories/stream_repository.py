from typing import Any, Dict, List, Optional, Tuple

from domain.models.stream import QueryFilter, SortOrder, StreamRecord
from infra.database.executor import QueryExecutor

STREAM_COLUMNS = (
    "id", "stream_name", "stream_type", "description", "songname", "url",
    "avg_listening_time", "codec_sub_types", "bitrate", "hits", "cm",
    "samplerate", "channels", "quality", "genres", "listenurls",
    "listeners", "max_listeners",
)
LIST_COLUMNS = ("codec_sub_types", "genres", "listenurls")

SELECT_STREAMS = f"SELECT {', '.join(STREAM_COLUMNS)} FROM streams"


def row_to_stream(row: Dict[str, Any]) -> StreamRecord:
    data = {col: row.get(col) for col in STREAM_COLUMNS}
    for col in LIST_COLUMNS:
        data[col] = list(data[col] or [])
    return StreamRecord(**data)


class StreamRepository:
    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    def _build_listing_query(self, query_filter: QueryFilter, limit: int) -> Tuple[str, Dict[str, Any], bool]:
        """
        フィルタからSQLを組み立てる。戻り値の bool は結果を反転して返す必要があるか。
        ending_before は逆順に走査して直前のページを取り、呼び出し側で元の順序に戻す。
        """
        conditions: List[str] = []
        params: Dict[str, Any] = {}

        # 1. ジャンル / フォーマット (リスト要素の大文字小文字を無視した完全一致)
        if query_filter.genre:
            conditions.append("list_contains([lower(g) FOR g IN genres], lower(:genre))")
            params["genre"] = query_filter.genre
        if query_filter.format:
            conditions.append("list_contains([lower(c) FOR c IN codec_sub_types], lower(:format))")
            params["format"] = query_filter.format

        # 2. フリーテキスト検索 (部分一致)
        if query_filter.q:
            conditions.append(
                "(contains(lower(stream_name), lower(:q))"
                " OR contains(lower(description), lower(:q))"
                " OR contains(lower(songname), lower(:q)))"
            )
            params["q"] = query_filter.q

        # 3. カーソル
        ascending = query_filter.order is SortOrder.ASCENDING
        reverse = False
        if query_filter.starting_after is not None:
            conditions.append("id > :cursor" if ascending else "id < :cursor")
            params["cursor"] = query_filter.starting_after
        elif query_filter.ending_before is not None:
            conditions.append("id < :cursor" if ascending else "id > :cursor")
            params["cursor"] = query_filter.ending_before
            reverse = True

        # 4. 並び順
        if query_filter.order is SortOrder.RANDOM:
            order_by = "random()"
        else:
            scan_ascending = ascending != reverse
            order_by = "id ASC" if scan_ascending else "id DESC"

        sql = SELECT_STREAMS
        if conditions:
            sql += " WHERE " + " AND ".join(conditions)
        sql += f" ORDER BY {order_by} LIMIT {int(limit)}"
        return sql, params, reverse

    def find_streams(self, query_filter: QueryFilter, limit: int) -> List[StreamRecord]:
        sql, params, reverse = self._build_listing_query(query_filter, limit)
        streams = [row_to_stream(row) for row in self.executor.execute(sql, params)]
        if reverse:
            streams.reverse()
        return streams

    def get_by_id(self, stream_id: int) -> Optional[StreamRecord]:
        rows = self.executor.execute(f"{SELECT_STREAMS} WHERE id = :id", {"id": stream_id})
        return row_to_stream(rows[0]) if rows else None

    def _distinct_list_values(self, column: str) -> List[str]:
        rows = self.executor.execute(
            f"SELECT DISTINCT val FROM (SELECT unnest({column}) AS val FROM streams) s"
            " WHERE val IS NOT NULL AND val <> '' ORDER BY val"
        )
        return [row["val"] for row in rows]

    def get_all_genres(self) -> List[str]:
        return self._distinct_list_values("genres")

    def get_all_formats(self) -> List[str]:
        return self._distinct_list_values("codec_sub_types")

    def add(self, stream: StreamRecord) -> StreamRecord:
        data = stream.model_dump(exclude={"id"})
        columns = [col for col in STREAM_COLUMNS if col != "id"]
        values = [
            f"CAST(:{col} AS VARCHAR[])" if col in LIST_COLUMNS else f":{col}"
            for col in columns
        ]
        # id を明示した場合はシーケンスを使わない (テストデータ用)
        if stream.id is not None:
            columns.insert(0, "id")
            values.insert(0, ":id")
            data["id"] = stream.id
        rows = self.executor.execute(
            f"INSERT INTO streams ({', '.join(columns)}) VALUES ({', '.join(values)})"
            f" RETURNING {', '.join(STREAM_COLUMNS)}",
            data,
        )
        if stream.id is not None:
            self._advance_id_sequence(stream.id)
        return row_to_stream(rows[0])

    def _advance_id_sequence(self, stream_id: int):
        """
        明示 id の挿入後、シーケンスを stream_id 以上まで進める (DuckDB には setval がない)
        以降の nextval が既存 id と衝突しないようにする
        """
        current = self.executor.execute("SELECT nextval('seq_streams_id') AS v")[0]["v"]
        gap = int(stream_id) - int(current)
        if gap > 0:
            self.executor.execute(f"SELECT max(nextval('seq_streams_id')) AS v FROM range({gap})")
