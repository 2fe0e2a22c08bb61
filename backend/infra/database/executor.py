from typing import Any, Dict, List, Mapping, Optional
import duckdb
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from domain.errors import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

class QueryExecutor:
    """
    Raw SQL を実行し、行を dict のリストで返す。
    ドライバ側の失敗は StorageError に包んで送出する (リトライはしない)。
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def execute(self, statement: str, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(statement), dict(params or {}))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except (SQLAlchemyError, duckdb.Error) as e:
            message = str(getattr(e, "orig", None) or e)
            logger.error(f"Query failed: {message}")
            raise StorageError(message) from e
