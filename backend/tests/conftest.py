import os
import pytest
import sys
import tempfile
import uuid
from typing import Generator

# 1. パス解決: backendディレクトリをsys.pathに追加
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# main.app がユーザーデータ領域を触らないよう、インポート前に一時領域へ向ける
_SESSION_DIR = tempfile.mkdtemp(prefix="streamdir_test_")
os.environ.setdefault("DB_PATH", os.path.join(_SESSION_DIR, "default.duckdb"))
os.environ.setdefault("STREAMDIR_LOG_DIR", os.path.join(_SESSION_DIR, "logs"))

from config import Settings
from domain.models.stream import StreamRecord
from infra.cache import TTLCache
from infra.database import QueryExecutor, close_db, create_db_engine, init_db
from infra.repositories.stream_repository import StreamRepository


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    """テストごとに独立したDBファイルを指す設定"""
    unique_id = str(uuid.uuid4())
    return Settings(
        DB_PATH=os.path.join(tempfile.gettempdir(), f"streamdir_test_{unique_id}.duckdb"),
        STREAMDIR_LOG_DIR=os.path.join(_SESSION_DIR, "logs"),
        CACHE_TTL=10,
        CACHE_MAX_ITEMS=100,
        DEFAULT_LIMIT=100,
        MAX_LIMIT=500,
    )


@pytest.fixture(name="engine")
def engine_fixture(settings: Settings) -> Generator:
    engine = create_db_engine(settings.DB_PATH)
    init_db(engine)
    yield engine

    # テスト終了後のクリーンアップ
    close_db(engine)
    for path in (settings.DB_PATH, settings.DB_PATH + ".wal"):
        if os.path.exists(path):
            try:
                os.remove(path)
            except OSError:
                pass


@pytest.fixture(name="executor")
def executor_fixture(engine) -> QueryExecutor:
    return QueryExecutor(engine)


@pytest.fixture(name="repository")
def repository_fixture(executor) -> StreamRepository:
    return StreamRepository(executor)


@pytest.fixture(name="cache")
def cache_fixture(settings: Settings) -> TTLCache:
    return TTLCache(max_items=settings.CACHE_MAX_ITEMS, ttl=settings.CACHE_TTL)


@pytest.fixture(name="add_streams")
def add_streams_fixture(repository):
    """make_stream の引数リストからストリームを投入するヘルパー"""
    def _add(*streams: StreamRecord):
        return [repository.add(s) for s in streams]
    return _add


@pytest.fixture(name="client")
def client_fixture(settings: Settings, engine) -> Generator:
    """create_app() で組み立てたアプリの TestClient (engine フィクスチャと同じDBファイルを使う)"""
    from fastapi.testclient import TestClient
    from main import create_app

    app = create_app(settings)
    with TestClient(app) as client:
        yield client
