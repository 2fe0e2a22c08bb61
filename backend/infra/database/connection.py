import os
import threading
from sqlmodel import create_engine
from sqlalchemy.engine import Engine
from infra.database.schema import init_raw_db

# スキーマ作成とシード投入はプロセス内で直列化する
db_lock = threading.RLock()

def database_url(db_path: str) -> str:
    return f"duckdb:///{db_path}"

def create_db_engine(db_path: str) -> Engine:
    """
    DuckDBエンジンを生成する。
    エンジンはアプリケーションのコンポジションルート (main.create_app) が所有する。
    """
    # ディレクトリが存在しない場合は作成 (DB_PATHの親ディレクトリ)
    parent = os.path.dirname(db_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
    return create_engine(
        database_url(db_path),
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args
    )

def init_db(engine: Engine):
    """アプリケーション起動時のDB初期化 (Raw SQL によるテーブルとシーケンスの作成)"""
    with db_lock:
        init_raw_db(engine)

def close_db(engine: Engine):
    """
    データベース接続を終了する。
    main.py の lifespan イベントから呼び出されます。
    """
    engine.dispose()
