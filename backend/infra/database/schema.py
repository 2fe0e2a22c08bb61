from sqlalchemy import text
from sqlalchemy.engine import Engine
from utils.logger import get_logger

logger = get_logger(__name__)

# 現在のスキーマバージョン
CURRENT_SCHEMA_VERSION = 1

def get_db_schema_sql() -> str:
    """
    genres / codec_sub_types / listenurls は DuckDB の LIST (VARCHAR[]) で保持する。
    genres と codec_sub_types は NULL を許さず、空リストをデフォルトとする。
    """
    return """
    CREATE SEQUENCE IF NOT EXISTS seq_streams_id START 1;

    CREATE TABLE IF NOT EXISTS streams (
        id INTEGER PRIMARY KEY DEFAULT nextval('seq_streams_id'),
        stream_name VARCHAR NOT NULL DEFAULT '',
        stream_type VARCHAR NOT NULL DEFAULT '',
        description VARCHAR NOT NULL DEFAULT '',
        songname VARCHAR NOT NULL DEFAULT '',
        url VARCHAR NOT NULL DEFAULT '',
        avg_listening_time DOUBLE,
        codec_sub_types VARCHAR[] NOT NULL DEFAULT CAST([] AS VARCHAR[]),
        bitrate INTEGER,
        hits INTEGER,
        cm INTEGER,
        samplerate INTEGER,
        channels INTEGER,
        quality VARCHAR,
        genres VARCHAR[] NOT NULL DEFAULT CAST([] AS VARCHAR[]),
        listenurls VARCHAR[] NOT NULL DEFAULT CAST([] AS VARCHAR[]),
        listeners INTEGER NOT NULL DEFAULT 0,
        max_listeners INTEGER NOT NULL DEFAULT 0,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_streams_stream_name ON streams (stream_name);

    CREATE TABLE IF NOT EXISTS schema_info (
        key VARCHAR PRIMARY KEY,
        value VARCHAR NOT NULL
    );
    """

def get_current_schema_version(conn) -> int:
    row = conn.execute(text("SELECT value FROM schema_info WHERE key = 'version'")).fetchone()
    return int(row[0]) if row else 0

def set_schema_version(conn, version: int):
    conn.execute(text("""
        INSERT INTO schema_info (key, value) VALUES ('version', :version)
        ON CONFLICT (key) DO UPDATE SET value = excluded.value
    """), {"version": str(version)})

def init_raw_db(conn_engine: Engine):
    logger.info("Initializing DuckDB schema...")
    try:
        with conn_engine.begin() as conn:
            statements = [s.strip() for s in get_db_schema_sql().split(';') if s.strip()]
            for stmt in statements:
                conn.execute(text(stmt))

            current_version = get_current_schema_version(conn)
            if current_version < CURRENT_SCHEMA_VERSION:
                set_schema_version(conn, CURRENT_SCHEMA_VERSION)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise
