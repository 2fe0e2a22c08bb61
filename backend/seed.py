import json
import logging
import sys
import os

# Add the current directory to sys.path to ensure imports work correctly
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config import settings
from domain.models.stream import StreamRecord
from infra.database import QueryExecutor, close_db, create_db_engine, init_db
from infra.repositories.stream_repository import StreamRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def load_streams(path: str) -> list:
    """JSON ファイル (ストリームオブジェクトの配列) を読み込む"""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("seed file must contain a JSON array of streams")
    return [StreamRecord.model_validate(item) for item in data]

def seed_streams(repository: StreamRepository, streams: list) -> int:
    # ファイル内の id は無視し、シーケンスで採番する
    for stream in streams:
        repository.add(stream.model_copy(update={"id": None}))
    return len(streams)

def main():
    if len(sys.argv) != 2:
        print("usage: python seed.py <streams.json>", file=sys.stderr)
        sys.exit(2)

    logger.info(f"Seeding streams into {settings.DB_PATH}...")
    engine = create_db_engine(settings.DB_PATH)
    try:
        init_db(engine)
        count = seed_streams(StreamRepository(QueryExecutor(engine)), load_streams(sys.argv[1]))
        logger.info(f"Seeded {count} streams.")
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)
    finally:
        close_db(engine)

if __name__ == "__main__":
    main()
