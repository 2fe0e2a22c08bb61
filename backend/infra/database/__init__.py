# Database module
from .connection import create_db_engine, init_db, close_db, database_url, db_lock
from .executor import QueryExecutor
from .schema import init_raw_db
