import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = "streamdir.log"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5

def resolve_log_dir() -> str:
    """
    STREAMDIR_LOG_DIR (server.py が Settings から設定) があればそれを使う。
    なければ backend/logs (開発環境)
    """
    if os.environ.get("STREAMDIR_LOG_DIR"):
        return os.environ["STREAMDIR_LOG_DIR"]
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, "logs")

def resolve_log_level(level: Optional[Union[int, str]] = None) -> int:
    """明示指定 > STREAMDIR_LOG_LEVEL > INFO。不明なレベル名は INFO 扱い"""
    if level is None:
        level = os.environ.get("STREAMDIR_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO

def _build_file_handler(formatter: logging.Formatter, level: int) -> Optional[logging.Handler]:
    log_dir = resolve_log_dir()
    try:
        os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
    except OSError as e:
        # 権限エラーなどでファイル作成できない場合はコンソールのみ
        print(f"Failed to set up file logging in {log_dir}: {e}", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler

def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    ローテーションするファイル出力とコンソール出力を併用するロガーを取得する。
    ハンドラは初回呼び出し時のみ追加される。
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = resolve_log_level(level)
    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = _build_file_handler(formatter, level)
    if file_handler is not None:
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)
    return logger
