import os
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "StreamDir"
APP_AUTHOR = "StreamDirDev"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # デフォルトは platformdirs を使用するが、環境変数 DB_PATH があればそれを優先する
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None

    # Network
    STREAMDIR_HOST: str = "127.0.0.1"
    STREAMDIR_PORT: int = 3000
    CORS_ORIGINS: List[str] = ["*"]

    # Cache (in-memory, per process)
    CACHE_TTL: float = 10.0
    CACHE_MAX_ITEMS: int = 100

    # Listing bounds
    DEFAULT_LIMIT: int = 100
    MAX_LIMIT: int = 500

    # Logging
    STREAMDIR_LOG_DIR: str | None = None
    STREAMDIR_LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        # DB_PATHが未設定ならデフォルト値を設定
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "streamdir.duckdb")

        # ログディレクトリ
        if not self.STREAMDIR_LOG_DIR:
            self.STREAMDIR_LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """ロガーが参照する環境変数を設定する"""
        if self.STREAMDIR_LOG_DIR:
            os.environ["STREAMDIR_LOG_DIR"] = self.STREAMDIR_LOG_DIR
        os.environ["STREAMDIR_LOG_LEVEL"] = self.STREAMDIR_LOG_LEVEL

settings = Settings()
