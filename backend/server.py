import os
import uvicorn

if __name__ == "__main__":
    # 設定の読み込みと環境変数のセットアップ
    # ロガーがログディレクトリとレベルを参照するため、アプリのインポートより前に行う
    from config import settings
    settings.setup_environment()

    # アプリケーションデータディレクトリの確保
    os.makedirs(settings.USER_DATA_DIR, exist_ok=True)

    # main.py がインポート時に settings から組み立てたアプリをそのまま使う
    from main import app

    print(f"Starting {settings.APP_NAME} server on {settings.STREAMDIR_HOST}:{settings.STREAMDIR_PORT}...")
    print(f"Database: {settings.DB_PATH}")
    uvicorn.run(app, host=settings.STREAMDIR_HOST, port=settings.STREAMDIR_PORT, reload=False, workers=1)
