from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.errors import NotFound, StreamDirError
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_ERROR_STATUS = 400

def register_exception_handlers(app: FastAPI):
    """ドメイン例外を JSON レスポンスに変換する"""

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        # 単一ストリームの 404 はメッセージなしの空オブジェクト
        return JSONResponse(status_code=404, content={})

    @app.exception_handler(StreamDirError)
    async def streamdir_error_handler(request: Request, exc: StreamDirError):
        status_code = exc.status_code or DEFAULT_ERROR_STATUS
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
        return JSONResponse(status_code=status_code, content={"error": exc.message})
