import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.routers import streams
from app.services.stream_app_service import StreamAppService
from config import Settings, settings as default_settings
from infra.cache import TTLCache
from infra.database import QueryExecutor, close_db, create_db_engine, init_db
from infra.repositories.stream_repository import StreamRepository
from utils.logger import get_logger

logger = get_logger(__name__)

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    コンポジションルート。
    設定・エンジン・キャッシュ・サービスはここで一度だけ生成し app.state に保持する。
    """
    app_settings = app_settings or default_settings
    engine = create_db_engine(app_settings.DB_PATH)
    cache = TTLCache(max_items=app_settings.CACHE_MAX_ITEMS, ttl=app_settings.CACHE_TTL)
    repository = StreamRepository(QueryExecutor(engine))

    # Lifespan event to handle startup/shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {app_settings.APP_NAME} API (db: {app_settings.DB_PATH})")
        init_db(engine)
        yield
        logger.info(f"Shutting down {app_settings.APP_NAME} API")
        close_db(engine)

    app = FastAPI(title=f"{app_settings.APP_NAME} API", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.cache = cache
    app.state.stream_service = StreamAppService(repository, cache, app_settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
        return response

    register_exception_handlers(app)

    # Root endpoint for health check
    @app.get("/")
    async def root():
        return {"message": f"{app_settings.APP_NAME} API is running"}

    app.include_router(streams.router)
    return app

app = create_app()
