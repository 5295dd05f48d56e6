# nms_trade/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from typing import Optional

from .settings import Settings, settings as default_settings
from .errors import TradeAPIError
from .storage.sqlite_base import SQLiteDatabase
from .storage.schema import init_schema, get_schema_version
from .catalog.endpoints import items_router, stations_router
from .demands.endpoints import demands_router
from .migration.endpoints import migration_router

logger = logging.getLogger(__name__)


def _configure_logging(app_settings: Settings) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level="DEBUG" if app_settings.debug_mode else app_settings.log_level.upper(),
            format='%(asctime)s - %(name)s [%(levelname)s] - %(message)s'
        )
    logger.setLevel(logging.DEBUG if app_settings.debug_mode else app_settings.log_level.upper())


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def trade_api_error_handler(request: Request, exc: TradeAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"API: {request.method} {request.url.path} failed: {exc.error}")
    else:
        logger.warning(f"API: {request.method} {request.url.path} rejected ({exc.status_code}): {exc.error}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.error})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.warning(f"API: {request.method} {request.url.path} invalid request body/params: {message}")
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"API: Unexpected error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the trade API application.

    The SQLite database wrapper is created and schema-initialized in the
    lifespan and kept on ``app.state.db``; stores receive it through
    FastAPI dependencies.
    """
    app_settings = app_settings or default_settings
    _configure_logging(app_settings)

    @asynccontextmanager
    async def trade_app_lifespan(app_instance: FastAPI):
        logger.info("Application startup initiated.")
        db = SQLiteDatabase(app_settings.sqlite_db_path, timeout=app_settings.sqlite_timeout_seconds)
        await db.connect()
        await init_schema(db)
        app_instance.state.db = db
        logger.info(f"SQLite backend ready (schema version {await get_schema_version(db)}).")
        try:
            yield
        finally:
            logger.info("Application shutdown initiated.")
            await db.close()

    app = FastAPI(
        title=app_settings.app_name,
        description="Multi-tenant store of items, stations and per-station demand levels.",
        version="0.1.0",
        lifespan=trade_app_lifespan,
    )
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(TradeAPIError, trade_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    prefix = app_settings.api_prefix.rstrip("/")
    app.include_router(items_router, prefix=prefix)
    app.include_router(stations_router, prefix=prefix)
    app.include_router(demands_router, prefix=prefix)
    app.include_router(migration_router, prefix=prefix)

    @app.get(f"{prefix}/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    logger.info(f"{app_settings.app_name} configured with API prefix '{prefix or '/'}'.")
    return app


app = create_app()
