"""
FastAPI application entry point.
Mounts routes, middleware (CORS, request logging, Prometheus) and error handlers.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from app.api.router import api_router
from app.config import get_settings
from app.core.errors import register_exception_handlers
from app.db import models  # noqa: F401 - register models on the metadata
from app.db.base import Base
from app.db.session import engine

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: optionally create tables (local SQLite runs). Shutdown: dispose the pool."""
    if settings.create_tables_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")
    logger.info("%s starting up", settings.app_name)
    yield
    await engine.dispose()
    logger.info("%s shutdown complete", settings.app_name)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Product catalog: public listing, admin-only mutations, JWT auth with roles.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for the browser frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            ms,
        )
        return response

    register_exception_handlers(app)

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {"message": "Backend server running"}

    return app


app = create_app()
