# idcard_api/main.py
from contextlib import asynccontextmanager
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.cache import CacheManager
from .core.config import Settings, get_settings
from .core.database import build_database
from .core.error_handlers import register_exception_handlers
from .core.logging import setup_logging
from .services.google_identity import GoogleIdentityVerifier

# Import all routers
from .routers import (
    auth,
    bulk_import,
    classes,
    health,
    login_logs,
    schools,
    sessions,
    students,
    teachers,
    templates,
    users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} ({settings.environment})")

    if settings.auto_create_tables:
        await app.state.db.create_all()
        logger.info("Database tables ensured")

    await app.state.cache.connect()
    if app.state.cache.enabled:
        logger.info("Cache initialized")

    yield

    logger.info(f"Shutting down {settings.app_name}")
    await app.state.cache.close()
    await app.state.db.dispose()
    logger.info("Shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Multi-school ID Card Administration API",
        description="Schools, sessions, classes, student and teacher rosters for ID card production",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = build_database(settings)
    app.state.cache = CacheManager(settings.redis_url)
    app.state.google_verifier = GoogleIdentityVerifier(settings.google_client_id)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    register_exception_handlers(app)

    # Include all routers
    for module in (
        health,
        auth,
        schools,
        users,
        login_logs,
        sessions,
        classes,
        students,
        teachers,
        templates,
        bulk_import,
    ):
        app.include_router(module.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {
            "message": f"{settings.app_name} v{settings.app_version}",
            "version": settings.app_version,
            "docs": "/docs",
            "status": "active",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("idcard_api.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
