"""Product API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Services (settings, token codec, database manager) live on app.state,
      created by attach_services() and disposed by the lifespan

Design Decisions:
    - create_app(settings) factory: tests and scripts build isolated apps;
      `app` below is the uvicorn target (product_api.main:app)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from product_api.api.error_handlers import register_error_handlers
from product_api.api.routes import auth, health, products
from product_api.config import Settings, get_settings
from product_api.core.credentials import TokenCodec
from product_api.infrastructure.database import DatabaseSessionManager
from product_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def attach_services(
    app: FastAPI, settings: Settings,
    db_manager: DatabaseSessionManager | None = None,
) -> DatabaseSessionManager:
    """Construct per-app services and store them on app.state."""
    app.state.settings = settings
    app.state.token_codec = TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration_hours=settings.jwt_expiration_hours,
    )
    app.state.db_manager = db_manager or DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    return app.state.db_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db_manager = attach_services(
        app, settings, getattr(app.state, "db_manager", None),
    )
    if settings.database_create_schema:
        await db_manager.create_schema()
    logger.info("Product API started")
    yield
    await db_manager.close()
    logger.info("Product API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Product API", version=API_VERSION, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes: explicit registration
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(products.router)

    register_error_handlers(app)
    return app


app = create_app()
