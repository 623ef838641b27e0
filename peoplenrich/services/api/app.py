from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from peoplenrich.common.logging import get_logger
from peoplenrich.common.settings import get_settings
from peoplenrich.services.api.deps import close_attribute_lookup
from peoplenrich.services.api.errors import register_error_handlers
from peoplenrich.services.api.routers import health, persons

cfg = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    if cfg.db.create_tables:
        from peoplenrich.database.core.main import create_tables, wait_for_database

        wait_for_database()
        create_tables()
        logger.info("database schema ready")
    yield
    close_attribute_lookup()
    logger.info("shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="People Enrichment API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
        lifespan=_lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.api.cors_allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        expose_headers=cfg.api.cors_expose_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
        max_age=cfg.api.cors_max_age,
    )

    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(persons.router)
    return app

app = create_app()
