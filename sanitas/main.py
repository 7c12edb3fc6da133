"""Sanitas API — FastAPI application serving every endpoint for local development.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Endpoint routes delegate to the same pipeline the Lambda entry points use
    - CORS preflight configured from settings
    - Database initialized on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sanitas.api.error_handlers import register_error_handlers
from sanitas.api.routes import health, patients
from sanitas.config import get_settings
from sanitas.core.responses import DEFAULT_CORS_METHODS
from sanitas.infrastructure.database import init_db
from sanitas.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.postgres_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Sanitas API started")
    yield
    await manager.dispose()
    logger.info("Sanitas API shutting down")


app = FastAPI(title="Sanitas API", version="0.1.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=list(DEFAULT_CORS_METHODS),
    allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(patients.router)

register_error_handlers(app)
