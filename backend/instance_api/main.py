"""Instance API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map InstanceAPIError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Instance store initialized on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py: main.py only wires things together
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from instance_api.api.error_handlers import register_error_handlers
from instance_api.api.routes import health, instances
from instance_api.config import get_settings
from instance_api.infrastructure.instance_store import close_store, init_store
from instance_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_store(
        settings.store_backend,
        redis_url=settings.redis_url,
        timeout_seconds=settings.redis_timeout_seconds,
    )
    logger.info("Instance API started")
    yield
    await close_store()
    logger.info("Instance API shutting down")


app = FastAPI(
    title="Instance API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.welcome_router)
app.include_router(health.router)
app.include_router(instances.router)

register_error_handlers(app)
