"""LAMP API - FastAPI application entry point.

Invariants:
    - Schema routes materialized from services/component_registry.py: no
      hand-written route registration for schema components
    - The published OpenAPI document is synthesized from the same components;
      FastAPI's built-in document is disabled
    - Global error handlers map LampError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.materialize_routes import materialize_routes
from app.api.routes import health, openapi_spec
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.config import get_settings
from app.services.component_registry import build_components

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    logger.info("LAMP API started")
    yield
    logger.info("LAMP API shutting down")
    await manager.dispose()


settings = get_settings()
app = FastAPI(
    title=settings.api_title, version=settings.api_version,
    lifespan=lifespan, openapi_url=None, docs_url=None, redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

# Operational routes: explicit registration
app.include_router(health.router)
app.include_router(openapi_spec.build_router(settings.openapi_path))

# Schema routes: one source of truth for bindings and document
components = build_components()
materialize_routes(app, components)
openapi_spec.publish_openapi_document(app, components, settings.openapi_info())
