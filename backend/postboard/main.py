"""Postboard API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PostboardError -> {message, status, data?} envelopes
    - CORS configured from settings (not hardcoded)
    - Database and media directory initialized on startup via lifespan context manager
    - SQLite databases get their tables created on startup; Postgres uses alembic

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Images served by api/routes/media_upload.py through the MediaStorage dependency
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postboard.api.error_handlers import register_error_handlers
from postboard.api.gql.schema import create_graphql_router
from postboard.api.routes import health, media_upload
from postboard.config import get_settings
from postboard.db.session import create_schema
from postboard.infrastructure.database import init_db
from postboard.infrastructure.media_storage import get_media_storage
from postboard.infrastructure.observability import setup_logging

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
    if settings.database_url.startswith("sqlite"):
        await create_schema(manager.engine)
    get_media_storage().ensure_directory()
    logger.info("Postboard API started")
    yield
    await manager.dispose()
    logger.info("Postboard API shutting down")


app = FastAPI(title="Postboard API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(media_upload.router)
app.include_router(create_graphql_router(settings.graphiql))

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("postboard.main:app", host="0.0.0.0", port=get_settings().port)
