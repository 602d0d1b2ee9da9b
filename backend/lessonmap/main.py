"""LessonMap API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LessonMapError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, geocoder HTTP client and file store created in lifespan, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploaded images served from the upload directory under /uploads/images
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from lessonmap.api.error_handlers import register_error_handlers
from lessonmap.api.routes import health, lessons
from lessonmap.config import get_settings
from lessonmap.infrastructure.database import close_db, init_db
from lessonmap.infrastructure.file_store import LocalFileStore
from lessonmap.infrastructure.geocoding import GoogleGeocoder
from lessonmap.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    http_client = httpx.AsyncClient(timeout=settings.geocoding_timeout_seconds)
    app.state.geocoder = GoogleGeocoder(
        settings.google_api_key,
        http_client,
        base_url=settings.geocoding_base_url,
        max_retries=settings.geocoding_max_retries,
        base_delay_ms=settings.geocoding_base_delay_ms,
        max_delay_ms=settings.geocoding_max_delay_ms,
    )
    file_store = LocalFileStore(
        settings.upload_dir,
        max_bytes=settings.upload_max_bytes,
        allowed_types=settings.upload_allowed_types,
    )
    file_store.ensure_directory()
    app.state.file_store = file_store
    logger.info("LessonMap API started")
    yield
    logger.info("LessonMap API shutting down")
    await http_client.aclose()
    await close_db()


app = FastAPI(
    title="LessonMap API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(lessons.router)

# check_dir=False: the directory is created in lifespan, after import
app.mount(
    "/uploads/images",
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="images",
)
