"""Invitation Gallery API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as {"error": string}
    - CORS configured from settings (not hardcoded); credentials allowed for the session cookie
    - Database, session store and upload directory initialized on startup via lifespan
    - /uploads is mounted AFTER the API routers
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gallery.api.error_handlers import register_error_handlers
from gallery.api.routes import admin, health, invitations, sample_images, settings as settings_routes
from gallery.api.static import CachedStaticFiles
from gallery.config import get_settings
from gallery.infrastructure.database import init_db
from gallery.infrastructure.observability import setup_logging
from gallery.infrastructure.session_store import init_session_store

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
        await manager.create_all()
    init_session_store(
        settings.session_ttl_seconds, settings.session_store_max_entries,
    )
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Invitation Gallery API started")
    yield
    await manager.dispose()
    logger.info("Invitation Gallery API shutting down")


app = FastAPI(
    title="Invitation Gallery API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(invitations.router)
app.include_router(admin.router)
app.include_router(settings_routes.router)
app.include_router(sample_images.router)

app.mount(
    settings.upload_url_prefix.rstrip("/"),
    CachedStaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)
