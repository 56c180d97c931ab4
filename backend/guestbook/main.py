"""Guestbook API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GuestbookError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Messages file created and session reaper started on startup; reaper
      stopped on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Default admin password is allowed but logged on every boot (ERROR in production)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from guestbook.api.error_handlers import register_error_handlers
from guestbook.api.routes import auth, health, messages
from guestbook.api.security_headers import apply_security_headers
from guestbook.config import get_settings
from guestbook.core.credentials import resolve_admin_credentials
from guestbook.infrastructure.message_store import init_message_store
from guestbook.infrastructure.observability import setup_logging
from guestbook.infrastructure.session_manager import init_session_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    credentials = resolve_admin_credentials(
        settings.admin_username,
        settings.admin_password_hash,
        settings.admin_password,
    )
    if credentials.is_default:
        logger.log(
            logging.ERROR if settings.is_production else logging.WARNING,
            "Admin password not configured, using the built-in default. "
            "Set ADMIN_PASSWORD_HASH or ADMIN_PASSWORD before deploying.",
        )

    store = init_message_store(
        settings.messages_file,
        edit_window_days=settings.edit_window_days,
        default_page_limit=settings.default_page_limit,
        max_page_limit=settings.max_page_limit,
    )
    await store.initialize()

    sessions = init_session_manager(
        credentials,
        ttl_seconds=settings.session_ttl_hours * 3600,
        sweep_interval_seconds=settings.session_sweep_interval_seconds,
    )
    sessions.start()
    logger.info(
        f"{settings.app_name} API started ({settings.environment}), "
        f"messages at {settings.messages_file}",
    )
    yield
    await sessions.stop()
    logger.info(f"{settings.app_name} API shutting down")


app = FastAPI(title="Guestbook API", version="1.0.0", lifespan=lifespan)

# CORS from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    return apply_security_headers(await call_next(request))


if not settings.is_production:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            f"{request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path},
        )
        return await call_next(request)


register_error_handlers(app)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(messages.router)

# Static assets mounted AFTER API routes so /api/* takes precedence
if os.path.isdir("public/assets"):
    app.mount("/assets", StaticFiles(directory="public/assets"), name="assets")
