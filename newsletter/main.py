"""Newsletter API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map NewsletterError → status + body (api/error_handlers.py)
    - Database pool, email client and password-hash workers created on startup
      via lifespan and released on shutdown
    - Session cookies signed with settings.hmac_secret (never hardcoded)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
      (ADR: FastAPI 0.128)
    - Signed-cookie sessions (SessionMiddleware) over a server-side store: the
      session carries one user id and an optional flash message
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from newsletter.api.error_handlers import register_error_handlers
from newsletter.api.routes import (
    admin, health, home, login, newsletters, subscriptions, subscriptions_confirm,
)
from newsletter.config import get_settings
from newsletter.infrastructure.database import close_db, init_db
from newsletter.infrastructure.email_client import (
    close_email_client, init_email_client,
)
from newsletter.infrastructure.observability import setup_logging
from newsletter.infrastructure.password_hashing import (
    init_password_hash_workers, shutdown_password_hash_workers,
)

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
    init_email_client(
        settings.email_client_base_url,
        settings.email_client_sender_email,
        settings.email_client_authorization_token,
        settings.email_client_timeout_milliseconds,
    )
    init_password_hash_workers(settings.password_hash_workers)
    logger.info("Newsletter API started")
    yield
    logger.info("Newsletter API shutting down")
    await close_email_client()
    await close_db()
    await shutdown_password_hash_workers()


def create_app() -> FastAPI:
    settings = get_settings()
    application = FastAPI(
        title="Newsletter API", version="1.0.0", lifespan=lifespan,
    )
    application.add_middleware(
        SessionMiddleware,
        secret_key=settings.hmac_secret.get_secret_value(),
        same_site="strict",
    )

    # Routes — explicit registration (ExMA: no convention-over-config)
    application.include_router(home.router)
    application.include_router(health.router)
    application.include_router(subscriptions.router)
    application.include_router(subscriptions_confirm.router)
    application.include_router(newsletters.router)
    application.include_router(login.router)
    application.include_router(admin.router)

    register_error_handlers(application)
    return application


app = create_app()
