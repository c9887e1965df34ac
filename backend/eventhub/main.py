"""
EventHub API - Main Application Entry Point

Event discovery and ticket booking:
- Public catalog: categories, events, featured events, search
- Admin/organizer event management
- Bookings with price verification and per-event serialized capacity checks
- Structured logging with request correlation, Prometheus metrics
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventhub.core.config import Settings, get_settings
from eventhub.core.exceptions import register_exception_handlers
from eventhub.core.logging import setup_logging, get_logger
from eventhub.core.metrics import metrics_endpoint
from eventhub.api.router import api_router
from eventhub.api.middleware import RequestLoggingMiddleware
from eventhub.infrastructure import KeyedLock, MemoryStore, SessionStore
from eventhub.services.auth_service import ensure_admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    settings: Settings = app.state.settings
    setup_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    if settings.BOOTSTRAP_ADMIN_USERNAME and settings.BOOTSTRAP_ADMIN_PASSWORD:
        await ensure_admin(
            app.state.store,
            settings.BOOTSTRAP_ADMIN_USERNAME,
            settings.BOOTSTRAP_ADMIN_PASSWORD,
            settings.BOOTSTRAP_ADMIN_EMAIL,
            settings.BCRYPT_ROUNDS,
        )

    yield

    purged = app.state.sessions.purge_expired()
    logger.info("application_shutdown", expired_sessions_purged=purged)


def create_app(settings: Optional[Settings] = None, store: Optional[MemoryStore] = None) -> FastAPI:
    """
    Build the application. Each app owns its store, session store and booking
    locks; tests pass a fresh store per test.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Event discovery and ticket booking API",
        lifespan=lifespan,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.store = store if store is not None else MemoryStore(seed_categories=settings.SEED_CATEGORIES)
    app.state.sessions = SessionStore(ttl_seconds=settings.SESSION_TTL_SECONDS)
    app.state.booking_locks = KeyedLock()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS.split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for Docker and load balancers."""
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "sessions": len(app.state.sessions),
        }

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        return metrics_endpoint()

    return app


app = create_app()
