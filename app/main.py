import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api_routers.v1 import api_router
from app.features.events.services.event_store import EventStore
from app.features.health.routes.health import router as health_router
from app.features.phones.services.phone_store import PhoneStore
from app.platform.clock import Clock
from app.platform.config import Settings, get_settings
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import LOG_FORMAT

# Configure logging to show INFO level messages
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """
    Build the application and its single pair of live stores.

    The stores live on `app.state` for the lifetime of the process and are
    handed to routes through `app.platform.dependencies`.
    """
    settings = settings or get_settings()
    clock = clock or Clock()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Live-state aggregation and broadcast for the Olimpico installation",
        version=VERSION,
        debug=settings.DEBUG,
    )

    app.state.settings = settings
    app.state.clock = clock
    app.state.event_store = EventStore(
        clock,
        ttl_seconds=settings.EVENT_TTL_SECONDS,
        active_window_seconds=settings.ACTIVE_WINDOW_SECONDS,
    )
    app.state.phone_store = PhoneStore(
        clock,
        ttl_seconds=settings.PHONE_TTL_SECONDS,
        active_window_seconds=settings.ACTIVE_WINDOW_SECONDS,
    )

    # Root endpoint for basic info
    @app.get("/", tags=["Info"])
    def root():
        return {
            "app_name": settings.APP_NAME,
            "description": "Phones stream sensor data; the projection reacts to all of them at once.",
            "version": VERSION,
            "docs_url": "/docs",
            "api_base": settings.API_V1_PREFIX,
        }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    logger.info(
        f"Installation ready: event TTL {settings.EVENT_TTL_SECONDS}s, "
        f"active window {settings.ACTIVE_WINDOW_SECONDS}s, phone poll {settings.PHONE_POLL_INTERVAL_SECONDS}s"
    )
    return app


app = create_app()
