import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_center.config import get_settings
from notification_center.infrastructure.notifications import notification_store_registry
from notification_center.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the active configuration on startup and drop every store on shutdown."""

    logger.info("Notification center started (timezone %s)", get_settings().app_timezone)
    yield
    notification_store_registry.clear()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="Notification Center", lifespan=lifespan)

    # The dashboard client runs on its own origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
