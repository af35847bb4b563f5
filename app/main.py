import logging
from typing import Optional

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.api.routes import redirect
from app.integrations.discord.client import AttachmentRefresher, DiscordRefreshClient


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else logging.INFO

    # Configure application logging
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Set log level for app modules
    logging.getLogger("app").setLevel(level)


def create_app(
    settings: Optional[Settings] = None,
    refresher: Optional[AttachmentRefresher] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are loaded once here and, with the refresher, stored on
    app.state for the request handlers. Both can be injected for tests.
    """
    if settings is None:
        settings = get_settings()
    if refresher is None:
        refresher = DiscordRefreshClient(
            endpoint=settings.refresh_endpoint,
            timeout=settings.refresh_timeout,
        )

    configure_logging(settings)

    # Docs are disabled: the catch-all redirect route owns every path
    app = FastAPI(
        title=settings.app_name,
        description="Redirects expired Discord attachment links to refreshed ones",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.refresher = refresher

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": settings.app_name}

    # Must be registered last
    app.include_router(redirect.router, tags=["Redirect"])

    return app
