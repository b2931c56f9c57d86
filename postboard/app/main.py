"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from postboard.app.exception_handlers import configure_exception_handlers
from postboard.app.lifespan import lifespan
from postboard.app.router import setup_routers
from postboard.core.settings import get_app_settings, get_graphql_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Settings are loaded once and cached via LRU cache.
    """
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        description=app_settings.description,
        version=app_settings.version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    setup_routers(app, get_graphql_settings())
    return app


# Application instance for uvicorn
app = create_app()
