"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interaction.config import Settings
from interaction.interface.api.errors import register_exception_handlers
from interaction.interface.api.identity import ACTOR_HEADER
from interaction.interface.api.routes import comments, health, moderation, reactions
from interaction.util.di.container import create_container, setup_di
from interaction.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()

    # Event broker and profile directory calls go through httpx
    instrument_httpx()

    app_instance = FastAPI(
        title="Family Interaction API",
        description="Comment threads, moderation and reactions on family content",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            ACTOR_HEADER,
            "Content-Type",
            "Accept",
            "Origin",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(moderation.router)
    app_instance.include_router(reactions.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
