"""FastAPI application."""

from fastapi import FastAPI

from scripthub.config import Settings
from scripthub.interface.api.routes import flags, health, moderation, votes
from scripthub.util.di.container import create_container, setup_di
from scripthub.util.logging import setup_logging
from scripthub.util.observability import instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    setup_logging(settings)

    app_instance = FastAPI(
        title="ScriptHub Moderation API",
        description="Voting, flagging and removal eligibility for hosted user scripts",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(flags.router)
    app_instance.include_router(moderation.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
