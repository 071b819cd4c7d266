"""Logfire setup for the moderation service.

Services and repositories call ``logfire`` directly (spans around each
moderation operation, ``info``/``warn``/``error`` for outcomes). This module
only configures the SDK and instruments the HTTP app and the database engine.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from scripthub.config import Settings

SERVICE_NAME = "scripthub-moderation"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire from settings.

    Spans are sent to Logfire cloud when OBSERVABILITY__SEND_TO_LOGFIRE is
    true, or when it is unset and OBSERVABILITY__LOGFIRE_TOKEN is present.
    Otherwise output stays on the console.
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token or None,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, recording the acting user header.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(app, capture_headers=True)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the engine behind the vote and flag ledgers.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
