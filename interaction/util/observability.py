"""Logfire setup for the interaction service.

Services log through ``logfire`` directly:

    with logfire.span("comment_service.fetch_thread", comment_id=comment_id):
        ...
        logfire.info("Thread fetched", comment_id=comment_id, node_count=n)

This module only configures the SDK once at startup and instruments the
libraries whose calls should appear as child spans (FastAPI requests,
SQLAlchemy queries, httpx calls to the broker and profile directory).
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from interaction.config import Settings

SERVICE_NAME = "interaction-service"


def _should_send(settings: Settings) -> bool:
    """Explicit flag wins, otherwise send only when a token is configured."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire.

    Without a token (OBSERVABILITY__LOGFIRE_TOKEN) output stays on the
    console. Sending can be forced either way with
    OBSERVABILITY__SEND_TO_LOGFIRE.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    config_kwargs = {
        "service_name": SERVICE_NAME,
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }
    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        git_sha=settings.git_sha,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app.

    The actor header is captured with the other request headers so a
    request span shows who performed a mutation.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        if hasattr(request, "headers"):
            result["actor_id"] = request.headers.get("x-user-id")
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through ``engine``.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Trace outbound httpx requests (event broker, profile directory)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
