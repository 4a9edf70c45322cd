"""Logfire setup and instrumentation.

Domain services open their own spans, for example:

    with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
        ...

This module only wires Logfire into the process and the libraries around it.
"""

from typing import Any

import httpx
import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from discuss.config import Settings

# Path parameters copied onto request spans so traces can be filtered by thread
_TRACED_PATH_PARAMS = ("article_id", "comment_id")


def _should_send(settings: Settings) -> bool:
    """An explicit OBSERVABILITY__SEND_TO_LOGFIRE wins, else token presence."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process.

    Without a token and without an explicit send flag, spans and events
    only go to the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name="discuss-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
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


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    result = {**attributes}
    path_params = getattr(request, "path_params", None) or {}
    for name in _TRACED_PATH_PARAMS:
        if name in path_params:
            result[name] = str(path_params[name])
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health probes.

    Args:
        app: FastAPI application instance
    """
    # Headers are not captured: the auth_token cookie travels in them
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls="/health",
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the comment store engine.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
    logfire.info("SQLAlchemy instrumented", dialect=engine.dialect.name)


def instrument_httpx(client: httpx.AsyncClient) -> None:
    """Trace calls made by a comments API client.

    Args:
        client: Client owned by the comments API client
    """
    logfire.instrument_httpx(client)
