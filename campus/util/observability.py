"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Enrollment approved", enrollment_id=str(enrollment.id))

    # Manual spans for critical operations
    with logfire.span("accept_invitation.execute", token=mask_token(token)):
        ...

Spans are named ``<component>.<operation>``; invitation tokens are only
ever logged masked.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from campus.config import Settings


SERVICE_NAME = "campus-enrollment-api"


def mask_token(token: object) -> str:
    """First eight characters of an invitation token, safe to log."""
    return str(token)[:8] + "..."


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the running environment.

    Telemetry is sent to Logfire cloud when explicitly enabled with
    OBSERVABILITY__SEND_TO_LOGFIRE, or when OBSERVABILITY__LOGFIRE_TOKEN is
    set. Otherwise output stays on the console.

    Args:
        settings: Application settings
    """
    token = settings.observability.logfire_token
    send_to_logfire = settings.observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(token)

    config_kwargs = {
        "service_name": SERVICE_NAME,
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if token:
        config_kwargs["token"] = token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(token),
    )


def _request_attributes(request, attributes):
    """Keep method and path; request bodies carry passwords and tokens."""
    return {
        "errors": attributes.get("errors"),
        "method": getattr(request, "method", None),
        "path": request.url.path,
    }


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the application.

    Authorization headers and validated request values are not captured.
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, including the session start and close cascades."""
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,
    )


def instrument_httpx() -> None:
    """Trace outbound calls to the identity provider."""
    logfire.instrument_httpx()
