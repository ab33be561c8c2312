"""HTTP mapping for domain errors."""

from uuid import uuid4

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from campus.domain.error import (
    DomainError,
    ExternalServiceError,
    ForbiddenError,
    NotFoundError,
    SagaFailure,
    StateConflictError,
    UnauthorizedError,
    ValidationError,
)


def record_handled_error(request: Request, exc: Exception) -> None:
    """Remember an error that was turned into a response.

    Handlers run before the request scope closes, so the unit of work never
    sees these exceptions; it reads them from ``request.state`` instead.
    """
    request.state.handled_error = exc


def handled_error(request: Request) -> Exception | None:
    return getattr(request.state, "handled_error", None)


# Client errors: the message is safe to return as-is
CLIENT_ERROR_STATUS: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    StateConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}


async def client_error_handler(request: Request, exc: Exception) -> JSONResponse:
    record_handled_error(request, exc)
    status_code = next(
        (
            code
            for error_type, code in CLIENT_ERROR_STATUS.items()
            if isinstance(exc, error_type)
        ),
        status.HTTP_400_BAD_REQUEST,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


async def value_error_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """Value objects built inside use cases reject malformed input."""
    record_handled_error(request, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "; ".join(e["msg"] for e in exc.errors()),
            "error": "ValidationError",
        },
    )


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide provider and saga details behind a correlation id."""
    record_handled_error(request, exc)
    correlation_id = str(uuid4())
    attributes = {
        "correlation_id": correlation_id,
        "path": request.url.path,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }
    if exc.__cause__ is not None:
        attributes["cause"] = str(exc.__cause__)
    if isinstance(exc, SagaFailure):
        attributes["step"] = exc.step
        attributes["rolled_back"] = exc.rolled_back
        attributes["compensations"] = [c.model_dump() for c in exc.compensations]
    logfire.error("Request failed", **attributes)

    status_code = (
        status.HTTP_502_BAD_GATEWAY
        if isinstance(exc, ExternalServiceError)
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": "The request could not be completed",
            "correlation_id": correlation_id,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    for error_type in CLIENT_ERROR_STATUS:
        app.add_exception_handler(error_type, client_error_handler)
    app.add_exception_handler(ExternalServiceError, server_error_handler)
    app.add_exception_handler(SagaFailure, server_error_handler)
    app.add_exception_handler(PydanticValidationError, value_error_handler)
