"""FastAPI application factory for the enrollment back office."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus.config import Settings
from campus.interface.api.errors import register_error_handlers
from campus.interface.api.routes import (
    enrollments,
    health,
    invitations,
    sessions,
    students,
)
from campus.util.di.container import (
    close_container_on_shutdown,
    create_container,
    setup_di,
)
from campus.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (
    health.router,
    invitations.router,
    sessions.router,
    students.router,
    enrollments.router,
)


def _allow_frontend(app: FastAPI, settings: Settings) -> None:
    """Let the admin frontend (and a local dev server) call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create the API application.

    Logfire has to be configured first; scripts/start_app.py does it in
    production and tests/conftest.py in tests.

    Args:
        container: DI container to use; defaults to the production container
    """
    instrument_httpx()

    app = FastAPI(
        title="Campus Enrollment API",
        description="Back office for invitations, academic sessions and course enrollments",
        version="0.1.0",
        lifespan=close_container_on_shutdown,
    )
    instrument_fastapi(app)
    _allow_frontend(app, Settings())

    setup_di(app, container or create_container())
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)

    return app


# Imported by uvicorn as campus.interface.api.app:app
app = create_app()
