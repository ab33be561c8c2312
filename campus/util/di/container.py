"""Container assembly for the API process."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from campus.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container: every component is the real one.

    Tests assemble their own container with mocks, see ``tests/di``.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


@asynccontextmanager
async def close_container_on_shutdown(app: FastAPI) -> AsyncIterator[None]:
    """App lifespan. Closing the container disposes the database engine."""
    yield
    await app.state.dishka_container.close()


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app (stored as ``app.state.dishka_container``)."""
    setup_dishka(container, app)
