"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Orchestrates domain services for one request model.

    Use cases are request scoped and hold services, never state.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
