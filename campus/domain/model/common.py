"""Shared base for the enrollment entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity. Services derive new states with ``model_copy(update=...)``
    and hand them to a repository to persist."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
