"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain entities.

    Entities are frozen. State changes produce a new instance via
    ``model_copy(update=...)`` which the service then hands to a repository.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
    )
