"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value, compared by its fields rather than identity.

    Used for catalog entries, profile snapshots and aggregation results
    that have no identity of their own.
    """

    model_config = ConfigDict(frozen=True)
