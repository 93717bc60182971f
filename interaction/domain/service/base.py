"""Base service class for domain services."""

from interaction.domain.error import ValidationError


class Service:
    """Base class for all domain services.

    Domain services hold the business rules of one aggregate and coordinate
    its repository with collaborators such as the event emitter.
    """

    pass


def check_page(limit: int, offset: int) -> None:
    """Reject page bounds a listing cannot serve.

    Raises:
        ValidationError: If limit is below 1 or offset is negative
    """
    if limit < 1:
        raise ValidationError("limit must be at least 1")
    if offset < 0:
        raise ValidationError("offset cannot be negative")
