"""Actor identity from the ``X-User-Id`` request header.

Authentication happens upstream (API gateway). This service trusts the
header and only checks that it carries a UUID.
"""

from uuid import UUID

from fastapi import HTTPException, status

ACTOR_HEADER = "X-User-Id"


def optional_actor(x_user_id: str | None) -> str | None:
    """Actor ID for read endpoints (None for anonymous or malformed headers)."""
    if not x_user_id:
        return None
    try:
        return str(UUID(x_user_id))
    except ValueError:
        return None


def require_actor(x_user_id: str | None, action: str) -> str:
    """Actor ID for mutations.

    Args:
        x_user_id: Raw header value
        action: Description used in the error message

    Returns:
        Normalized UUID string

    Raises:
        HTTPException: 401 if the header is missing or not a UUID
    """
    actor_id = optional_actor(x_user_id)
    if actor_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"A valid {ACTOR_HEADER} header is required to {action}",
        )
    return actor_id
