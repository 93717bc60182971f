"""User profile directory clients.

The directory is owned by the identity service. It answers two questions:
who a user is (name, avatar, generation, families) and how two users are
related.
"""

from typing import Optional

import httpx
import logfire
from pydantic import ValidationError as PydanticValidationError

from interaction.domain.service.profile_service import (
    ProfileDirectory,
    ProfileLookupError,
    UserProfile,
)
from interaction.domain.value import UserId


class HttpProfileDirectory(ProfileDirectory):
    """Profile directory backed by the identity service HTTP API."""

    def __init__(self, base_url: str, timeout: float = 5.0) -> None:
        """Initialize directory client.

        Args:
            base_url: Identity service base URL
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _get(self, path: str) -> Optional[dict]:
        """GET a JSON document, mapping 404 to None.

        Raises:
            ProfileLookupError: On transport errors, unexpected statuses or
                bodies that are not a JSON object
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.base_url}{path}", timeout=self.timeout
                )

                if response.status_code == 404:
                    return None

                if response.status_code != 200:
                    logfire.error(
                        "Directory request failed",
                        path=path,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise ProfileLookupError(
                        f"Directory request failed: {response.status_code}"
                    )

                try:
                    data = response.json()
                except ValueError as e:
                    logfire.error("Directory returned invalid JSON", path=path, error=str(e))
                    raise ProfileLookupError(f"Invalid JSON from directory: {e}")

                if not isinstance(data, dict):
                    logfire.error(
                        "Directory returned unexpected payload",
                        path=path,
                        payload_type=type(data).__name__,
                    )
                    raise ProfileLookupError("Directory returned a non-object payload")

                return data

        except httpx.HTTPError as e:
            logfire.error("Directory HTTP error", path=path, error=str(e))
            raise ProfileLookupError(f"HTTP error querying directory: {e}")

    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        """Fetch a user's profile.

        Raises:
            ProfileLookupError: If the directory cannot be reached or
                returns a malformed profile
        """
        data = await self._get(f"/users/{user_id}/profile")
        if data is None:
            return None
        try:
            return UserProfile.model_validate({**data, "user_id": user_id})
        except PydanticValidationError as e:
            raise ProfileLookupError(f"Malformed profile for {user_id}: {e}")

    async def get_relationship(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[str]:
        """Fetch the relationship label of ``other_id`` as seen by ``user_id``."""
        data = await self._get(f"/users/{user_id}/relationships/{other_id}")
        if data is None:
            return None
        return data.get("relationship")


class InMemoryProfileDirectory(ProfileDirectory):
    """Profile directory held in memory.

    Used in tests and in local development when no directory is configured.
    """

    def __init__(self) -> None:
        self._profiles: dict[UserId, UserProfile] = {}
        self._relationships: dict[tuple[UserId, UserId], str] = {}
        self.unavailable = False

    def add_profile(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def add_relationship(self, user_id: UserId, other_id: UserId, label: str) -> None:
        """Record how ``other_id`` is related to ``user_id``."""
        self._relationships[(user_id, other_id)] = label

    def _check_available(self) -> None:
        if self.unavailable:
            raise ProfileLookupError("Directory unavailable")

    async def get_profile(self, user_id: UserId) -> Optional[UserProfile]:
        self._check_available()
        return self._profiles.get(user_id)

    async def get_relationship(
        self, user_id: UserId, other_id: UserId
    ) -> Optional[str]:
        self._check_available()
        return self._relationships.get((user_id, other_id))
