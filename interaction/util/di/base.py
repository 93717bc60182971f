"""Provider base class shared by every DI provider."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure concerns that tests can swap for in-memory doubles
Component = Literal["persistence", "events", "directory"]


class ProviderBase(Provider):
    """Dishka provider carrying mock-selection metadata.

    A provider base with subclasses is a swappable component: one subclass
    sets ``__is_mock__ = True`` (test double), the other leaves it False.
    A provider without subclasses is always used as-is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
