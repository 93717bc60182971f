"""Dependency injection wiring for the interaction service."""

from typing import Type

from interaction.util.di.application import ProdApplicationProvider
from interaction.util.di.base import Component, ProviderBase
from interaction.util.di.core import ProdConfigProvider
from interaction.util.di.domain import ProdDomainProvider
from interaction.util.di.infrastructure import (
    DirectoryProvider,
    EventsProvider,
    PersistenceProvider,
    ProdDirectoryProvider,
    ProdEventsProvider,
    ProdPersistenceProvider,
)

# Order does not matter to dishka; grouped for readability
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    EventsProvider,
    DirectoryProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Args:
        base: Entry from PROVIDERS
        use_mock: Select the test double of a swappable component

    Returns:
        ``base`` itself for plain providers, otherwise the subclass whose
        ``__is_mock__`` flag equals ``use_mock``

    Raises:
        ValueError: If the component has no matching implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    component = getattr(base, "__mock_component__", None) or base.__name__
    flavour = "mock" if use_mock else "production"
    raise ValueError(f"Component {component!r} has no {flavour} provider")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "DirectoryProvider",
    "EventsProvider",
    "PersistenceProvider",
    "ProdDirectoryProvider",
    "ProdEventsProvider",
    "ProdPersistenceProvider",
]
