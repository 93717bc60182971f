"""Swappable infrastructure providers.

The production subclasses are imported here so that ``__subclasses__()``
finds them when the container is assembled. Test doubles register
themselves the same way when ``tests.di`` is imported.
"""

from .directory import DirectoryProvider, ProdDirectoryProvider
from .events import EventsProvider, ProdEventsProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "DirectoryProvider",
    "EventsProvider",
    "PersistenceProvider",
    "ProdDirectoryProvider",
    "ProdEventsProvider",
    "ProdPersistenceProvider",
]
