"""Mock providers for testing."""

from .directory import MockDirectoryProvider
from .events import MockEventsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockDirectoryProvider",
    "MockEventsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
