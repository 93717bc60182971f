"""Interaction event channel adapters."""

from .channel import HttpEventChannel, InMemoryEventChannel, LogfireEventChannel

__all__ = ["HttpEventChannel", "LogfireEventChannel", "InMemoryEventChannel"]
