"""User profile directory adapters."""

from .client import HttpProfileDirectory, InMemoryProfileDirectory

__all__ = ["HttpProfileDirectory", "InMemoryProfileDirectory"]
