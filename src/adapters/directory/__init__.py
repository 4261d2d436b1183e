"""Directory adapters - Account store implementations."""

from .memory import InMemoryAccountDirectory

__all__ = ["InMemoryAccountDirectory"]
