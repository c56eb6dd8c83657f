"""
Storage adapters for FloodGuard hexagonal architecture.

This module contains the persistence adapters implementing the
storage ports: an in-memory store and an aiosqlite-backed store.
"""

from .memory_store import InMemoryFloodStore
from .sqlite_store import SQLiteFloodStore

__all__ = ["InMemoryFloodStore", "SQLiteFloodStore"]
