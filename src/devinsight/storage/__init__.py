"""Storage layer: interchangeable key-value backends."""

from .backend import KeyValueStore, MemoryStore, SQLiteStore

__all__ = ["KeyValueStore", "MemoryStore", "SQLiteStore"]
