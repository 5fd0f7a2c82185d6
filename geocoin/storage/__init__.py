"""Durable key-value storage and session persistence."""

from geocoin.storage.backends import JsonFileStorage, KeyValueStorage, MemoryStorage
from geocoin.storage.persistence import SessionPersistence

__all__ = ["JsonFileStorage", "KeyValueStorage", "MemoryStorage", "SessionPersistence"]
