"""Reads and writes session state through a KeyValueStorage.

Every load degrades to "first visit" on a missing or malformed value;
every write is fire-and-forget.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ValidationError

from geocoin.core.cache_store import CacheStateStore
from geocoin.core.errors import MalformedPersistedState
from geocoin.core.models import Inventory, Point
from geocoin.storage.backends import KeyValueStorage

logger = logging.getLogger(__name__)

CACHE_STATES_KEY = "cache_states"
INVENTORY_KEY = "inventory"
POSITION_KEY = "player_position"


class PositionDocument(BaseModel):
    x: float | None = None
    y: float | None = None


class SessionPersistence:
    """Session-level load/save on top of a raw key-value storage."""

    __slots__ = ("_storage",)

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    # -- load --

    def load_store(self) -> CacheStateStore:
        text = self._storage.read(CACHE_STATES_KEY)
        if text is None:
            return CacheStateStore()
        try:
            store = CacheStateStore.deserialize(text)
        except MalformedPersistedState as exc:
            logger.warning("Discarding saved cache states: %s", exc)
            return CacheStateStore()
        logger.info("Loaded %d saved cache state(s)", len(store))
        return store

    def load_inventory(self) -> Inventory:
        text = self._storage.read(INVENTORY_KEY)
        if text is None:
            return Inventory()
        try:
            return Inventory.deserialize(text)
        except MalformedPersistedState as exc:
            logger.warning("Discarding saved inventory: %s", exc)
            return Inventory()

    def load_position(self) -> Point | None:
        text = self._storage.read(POSITION_KEY)
        if text is None:
            return None
        try:
            doc = PositionDocument.model_validate_json(text)
        except ValidationError:
            logger.warning("Discarding saved player position: unreadable")
            return None
        if doc.x is None or doc.y is None:
            return None
        return Point(doc.x, doc.y)

    # -- save --

    def save_store(self, store: CacheStateStore) -> None:
        self._write(CACHE_STATES_KEY, store.serialize())

    def save_inventory(self, inventory: Inventory) -> None:
        self._write(INVENTORY_KEY, inventory.serialize())

    def save_position(self, position: Point) -> None:
        self._write(POSITION_KEY, PositionDocument(x=position.x, y=position.y).model_dump_json())

    def _write(self, key: str, value: str) -> None:
        try:
            self._storage.write(key, value)
        except OSError as exc:
            logger.warning("Write of %r to durable storage failed: %s", key, exc)
