"""Core data models, the coordinate grid and the cache state store."""

from geocoin.core.enums import Direction, TransferDirection
from geocoin.core.errors import MalformedPersistedState
from geocoin.core.models import Bounds, Cache, Cell, Inventory, Point
from geocoin.core.grid import CoordinateGrid
from geocoin.core.cache_store import CacheStateStore

__all__ = [
    "Bounds",
    "Cache",
    "CacheStateStore",
    "Cell",
    "CoordinateGrid",
    "Direction",
    "Inventory",
    "MalformedPersistedState",
    "Point",
    "TransferDirection",
]
