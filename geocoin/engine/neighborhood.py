"""NeighborhoodManager — keeps the set of live caches in step with the player.

On every move the visibility window is recomputed. Caches that fall out of
it are committed to the CacheStateStore and removed from view; cells that
enter it and pass the spawn roll are materialized, resuming archived
contents when the store has them and minting a fresh deterministic token
sequence otherwise. Caches whose cells stay in the window are left alone:
same instance, no re-save, no notification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from geocoin.core.enums import TransferDirection
from geocoin.core.errors import InactiveCacheError
from geocoin.core.models import Cache, Cell, Inventory, Point
from geocoin.engine import transfer as transfers
from geocoin.engine.view import NullView, ViewListener

if TYPE_CHECKING:
    from geocoin.core.cache_store import CacheStateStore
    from geocoin.core.grid import CoordinateGrid
    from geocoin.systems.generator import CacheGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegenerationResult:
    """What one move did to the live cache set."""

    origin: Cell
    spawned: tuple[Cache, ...]
    evicted: tuple[Cache, ...]
    retained: int
    resumed: int            # spawned caches whose tokens came from the store

    @property
    def active_count(self) -> int:
        return self.retained + len(self.spawned)


class NeighborhoodManager:
    """Owns the live caches. The only writer of the store besides transfers."""

    __slots__ = ("_grid", "_generator", "_store", "_view", "_active")

    def __init__(
        self,
        grid: CoordinateGrid,
        generator: CacheGenerator,
        store: CacheStateStore,
        view: ViewListener | None = None,
    ) -> None:
        self._grid = grid
        self._generator = generator
        self._store = store
        self._view: ViewListener = view if view is not None else NullView()
        self._active: dict[Cell, Cache] = {}

    # -- read access --

    @property
    def active(self) -> Mapping[Cell, Cache]:
        return MappingProxyType(self._active)

    @property
    def store(self) -> CacheStateStore:
        return self._store

    def cache_at(self, cell: Cell) -> Cache | None:
        return self._active.get(cell)

    # -- regeneration --

    def on_player_moved(self, position: Point) -> RegenerationResult:
        window = self._grid.cells_near_point(position)
        in_window = set(window)

        evicted: list[Cache] = []
        for cell in [c for c in self._active if c not in in_window]:
            evicted.append(self._evict(cell))

        spawned: list[Cache] = []
        resumed = 0
        for cell in window:
            if cell in self._active or not self._generator.should_spawn(cell):
                continue
            cache, was_restored = self._materialize(cell)
            spawned.append(cache)
            resumed += was_restored

        result = RegenerationResult(
            origin=self._grid.cell_for_point(position),
            spawned=tuple(spawned),
            evicted=tuple(evicted),
            retained=len(self._active) - len(spawned),
            resumed=resumed,
        )
        logger.info(
            "Moved to %r: +%d caches (%d resumed), -%d caches, %d kept",
            result.origin, len(spawned), resumed, len(evicted), result.retained,
        )
        return result

    def _evict(self, cell: Cell) -> Cache:
        cache = self._active.pop(cell)
        self._store.save(cell.key, cache.tokens)
        self._view.remove_from_view(cache)
        logger.debug("Evicted %r", cache)
        return cache

    def _materialize(self, cell: Cell) -> tuple[Cache, bool]:
        tokens = self._store.restore(cell.key)
        restored = tokens is not None
        if tokens is None:
            tokens = self._generator.fresh_tokens(cell)
        cache = Cache(cell=cell, tokens=tokens)
        self._active[cell] = cache
        self._view.add_to_view(cache, self._grid.cell_bounds(cell))
        logger.debug("Spawned %r (%s)", cache, "resumed" if restored else "fresh")
        return cache, restored

    # -- player interaction --

    def transfer(
        self,
        cache: Cache,
        inventory: Inventory,
        direction: TransferDirection,
    ) -> str | None:
        """Collect from or deposit into a live cache. See ``transfer.transfer``."""
        if self._active.get(cache.cell) is not cache:
            raise InactiveCacheError(f"{cache!r} is not a live cache")
        return transfers.transfer(cache, inventory, direction, self._store)

    # -- bulk --

    def persist_all(self) -> int:
        """Commit every live cache to the store without evicting it."""
        for cell, cache in self._active.items():
            self._store.save(cell.key, cache.tokens)
        return len(self._active)

    def reset(self) -> None:
        """Drop every live cache and forget all archived state."""
        for cache in list(self._active.values()):
            self._view.remove_from_view(cache)
        self._active.clear()
        self._store.clear()
        logger.info("Neighborhood reset: store cleared")
