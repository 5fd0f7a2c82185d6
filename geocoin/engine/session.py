"""GameSession — one player's world, wired together explicitly.

Holds every piece of mutable game state (grid registry, cache store, live
caches, inventory, position) so nothing lives in module globals. All
operations run to completion synchronously; callers that share a session
across threads must serialize access themselves (see ``GameManager``).
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

from geocoin.core.enums import Direction, TransferDirection
from geocoin.core.errors import InactiveCacheError
from geocoin.core.grid import CoordinateGrid
from geocoin.core.models import DIRECTION_OFFSETS, Cache, Cell, Point
from geocoin.engine.neighborhood import NeighborhoodManager, RegenerationResult
from geocoin.engine.transfer import token_census
from geocoin.engine.view import ViewListener
from geocoin.storage.backends import JsonFileStorage, KeyValueStorage, MemoryStorage
from geocoin.storage.persistence import SessionPersistence
from geocoin.systems.generator import CacheGenerator
from geocoin.systems.rng import DeterministicGenerator
from geocoin.utils.event_log import EventLog, GameEvent

if TYPE_CHECKING:
    from geocoin.config import GameConfig

logger = logging.getLogger(__name__)


def storage_for(config: GameConfig) -> KeyValueStorage:
    if config.storage_path:
        return JsonFileStorage(config.storage_path)
    return MemoryStorage()


class GameSession:
    """The explicit context object passed to every game operation."""

    def __init__(
        self,
        config: GameConfig,
        storage: KeyValueStorage | None = None,
        view: ViewListener | None = None,
        events: EventLog | None = None,
    ) -> None:
        self.config = config
        self.events = events if events is not None else EventLog()
        self.persistence = SessionPersistence(storage if storage is not None else storage_for(config))

        self.grid = CoordinateGrid(config.tile_width, config.visibility_radius, config.registry_limit)
        self.rng = DeterministicGenerator(config.world_seed)
        self.generator = CacheGenerator.from_config(config, self.rng)

        self.store = self.persistence.load_store()
        self.inventory = self.persistence.load_inventory()
        self.position: Point = self.persistence.load_position() or self.start_position
        self.moves = 0

        self.neighborhood = NeighborhoodManager(self.grid, self.generator, self.store, view)

    @property
    def start_position(self) -> Point:
        return Point(self.config.start_x, self.config.start_y)

    @property
    def current_cell(self) -> Cell:
        return self.grid.cell_for_point(self.position)

    @property
    def active_caches(self) -> list[Cache]:
        return list(self.neighborhood.active.values())

    # -- movement --

    def start(self) -> RegenerationResult:
        """Materialize the neighborhood around the (possibly resumed) position."""
        logger.info("Session starting at %r (seed=%d)", self.position, self.rng.seed)
        return self.move_to(self.position)

    def move_to(self, position: Point) -> RegenerationResult:
        self.position = position
        self.moves += 1
        result = self.neighborhood.on_player_moved(position)
        self._record_move(result)
        self.persistence.save_store(self.store)
        self.persistence.save_position(position)
        return result

    def step(self, direction: Direction) -> RegenerationResult:
        """Move one tile in a cardinal direction.

        The player lands on the center of the neighboring cell. Stepping
        from the cell index rather than adding ``tile_width`` to the float
        position keeps repeated steps from drifting back across a boundary.
        """
        dx, dy = DIRECTION_OFFSETS[direction]
        cell = self.current_cell
        w = self.config.tile_width
        return self.move_to(Point((cell.i + dx + 0.5) * w, (cell.j + dy + 0.5) * w))

    def _record_move(self, result: RegenerationResult) -> None:
        origin = (result.origin.i, result.origin.j)
        self.events.append(GameEvent(
            self.moves, "move",
            f"Player at cell {origin}: {result.active_count} caches nearby",
            origin,
        ))
        for cache in result.evicted:
            self.events.append(GameEvent(
                self.moves, "evict", f"Cache {cache.cell.key} left view", (cache.cell.i, cache.cell.j),
            ))
        for cache in result.spawned:
            self.events.append(GameEvent(
                self.moves, "spawn",
                f"Cache {cache.cell.key} appeared with {cache.coin_count} coins",
                (cache.cell.i, cache.cell.j),
            ))

    # -- transfers --

    def collect(self, cell: Cell) -> str | None:
        return self._transfer(cell, TransferDirection.COLLECT)

    def deposit(self, cell: Cell) -> str | None:
        return self._transfer(cell, TransferDirection.DEPOSIT)

    def _transfer(self, cell: Cell, direction: TransferDirection) -> str | None:
        cache = self.neighborhood.cache_at(cell)
        if cache is None:
            raise InactiveCacheError(f"No live cache at {cell!r}")
        token = self.neighborhood.transfer(cache, self.inventory, direction)
        if token is None:
            return None
        verb = direction.name.lower()
        self.events.append(GameEvent(
            self.moves, verb, f"{verb.capitalize()}ed coin {token} at cache {cell.key}", (cell.i, cell.j),
        ))
        self.persistence.save_store(self.store)
        self.persistence.save_inventory(self.inventory)
        return token

    # -- lifecycle --

    def census(self) -> Counter[str]:
        return token_census(self.neighborhood.active.values(), self.store, self.inventory)

    def reset(self) -> RegenerationResult:
        """Forget all progress and start over at the start position."""
        self.neighborhood.reset()
        self.inventory.clear()
        self.events.clear()
        self.moves = 0
        self.persistence.save_inventory(self.inventory)
        self.events.append(GameEvent(0, "reset", "Game reset"))
        logger.info("Game reset")
        return self.move_to(self.start_position)

    def save(self) -> int:
        """Commit live caches, then write store, inventory and position."""
        committed = self.neighborhood.persist_all()
        self.persistence.save_store(self.store)
        self.persistence.save_inventory(self.inventory)
        self.persistence.save_position(self.position)
        return committed

    def close(self) -> None:
        committed = self.save()
        logger.info("Session closed: %d live caches committed", committed)
