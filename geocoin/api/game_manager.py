"""GameManager — serializes API requests onto one GameSession.

FastAPI runs sync handlers on a threadpool; the game core is strictly
single-threaded, so every operation and every state read takes ``_lock``
and runs to completion before the next one starts.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from geocoin.core.enums import Direction
from geocoin.core.models import Cell, Point
from geocoin.engine.neighborhood import RegenerationResult
from geocoin.engine.session import GameSession
from geocoin.engine.view import ViewState
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.storage.backends import KeyValueStorage

logger = logging.getLogger(__name__)


class GameManager:
    """Owns the session, its view model and the lock around both."""

    def __init__(self, config: GameConfig, storage: KeyValueStorage | None = None) -> None:
        self.config = config
        self._storage = storage
        self._lock = threading.Lock()
        self._event_log = EventLog()
        self._view = ViewState()
        self._session = GameSession(config, storage=storage, view=self._view, events=self._event_log)
        self._session.start()

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @contextmanager
    def locked(self) -> Iterator[tuple[GameSession, ViewState]]:
        """Hold the lock while reading session state for a response."""
        with self._lock:
            yield self._session, self._view

    # -- commands --

    def step(self, direction: Direction) -> RegenerationResult:
        with self._lock:
            return self._session.step(direction)

    def move_to(self, position: Point) -> RegenerationResult:
        with self._lock:
            return self._session.move_to(position)

    def collect(self, i: int, j: int) -> str | None:
        with self._lock:
            return self._session.collect(Cell(i, j))

    def deposit(self, i: int, j: int) -> str | None:
        with self._lock:
            return self._session.deposit(Cell(i, j))

    def reset(self) -> RegenerationResult:
        with self._lock:
            return self._session.reset()

    def save(self) -> int:
        with self._lock:
            return self._session.save()

    def shutdown(self) -> None:
        with self._lock:
            self._session.close()
        logger.info("GameManager shut down")
