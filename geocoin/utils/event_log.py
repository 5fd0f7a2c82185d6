"""Thread-safe event feed of game happenings exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameEvent:
    """A single entry in the event feed."""

    step: int                   # move counter at the time of the event
    category: str               # "move", "spawn", "evict", "collect", "deposit", "reset"
    message: str
    cell: tuple[int, int] | None = None


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Oldest events fall off once ``maxlen`` is reached.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int = 1000) -> None:
        self._buffer: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: GameEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def since_step(self, step: int) -> list[GameEvent]:
        """Return all events with step >= *step*."""
        with self._lock:
            return [e for e in self._buffer if e.step >= step]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
