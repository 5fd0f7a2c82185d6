"""Rendering collaborator interface and the in-process view model."""

from __future__ import annotations

from typing import Iterator, Protocol

from geocoin.core.models import Bounds, Cache, Cell


class ViewListener(Protocol):
    """Receives cache visibility changes. Never queried back by the engine."""

    def add_to_view(self, cache: Cache, bounds: Bounds) -> None: ...

    def remove_from_view(self, cache: Cache) -> None: ...


class NullView:
    """Listener that discards every notification."""

    def add_to_view(self, cache: Cache, bounds: Bounds) -> None:
        pass

    def remove_from_view(self, cache: Cache) -> None:
        pass


class ViewState:
    """Tracks what is currently on screen, for clients that poll instead of
    listening (the HTTP state endpoint)."""

    __slots__ = ("_shown",)

    def __init__(self) -> None:
        self._shown: dict[Cell, tuple[Cache, Bounds]] = {}

    def add_to_view(self, cache: Cache, bounds: Bounds) -> None:
        self._shown[cache.cell] = (cache, bounds)

    def remove_from_view(self, cache: Cache) -> None:
        entry = self._shown.get(cache.cell)
        if entry is not None and entry[0] is cache:
            del self._shown[cache.cell]

    def __len__(self) -> int:
        return len(self._shown)

    def __contains__(self, cell: object) -> bool:
        return cell in self._shown

    def __iter__(self) -> Iterator[tuple[Cache, Bounds]]:
        return iter(list(self._shown.values()))

    def bounds_of(self, cell: Cell) -> Bounds | None:
        entry = self._shown.get(cell)
        return entry[1] if entry else None
