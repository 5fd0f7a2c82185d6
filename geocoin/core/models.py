"""Core data models: Point, Cell, Bounds, Cache, Inventory."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from geocoin.core.enums import Direction
from geocoin.core.errors import MalformedPersistedState


@dataclass(frozen=True, slots=True)
class Point:
    """Immutable continuous 2D position. ``x`` grows east, ``y`` grows north."""

    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets in tiles, mapped to Direction enum values
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True, slots=True)
class Cell:
    """Integer grid coordinate.

    Obtain cells through ``CoordinateGrid`` so that every reference to the
    same (i, j) shares one instance.
    """

    i: int
    j: int

    @property
    def key(self) -> str:
        """Stable serialization used as the CacheStateStore key."""
        return f"{self.i},{self.j}"

    def __repr__(self) -> str:
        return f"Cell({self.i}, {self.j})"


def parse_cell_key(key: str) -> tuple[int, int]:
    """Inverse of ``Cell.key``. Raises ValueError on malformed keys."""
    i_str, sep, j_str = key.partition(",")
    if not sep:
        raise ValueError(f"Not a cell key: {key!r}")
    return int(i_str), int(j_str)


def token_id(cell: Cell, serial: int) -> str:
    """Identifier of the *serial*-th (1-based) token minted by *cell*."""
    return f"{cell.i}:{cell.j}#{serial}"


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned rectangle given by its south-west and north-east corners."""

    south_west: Point
    north_east: Point


@dataclass(slots=True, eq=False)
class Cache:
    """A materialized, mutable token container bound to one cell.

    The token list is a stack: collect pops from the end, deposit pushes
    onto the end.
    """

    cell: Cell
    tokens: list[str] = field(default_factory=list)

    @property
    def coin_count(self) -> int:
        return len(self.tokens)

    def pop(self) -> str | None:
        return self.tokens.pop() if self.tokens else None

    def push(self, token: str) -> None:
        self.tokens.append(token)

    def __repr__(self) -> str:
        return f"Cache({self.cell.i}, {self.cell.j}, coins={len(self.tokens)})"


_token_list_ta = TypeAdapter(list[str])


@dataclass(slots=True)
class Inventory:
    """The player's token stack."""

    tokens: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tokens)

    def pop(self) -> str | None:
        return self.tokens.pop() if self.tokens else None

    def push(self, token: str) -> None:
        self.tokens.append(token)

    def clear(self) -> None:
        self.tokens.clear()

    def serialize(self) -> str:
        return json.dumps(self.tokens)

    @classmethod
    def deserialize(cls, text: str) -> Inventory:
        """Parse a JSON token list. Raises MalformedPersistedState."""
        try:
            tokens = _token_list_ta.validate_json(text)
        except ValidationError as exc:
            raise MalformedPersistedState(f"Unreadable inventory: {exc.error_count()} error(s)") from exc
        return cls(tokens=tokens)
