"""Coordinate grid: continuous positions to canonical integer cells."""

from __future__ import annotations

import math
from collections import OrderedDict

from geocoin.core.models import Bounds, Cell, Point


class CoordinateGrid:
    """Partitions the plane into square cells of ``tile_width`` and hands out
    one shared ``Cell`` instance per (i, j).

    The visibility window around a point is the square
    ``[oi - r, oi + r) x [oj - r, oj + r)`` in cell coordinates, where
    ``(oi, oj)`` is the cell containing the point and ``r`` is
    ``visibility_radius``. The lower edge is inclusive and the upper edge is
    exclusive, so the window holds exactly ``(2r)**2`` cells and is not
    centred on the origin cell.

    The canonical registry is unbounded unless ``registry_limit`` is given, in
    which case the least recently referenced cells are forgotten first. The
    limit never drops below one full window so that every cell of the current
    window keeps its identity.
    """

    __slots__ = ("tile_width", "visibility_radius", "_known_cells", "_limit")

    def __init__(
        self,
        tile_width: float,
        visibility_radius: int,
        registry_limit: int | None = None,
    ) -> None:
        if not tile_width > 0:
            raise ValueError(f"tile_width must be positive, got {tile_width!r}")
        if visibility_radius < 0:
            raise ValueError(f"visibility_radius must be >= 0, got {visibility_radius!r}")
        self.tile_width = tile_width
        self.visibility_radius = visibility_radius
        self._known_cells: OrderedDict[tuple[int, int], Cell] = OrderedDict()
        if registry_limit is not None:
            registry_limit = max(registry_limit, self.window_size, 1)
        self._limit = registry_limit

    # -- registry --

    @property
    def window_size(self) -> int:
        return (2 * self.visibility_radius) ** 2

    def __len__(self) -> int:
        return len(self._known_cells)

    @property
    def known_cell_count(self) -> int:
        return len(self._known_cells)

    def cell_at(self, i: int, j: int) -> Cell:
        """Return the canonical cell for (i, j), registering it on first use."""
        key = (i, j)
        cell = self._known_cells.get(key)
        if cell is None:
            cell = Cell(i, j)
            self._known_cells[key] = cell
            if self._limit is not None and len(self._known_cells) > self._limit:
                self._known_cells.popitem(last=False)
        elif self._limit is not None:
            self._known_cells.move_to_end(key)
        return cell

    # -- geometry --

    def cell_for_point(self, point: Point) -> Cell:
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            raise ValueError(f"Point must be finite, got {point!r}")
        return self.cell_at(
            math.floor(point.x / self.tile_width),
            math.floor(point.y / self.tile_width),
        )

    def cell_bounds(self, cell: Cell) -> Bounds:
        w = self.tile_width
        return Bounds(
            south_west=Point(cell.i * w, cell.j * w),
            north_east=Point((cell.i + 1) * w, (cell.j + 1) * w),
        )

    def cells_near_point(self, point: Point) -> list[Cell]:
        """Return the visibility window around *point*, row-major by i then j."""
        origin = self.cell_for_point(point)
        r = self.visibility_radius
        return [
            self.cell_at(origin.i + di, origin.j + dj)
            for di in range(-r, r)
            for dj in range(-r, r)
        ]
