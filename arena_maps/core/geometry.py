from __future__ import annotations
from functools import cached_property
from typing import FrozenSet, Iterable, Tuple

from .types import ORIGIN, GridPosition, Vec3


def bounds_center(cells: Iterable[GridPosition]) -> Vec3:
    """
    Center of the axis-aligned bounding box over the x/y of `cells`.
    An empty set has a zero-size box at the origin.
    """
    cells = list(cells)
    if not cells:
        return ORIGIN

    min_x = min(c.x for c in cells)
    max_x = max(c.x for c in cells)
    min_y = min(c.y for c in cells)
    max_y = max(c.y for c in cells)
    return Vec3((min_x + max_x) / 2, (min_y + max_y) / 2, 0)


class TileGeometry:
    """
    Derived facts over a fixed set of occupied cells.

    Cells are integer map-local positions; results are reported in world
    space, i.e. shifted by -offset. Each fact is computed on first access
    and kept for the lifetime of the instance, so build a new one whenever
    the tile set changes.
    """

    def __init__(self, cells: Iterable[GridPosition], offset: Vec3 = ORIGIN) -> None:
        self.cells: Tuple[GridPosition, ...] = tuple(cells)
        self.offset = offset

    def surface_positions(self) -> FrozenSet[Vec3]:
        return self._surface_positions

    def lowest_point(self) -> float:
        return self._lowest_point

    @cached_property
    def _surface_positions(self) -> FrozenSet[Vec3]:
        occupied = set(self.cells)
        return frozenset(
            self._to_world(cell.above())
            for cell in self.cells
            if cell.above() not in occupied
        )

    @cached_property
    def _lowest_point(self) -> float:
        lowest = 0
        for cell in self.cells:
            y = cell.y - self.offset.y
            if y < lowest:
                lowest = y
        return lowest

    def _to_world(self, cell: GridPosition) -> Vec3:
        return Vec3(*cell) - self.offset
