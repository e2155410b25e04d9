from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, NamedTuple, Union

from .tiles import TileName

Number = Union[int, float]


class GridPosition(NamedTuple):
    x: int
    y: int
    z: int = 0

    @classmethod
    def snap(cls, x: float, y: float) -> "GridPosition":
        """Round a world coordinate to the cell it falls in."""
        return cls(int(round(x)), int(round(y)), 0)

    def above(self) -> "GridPosition":
        return GridPosition(self.x, self.y + 1, self.z)


class Vec3(NamedTuple):
    x: Number
    y: Number
    z: Number = 0

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)


ORIGIN = Vec3(0, 0, 0)


@dataclass(frozen=True)
class PlacedTile:
    tile_name: TileName
    position: GridPosition
    is_background: bool = False


@dataclass
class MapDocument:
    name: str
    tiles: List[PlacedTile] = field(default_factory=list)
    spawn_points: List[Vec3] = field(default_factory=list)
