from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import TileNotFoundError

TileName = str
Color = Tuple[int, int, int]

SPAWN_POINT_TILE: TileName = "SpawnPoint"
SPAWN_POINT_COLOR: Color = (0, 255, 0)


@dataclass(frozen=True)
class TileDefinition:
    name: TileName
    label: str
    color: Color
    solid: bool = True
    sprite: Optional[str] = None


DEFAULT_TILES: List[TileDefinition] = [
    TileDefinition("Grass", "Grass", (70, 170, 60)),
    TileDefinition("Dirt", "Dirt", (130, 90, 50)),
    TileDefinition("Stone", "Stone", (120, 120, 120)),
    TileDefinition("StoneBrick", "Stone Brick", (90, 90, 100)),
    TileDefinition("Wood", "Wood", (160, 110, 60)),
    TileDefinition("Leaves", "Leaves", (40, 120, 40)),
    TileDefinition("Vines", "Vines", (60, 150, 90), solid=False),
]


class TileCatalog:
    """
    Read-only registry of tile definitions keyed by name.
    Populated once; the name index is built up front so every lookup is O(1).
    """

    def __init__(self, definitions: Iterable[TileDefinition]) -> None:
        self._definitions: List[TileDefinition] = []
        self._by_name: Dict[TileName, TileDefinition] = {}

        for definition in definitions:
            if definition.name in self._by_name:
                raise ValueError(f"Duplicate tile definition '{definition.name}'.")
            if definition.name == SPAWN_POINT_TILE:
                raise ValueError(f"'{SPAWN_POINT_TILE}' is reserved for spawn points.")
            self._definitions.append(definition)
            self._by_name[definition.name] = definition

    def resolve(self, name: TileName) -> TileDefinition:
        try:
            return self._by_name[name]
        except KeyError:
            raise TileNotFoundError(name) from None

    def get(self, name: TileName) -> Optional[TileDefinition]:
        return self._by_name.get(name)

    def names(self) -> List[TileName]:
        return [d.name for d in self._definitions]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[TileDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


def default_catalog() -> TileCatalog:
    return TileCatalog(DEFAULT_TILES)
