from __future__ import annotations

import pytest

from arena_maps.core import codec
from arena_maps.core.authoring import AuthoringSurface
from arena_maps.core.io import MemoryStorage
from arena_maps.core.loader import MapLoader
from arena_maps.core.tiles import TileCatalog, TileDefinition
from arena_maps.core.types import GridPosition, MapDocument, PlacedTile, Vec3


TEST_TILES = [
    TileDefinition("Grass", "Grass", (70, 170, 60)),
    TileDefinition("Stone", "Stone", (120, 120, 120)),
    TileDefinition("Vines", "Vines", (60, 150, 90), solid=False),
]


@pytest.fixture
def catalog() -> TileCatalog:
    return TileCatalog(TEST_TILES)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def surface(catalog, storage) -> AuthoringSurface:
    return AuthoringSurface(catalog, storage)


@pytest.fixture
def loader(catalog, storage) -> MapLoader:
    return MapLoader(catalog, storage)


def store(storage: MemoryStorage, document: MapDocument) -> None:
    storage.write_map(document.name, codec.encode(document))


def tile(name: str, x: int, y: int, background: bool = False) -> PlacedTile:
    return PlacedTile(name, GridPosition(x, y), background)


def spawn(x: float, y: float) -> Vec3:
    return Vec3(x, y, 0)
