from __future__ import annotations
from .core.config import PipelineParams
from .core.tiles import TileCatalog, TileDefinition, DEFAULT_TILES, SPAWN_POINT_TILE, default_catalog
from .core.types import GridPosition, MapDocument, PlacedTile, Vec3
from .core.io import DirectoryStorage, MemoryStorage
from .core.authoring import AuthoringSurface
from .core.loader import GameSession, LoadedMap, MapLoader

__all__ = [
    "PipelineParams",
    "TileCatalog",
    "TileDefinition",
    "DEFAULT_TILES",
    "SPAWN_POINT_TILE",
    "default_catalog",
    "GridPosition",
    "MapDocument",
    "PlacedTile",
    "Vec3",
    "DirectoryStorage",
    "MemoryStorage",
    "AuthoringSurface",
    "GameSession",
    "LoadedMap",
    "MapLoader",
]
