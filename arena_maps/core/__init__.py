from __future__ import annotations

from .config import PipelineParams
from .tiles import (
    DEFAULT_TILES,
    SPAWN_POINT_TILE,
    TileCatalog,
    TileDefinition,
    TileName,
    default_catalog,
)
from .types import GridPosition, MapDocument, PlacedTile, Vec3
from .errors import (
    MapError,
    MapNotFoundError,
    MapParseError,
    SaveProblem,
    SaveValidationError,
    TileNotFoundError,
)
from .io import DirectoryStorage, MapStorage, MemoryStorage
from .geometry import TileGeometry, bounds_center
from .authoring import AuthoringSurface
from .loader import GameSession, LoadedMap, MapLoader, SessionOwner, WorldTile
from . import codec as codec

__all__ = [
    "PipelineParams",
    "DEFAULT_TILES",
    "SPAWN_POINT_TILE",
    "TileCatalog",
    "TileDefinition",
    "TileName",
    "default_catalog",
    "GridPosition",
    "MapDocument",
    "PlacedTile",
    "Vec3",
    "MapError",
    "MapNotFoundError",
    "MapParseError",
    "SaveProblem",
    "SaveValidationError",
    "TileNotFoundError",
    "DirectoryStorage",
    "MapStorage",
    "MemoryStorage",
    "TileGeometry",
    "bounds_center",
    "AuthoringSurface",
    "GameSession",
    "LoadedMap",
    "MapLoader",
    "SessionOwner",
    "WorldTile",
    "codec",
]
