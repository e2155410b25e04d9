from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Protocol, Sequence, Tuple

import pygame

from . import codec
from .errors import TileNotFoundError
from .geometry import TileGeometry, bounds_center
from .io import MapStorage
from .tiles import TileCatalog, TileDefinition
from .types import GridPosition, Vec3

logger = logging.getLogger(__name__)


@dataclass
class WorldTile:
    definition: TileDefinition
    grid: GridPosition
    position: Vec3
    is_background: bool = False
    # Solid shape in map-local grid units, one cell wide.
    collider: Optional[pygame.Rect] = None

    @property
    def tile_name(self) -> str:
        return self.definition.name


@dataclass
class LoadedMap:
    name: str
    tiles: Tuple[WorldTile, ...]
    spawn_points: List[Vec3]
    offset: Vec3
    geometry: TileGeometry

    @property
    def lowest_point(self) -> float:
        return self.geometry.lowest_point()

    def surface_positions(self) -> FrozenSet[Vec3]:
        return self.geometry.surface_positions()

    def solid_colliders(self) -> List[pygame.Rect]:
        return [t.collider for t in self.tiles if t.collider is not None]


class SessionOwner(Protocol):
    def receive_spawn_points(self, spawn_points: Sequence[Vec3]) -> None: ...

    def notify_map_ready(self, loaded: LoadedMap) -> None: ...


@dataclass
class GameSession:
    spawn_points: List[Vec3] = field(default_factory=list)
    current_map: Optional[LoadedMap] = None
    on_map_loaded: List[Callable[[LoadedMap], None]] = field(default_factory=list)

    def receive_spawn_points(self, spawn_points: Sequence[Vec3]) -> None:
        self.spawn_points = list(spawn_points)

    def notify_map_ready(self, loaded: LoadedMap) -> None:
        self.current_map = loaded
        for cb in self.on_map_loaded:
            cb(loaded)


class MapLoader:
    def __init__(self, catalog: TileCatalog, storage: MapStorage) -> None:
        self.catalog = catalog
        self.storage = storage

    def load_map(self, name: str, session: Optional[SessionOwner] = None) -> LoadedMap:
        """
        Build world tiles for the map stored under `name`, centered on the origin.

        A missing or malformed map raises before anything is built. Tiles
        whose type is not in the catalog are logged and left out.
        """
        document = codec.decode(self.storage.read_map(name))

        placed: List[Tuple[TileDefinition, GridPosition, bool]] = []
        for tile in document.tiles:
            try:
                definition = self.catalog.resolve(tile.tile_name)
            except TileNotFoundError as e:
                logger.warning("Map '%s', tile at %s skipped: %s", name, tuple(tile.position), e)
                continue
            placed.append((definition, tile.position, tile.is_background))

        offset = bounds_center(pos for _d, pos, _bg in placed)
        logger.debug("Map '%s' centering offset: %s", name, tuple(offset))

        tiles = tuple(
            WorldTile(
                definition=definition,
                grid=pos,
                position=Vec3(*pos) - offset,
                is_background=is_bg,
                collider=self._make_collider(definition, pos, is_bg),
            )
            for definition, pos, is_bg in placed
        )
        spawn_points = [Vec3(*sp) - offset for sp in document.spawn_points]

        loaded = LoadedMap(
            name=name,
            tiles=tiles,
            spawn_points=spawn_points,
            offset=offset,
            geometry=TileGeometry((t.grid for t in tiles), offset),
        )

        if session is not None:
            session.receive_spawn_points(list(spawn_points))
            session.notify_map_ready(loaded)

        logger.info(
            "Loaded map '%s': %d tiles (%d skipped), %d spawn points.",
            name, len(tiles), len(document.tiles) - len(tiles), len(spawn_points),
        )
        return loaded

    @staticmethod
    def _make_collider(definition: TileDefinition, pos: GridPosition, is_background: bool) -> Optional[pygame.Rect]:
        if is_background or not definition.solid:
            return None
        return pygame.Rect(pos.x, pos.y, 1, 1)
