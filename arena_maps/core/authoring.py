from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional

from . import codec
from .config import PipelineParams
from .errors import SaveProblem, SaveValidationError
from .geometry import TileGeometry
from .io import MapStorage
from .tiles import TileCatalog, TileName
from .types import GridPosition, MapDocument, PlacedTile, Vec3

logger = logging.getLogger(__name__)


class AuthoringSurface:
    """
    Editing session over an in-memory tile set.

    Every occupied cell holds exactly one PlacedTile (type + background flag).
    Spawn points form their own ordered layer on top of the tiles: they may
    share a cell with a tile, and a loaded map may stack several on one cell.
    """

    def __init__(
        self,
        catalog: TileCatalog,
        storage: MapStorage,
        params: Optional[PipelineParams] = None,
    ) -> None:
        self.catalog = catalog
        self.storage = storage
        self.params = params or PipelineParams()

        self._tiles: Dict[GridPosition, PlacedTile] = {}
        self._spawn_points: List[Vec3] = []
        self._revision: int = 0
        self._geometry: Optional[TileGeometry] = None
        self._geometry_revision: int = -1

        self.on_spawn_count_changed: List[Callable[[int], None]] = []

        self.active_brush: TileName = self.params.default_tile
        self.set_active_brush(self.params.default_tile)

    # ------------------------------------------------------------- Brush

    @property
    def spawn_point_tile(self) -> TileName:
        return self.params.spawn_point_tile

    def set_active_brush(self, tile_name: TileName) -> None:
        self._check_placeable(tile_name)
        self.active_brush = tile_name

    def _check_placeable(self, tile_name: TileName) -> None:
        if tile_name != self.spawn_point_tile:
            self.catalog.resolve(tile_name)

    # ------------------------------------------------------------- Tiles

    def tile_at(self, pos: GridPosition) -> Optional[PlacedTile]:
        return self._tiles.get(GridPosition(*pos))

    def tiles(self) -> List[PlacedTile]:
        """Regular tiles in placement order; spawn points are not included."""
        return list(self._tiles.values())

    def spawn_points(self) -> List[Vec3]:
        return list(self._spawn_points)

    def spawn_cells(self) -> List[GridPosition]:
        """The cell each spawn point is drawn in."""
        return [GridPosition.snap(sp.x, sp.y) for sp in self._spawn_points]

    def place_tile(self, pos: GridPosition, background: bool = False) -> Optional[PlacedTile]:
        """
        Place the active brush at `pos`.
        Returns the new tile, or None when the same type was already there.
        A spawn brush adds a spawn point and leaves any tile in the cell alone.
        """
        pos = GridPosition(*pos)
        brush = self.active_brush
        self._check_placeable(brush)

        if brush == self.spawn_point_tile:
            if pos in self.spawn_cells():
                return None
            self._spawn_points.append(Vec3(*pos))
            self._spawn_count_changed()
            return PlacedTile(brush, pos, background)

        existing = self._tiles.get(pos)
        if existing is not None:
            if existing.tile_name == brush:
                return None
            self._remove(existing)

        tile = PlacedTile(brush, pos, background)
        self._tiles[pos] = tile
        self._touch()
        return tile

    def remove_tile_at(self, pos: GridPosition) -> Optional[PlacedTile]:
        """
        Erase the top-most content of `pos`: its spawn points if it has any,
        otherwise its tile.
        """
        pos = GridPosition(*pos)
        kept = [sp for sp, cell in zip(self._spawn_points, self.spawn_cells()) if cell != pos]
        if len(kept) != len(self._spawn_points):
            self._spawn_points = kept
            self._spawn_count_changed()
            return PlacedTile(self.spawn_point_tile, pos)

        existing = self._tiles.get(pos)
        if existing is None:
            return None
        self._remove(existing)
        return existing

    def clear(self) -> None:
        had_spawns = bool(self._spawn_points)
        self._tiles.clear()
        self._spawn_points.clear()
        self._touch()
        if had_spawns:
            self._spawn_count_changed()

    def _remove(self, tile: PlacedTile) -> None:
        del self._tiles[tile.position]
        self._touch()

    def _touch(self) -> None:
        self._revision += 1

    def spawn_point_count(self) -> int:
        return len(self._spawn_points)

    def _spawn_count_changed(self) -> None:
        count = self.spawn_point_count()
        for cb in self.on_spawn_count_changed:
            cb(count)

    def geometry(self) -> TileGeometry:
        """Derived facts for the current tiles, rebuilt only after an edit."""
        if self._geometry is None or self._geometry_revision != self._revision:
            self._geometry = TileGeometry(self._tiles)
            self._geometry_revision = self._revision
        return self._geometry

    # ------------------------------------------------------------- Save/Load

    def validate_for_save(self, name: str) -> List[SaveProblem]:
        problems: List[SaveProblem] = []
        if self.spawn_point_count() < self.params.min_spawn_points:
            problems.append(SaveProblem.INSUFFICIENT_SPAWN_POINTS)
        if not name.strip():
            problems.append(SaveProblem.MISSING_MAP_NAME)
        return problems

    def to_document(self, name: str) -> MapDocument:
        return MapDocument(
            name=name,
            tiles=self.tiles(),
            spawn_points=self.spawn_points(),
        )

    def save(self, name: str) -> MapDocument:
        problems = self.validate_for_save(name)
        if problems:
            raise SaveValidationError(problems, self.params.min_spawn_points)

        document = self.to_document(name)
        self.storage.write_map(name, codec.encode(document))
        logger.info(
            "Saved map '%s' (%d tiles, %d spawn points).",
            name, len(document.tiles), len(document.spawn_points),
        )
        return document

    def load(self, name: str) -> MapDocument:
        """
        Replace the current tiles and spawn points with the map stored under `name`.
        The current content is kept if the map is missing or malformed.
        """
        document = codec.decode(self.storage.read_map(name))

        self._tiles.clear()
        for tile in document.tiles:
            if tile.tile_name not in self.catalog:
                logger.warning("Skipping tile at %s: the tile '%s' cannot be found.",
                               tuple(tile.position), tile.tile_name)
                continue
            self._tiles[tile.position] = tile
        self._spawn_points = list(document.spawn_points)

        self._touch()
        self._spawn_count_changed()
        logger.info("Loaded map '%s'.", name)
        return document

    def list_maps(self) -> List[str]:
        return self.storage.list_maps()
