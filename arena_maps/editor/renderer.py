from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Dict, List, Tuple

import pygame

from arena_maps.core.authoring import AuthoringSurface
from arena_maps.core.tiles import SPAWN_POINT_COLOR, TileCatalog, TileName
from arena_maps.core.types import GridPosition
from .config import RenderParams


MISSING_COLOR: Tuple[int, int, int] = (255, 0, 255)


class PygameRenderer:
    """
    Handles drawing:
    - Map view (camera + zoom), y axis pointing up
    - Sidebar palette (fixed size, independent from zoom)
    """

    def __init__(self, params: RenderParams, catalog: TileCatalog, spawn_point_tile: TileName) -> None:
        self.params = params
        self.catalog = catalog
        self.spawn_point_tile = spawn_point_tile
        self.surface: Optional[AuthoringSurface] = None

        # Pixel offset of the view's top-left corner; cell (0, 0) starts at pixel (0, 0)
        self.camera_x: float = 0.0
        self.camera_y: float = 0.0

        self.selected_tile: TileName = ""

        self.font: Optional[pygame.font.Font] = None

        self.palette_items: List[TileName] = catalog.names() + [spawn_point_tile]

        # Fixed palette configuration (does not change with zoom)
        self.palette_tile_size: int = 32
        self.palette_offset_y: int = 0  # set by the app layout

        # Tile textures
        self.tile_images: Dict[str, pygame.Surface] = {}
        self._swatches: Dict[Tuple[str, int], pygame.Surface] = {}
        self._tile_images_loaded: bool = False

    # ------------------------------------------------------------------ API

    def set_surface(self, surface: AuthoringSurface) -> None:
        self.surface = surface
        self.center_camera()

    def set_selected_tile(self, tile_name: TileName) -> None:
        self.selected_tile = tile_name

    def center_camera(self) -> None:
        screen = pygame.display.get_surface()
        if screen is None:
            self.camera_x = 0.0
            self.camera_y = 0.0
            return
        width, height = screen.get_size()
        self.camera_x = -(width - self.params.sidebar_width_px) / 2
        self.camera_y = -height / 2

    def ensure_font(self) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 16)

    def ensure_tile_images(self) -> None:
        """
        Load tile images for definitions that name a sprite file,
        looked up in the configured asset dir.
        """
        if self._tile_images_loaded:
            return
        self._tile_images_loaded = True

        asset_dir = Path(self.params.tile_asset_dir)
        if not asset_dir.exists():
            return

        for definition in self.catalog:
            if not definition.sprite:
                continue
            path = asset_dir / definition.sprite
            if path.exists():
                try:
                    img = pygame.image.load(path.as_posix()).convert_alpha()
                except pygame.error:
                    continue
                self.tile_images[definition.name] = img

    def _get_scaled_tile_image(self, tile_name: str, size: int) -> Optional[pygame.Surface]:
        img = self.tile_images.get(tile_name)
        if img is None:
            return None
        if img.get_width() == size and img.get_height() == size:
            return img
        return pygame.transform.smoothscale(img, (size, size))

    def _get_color_swatch(self, tile_name: str, size: int) -> pygame.Surface:
        key = (tile_name, size)
        swatch = self._swatches.get(key)
        if swatch is None:
            swatch = pygame.Surface((size, size))
            swatch.fill(self.tile_color(tile_name))
            self._swatches[key] = swatch
        return swatch

    def tile_color(self, tile_name: TileName) -> Tuple[int, int, int]:
        if tile_name == self.spawn_point_tile:
            return SPAWN_POINT_COLOR
        definition = self.catalog.get(tile_name)
        return definition.color if definition else MISSING_COLOR

    # ------------------------------------------------------------- Camera

    def move_camera(self, dx: float, dy: float) -> None:
        self.camera_x += dx
        self.camera_y += dy

    def change_zoom(self, delta: int) -> None:
        screen = pygame.display.get_surface()
        if screen is None:
            return

        old_ts = self.params.tile_size
        new_ts = max(8, min(96, old_ts + delta))
        if new_ts == old_ts:
            return

        width, height = screen.get_size()
        map_view_width = width - self.params.sidebar_width_px

        # keep the cell under the view center fixed
        center_tile_x = (self.camera_x + map_view_width / 2) / old_ts
        center_tile_y = (self.camera_y + height / 2) / old_ts

        self.params.tile_size = new_ts
        self.camera_x = center_tile_x * new_ts - map_view_width / 2
        self.camera_y = center_tile_y * new_ts - height / 2

    # -------------------------------------------------------- Coords helpers

    def is_in_map(self, x: int, y: int) -> bool:
        screen = pygame.display.get_surface()
        if screen is None:
            return False
        width, _ = screen.get_size()
        return x < (width - self.params.sidebar_width_px)

    def is_in_palette(self, x: int, y: int) -> bool:
        screen = pygame.display.get_surface()
        if screen is None:
            return False
        width, _ = screen.get_size()
        map_view_width = width - self.params.sidebar_width_px
        # palette is only the area on the right *below* palette_offset_y
        return x >= map_view_width and y >= self.palette_offset_y

    def get_map_coords_from_mouse(self, x: int, y: int) -> GridPosition:
        tile_size = self.params.tile_size
        gx = math.floor((self.camera_x + x) / tile_size)
        gy = -math.floor((self.camera_y + y) / tile_size)
        return GridPosition(gx, gy)

    def cell_rect(self, pos: GridPosition) -> pygame.Rect:
        tile_size = self.params.tile_size
        sx = math.floor(pos.x * tile_size - self.camera_x)
        sy = math.floor(-pos.y * tile_size - self.camera_y)
        return pygame.Rect(sx, sy, tile_size, tile_size)

    def get_palette_index_from_mouse(self, x: int, y: int) -> int:
        if not self.is_in_palette(x, y):
            return -1

        margin = 4
        rel_y = y - (self.palette_offset_y + margin)
        if rel_y < 0:
            return -1
        return int(rel_y // (self.palette_tile_size + margin))

    # ---------------------------------------------------------------- Draw

    def draw(self) -> None:
        screen = pygame.display.get_surface()
        if screen is None:
            return

        self.ensure_font()
        self.ensure_tile_images()
        assert self.font is not None

        width, height = screen.get_size()
        sidebar_width = self.params.sidebar_width_px

        map_view_rect = pygame.Rect(0, 0, width - sidebar_width, height)
        palette_rect = pygame.Rect(width - sidebar_width, 0, sidebar_width, height)

        screen.fill(self.params.background_color)

        if self.surface is not None:
            self._draw_map(screen, map_view_rect)

        self._draw_palette(screen, palette_rect)

    def _draw_map(self, screen: pygame.Surface, map_view_rect: pygame.Rect) -> None:
        assert self.surface is not None
        tile_size = self.params.tile_size

        if self.params.show_grid:
            self._draw_grid_lines(screen, map_view_rect)

        for tile in self.surface.tiles():
            rect = self.cell_rect(tile.position)
            if not map_view_rect.colliderect(rect):
                continue

            # try texture, fallback to solid color
            img = self._get_scaled_tile_image(tile.tile_name, tile_size)
            if img is None:
                img = self._get_color_swatch(tile.tile_name, tile_size)
            if tile.is_background:
                img = img.copy()
                img.set_alpha(self.params.background_tile_alpha)
            screen.blit(img, rect)

        # spawn markers sit on top of whatever tile shares their cell
        marker_size = max(4, tile_size // 2)
        for cell in self.surface.spawn_cells():
            rect = self.cell_rect(cell)
            if not map_view_rect.colliderect(rect):
                continue
            marker_rect = pygame.Rect(0, 0, marker_size, marker_size)
            marker_rect.center = rect.center
            pygame.draw.rect(screen, SPAWN_POINT_COLOR, marker_rect)

        # origin marker
        origin = self.cell_rect(GridPosition(0, 0))
        pygame.draw.rect(screen, (200, 60, 60), origin, 1)

    def _draw_grid_lines(self, screen: pygame.Surface, map_view_rect: pygame.Rect) -> None:
        tile_size = self.params.tile_size
        color = (30, 30, 36)
        start_x = -int(self.camera_x % tile_size)
        for x in range(start_x, map_view_rect.right, tile_size):
            pygame.draw.line(screen, color, (x, 0), (x, map_view_rect.bottom))
        start_y = -int(self.camera_y % tile_size)
        for y in range(start_y, map_view_rect.bottom, tile_size):
            pygame.draw.line(screen, color, (0, y), (map_view_rect.right, y))

    def _draw_palette(self, screen: pygame.Surface, palette_rect: pygame.Rect) -> None:
        tile_size = self.palette_tile_size
        margin = 4
        pygame.draw.rect(screen, (10, 10, 10), palette_rect)

        self.ensure_font()
        assert self.font is not None

        start_y = max(self.palette_offset_y, palette_rect.y) + margin

        for i, tile_name in enumerate(self.palette_items):
            y = start_y + i * (tile_size + margin)
            x = palette_rect.x + margin

            tile_rect = pygame.Rect(x, y, tile_size, tile_size)

            img = self._get_scaled_tile_image(tile_name, tile_size)
            if img is not None:
                pygame.draw.rect(screen, (0, 0, 0), tile_rect)  # small bg
                screen.blit(img, tile_rect)
            else:
                pygame.draw.rect(screen, self.tile_color(tile_name), tile_rect)

            if tile_name == self.selected_tile:
                pygame.draw.rect(screen, (255, 255, 0), tile_rect, 3)
            else:
                pygame.draw.rect(screen, (60, 60, 60), tile_rect, 1)

            definition = self.catalog.get(tile_name)
            label = definition.label if definition else "Spawn point"
            text_surf = self.font.render(label, True, (220, 220, 220))
            text_rect = text_surf.get_rect(
                midleft=(tile_rect.right + 8, tile_rect.centery)
            )
            screen.blit(text_surf, text_rect)
