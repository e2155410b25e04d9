from __future__ import annotations

import logging
import sys

import pygame

from arena_maps.core.authoring import AuthoringSurface
from arena_maps.core.errors import MapError
from arena_maps.core.io import DirectoryStorage
from arena_maps.core.tiles import TileCatalog, default_catalog

from .config import AppConfig
from .renderer import PygameRenderer
from .ui.widgets import Button, TextInput, MenuDropDown, draw_label

logger = logging.getLogger(__name__)


class MapEditorApp:
    def __init__(self, config: AppConfig, catalog: TileCatalog | None = None) -> None:
        self.cfg = config
        self.catalog = catalog or default_catalog()
        self.storage = DirectoryStorage(config.pipeline.maps_dir)
        self.surface = AuthoringSurface(self.catalog, self.storage, config.pipeline)

        self.renderer = PygameRenderer(
            config.render, self.catalog, config.pipeline.spawn_point_tile
        )
        self.renderer.set_selected_tile(self.surface.active_brush)

        pygame.init()
        pygame.display.set_caption(self.cfg.render.window_title)

        self.window = pygame.display.set_mode((1200, 800), pygame.RESIZABLE)
        self.font = pygame.font.SysFont("consolas", 18)

        self.btn_save = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Save",
            font=self.font,
            on_click=self.save_current_map,
        )
        self.btn_clear = Button(
            rect=pygame.Rect(0, 0, 10, 10),
            text="Clear",
            font=self.font,
            on_click=self.clear_map,
        )
        self.map_name_input = TextInput(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            text="",
            placeholder="map name...",
        )
        self.dropdown_load = MenuDropDown(
            rect=pygame.Rect(0, 0, 10, 10),
            font=self.font,
            label="Load",
        )

        self.spawn_count = 0
        self.status = ""
        self.status_y = 0
        self.surface.on_spawn_count_changed.append(self._on_spawn_count_changed)

        self.update_load_dropdown()
        self._layout_ui()
        self.renderer.set_surface(self.surface)

        # camera dragging
        self.dragging = False

    # ---------------------------------------------------------------- Layout

    def _layout_ui(self) -> None:
        width, height = self.window.get_size()
        sidebar_width = self.cfg.render.sidebar_width_px

        x = width - sidebar_width + 10
        w = sidebar_width - 20
        y = 10
        h_btn = 32
        gap = 8

        self.btn_save.rect = pygame.Rect(x, y, w, h_btn)
        y += h_btn + gap

        self.map_name_input.rect = pygame.Rect(x, y, w, h_btn)
        y += h_btn + gap

        self.dropdown_load.rect = pygame.Rect(x, y, w, h_btn)
        y += h_btn + gap

        self.btn_clear.rect = pygame.Rect(x, y, w, h_btn)
        y += h_btn + gap

        # spawn counter line, then the palette
        self.status_y = y
        self.renderer.palette_offset_y = y + 24

    # ---------------------------------------------------------------- UI data

    def update_load_dropdown(self) -> None:
        items = []
        for n in self.surface.list_maps():
            def load_closure(name=n):
                self.load_map_by_name(name)
            items.append((n, load_closure))
        self.dropdown_load.set_items(items)

    def _on_spawn_count_changed(self, count: int) -> None:
        self.spawn_count = count

    def _report(self, message: str) -> None:
        self.status = message
        logger.info(message)

    # ----------------------------------------------------------------- IO

    def save_current_map(self) -> None:
        name = self.map_name_input.text.strip()
        try:
            self.surface.save(name)
        except MapError as e:
            self._report(str(e))
            return

        self._report(f"Saved map '{name}'.")
        self.update_load_dropdown()

    def load_map_by_name(self, name: str) -> None:
        try:
            self.surface.load(name)
        except MapError as e:
            self._report(str(e))
            return

        self.map_name_input.text = name
        self.renderer.center_camera()
        self._report(f"Loaded map '{name}'.")

    def clear_map(self) -> None:
        self.surface.clear()
        self._report("Cleared map.")

    # -------------------------------------------------------------- Tools

    def _apply_tool_at(self, x: int, y: int, remove: bool = False) -> None:
        pos = self.renderer.get_map_coords_from_mouse(x, y)
        if remove:
            self.surface.remove_tile_at(pos)
            return

        background = bool(pygame.key.get_mods() & pygame.KMOD_SHIFT)
        try:
            self.surface.place_tile(pos, background=background)
        except MapError as e:
            self._report(str(e))

    # -------------------------------------------------------------- Events

    def handle_mouse_down(self, event: pygame.event.Event) -> None:
        x, y = event.pos

        if self.dropdown_load.open:
            return

        if event.button == 1:
            # send to UI first
            self.btn_save.handle_event(event)
            self.btn_clear.handle_event(event)
            self.map_name_input.handle_event(event)

            # palette selection
            if self.renderer.is_in_palette(x, y):
                index = self.renderer.get_palette_index_from_mouse(x, y)
                if 0 <= index < len(self.renderer.palette_items):
                    tile_name = self.renderer.palette_items[index]
                    try:
                        self.surface.set_active_brush(tile_name)
                    except MapError as e:
                        self._report(str(e))
                        return
                    self.renderer.set_selected_tile(tile_name)
                return

            # painting on map
            if self.renderer.is_in_map(x, y):
                self._apply_tool_at(x, y)
                return

        if event.button == 3 and self.renderer.is_in_map(x, y):
            self._apply_tool_at(x, y, remove=True)

        # middle button: start camera drag
        if event.button == 2 and self.renderer.is_in_map(x, y):
            self.dragging = True

    def handle_mouse_up(self, event: pygame.event.Event) -> None:
        if event.button == 2:
            self.dragging = False

    def handle_mouse_motion(self, event: pygame.event.Event) -> None:
        # UI hover
        self.btn_save.handle_event(event)
        self.btn_clear.handle_event(event)
        self.map_name_input.handle_event(event)

        x, y = event.pos

        if self.dragging:
            self.renderer.move_camera(-event.rel[0], -event.rel[1])
            return

        if not self.renderer.is_in_map(x, y):
            return

        # painting / erasing while holding a button
        if event.buttons[0]:
            self._apply_tool_at(x, y)
        elif event.buttons[2]:
            self._apply_tool_at(x, y, remove=True)

    def handle_key(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_r and not self.map_name_input.active:
            self.renderer.center_camera()

    def handle_mouse_wheel(self, event: pygame.event.Event) -> None:
        # zoom only when over map, not over sidebar
        x, y = pygame.mouse.get_pos()
        if self.renderer.is_in_map(x, y):
            self.renderer.change_zoom(event.y)

    # ----------------------------------------------------------- Draw UI

    def draw_ui(self) -> None:
        self.btn_save.draw(self.window)
        self.map_name_input.draw(self.window)
        self.btn_clear.draw(self.window)

        x = self.btn_save.rect.x
        needed = self.cfg.pipeline.min_spawn_points
        draw_label(self.window, self.font, f"Spawn points: {self.spawn_count}/{needed}", x, self.status_y)
        if self.status:
            _, height = self.window.get_size()
            draw_label(self.window, self.font, self.status, 10, height - 28)

        # drawn last so the open list covers the widgets below it
        self.dropdown_load.draw(self.window)

    # ------------------------------------------------------------- Main loop

    def run(self) -> None:
        clock = pygame.time.Clock()
        running = True

        while running:
            _dt = clock.tick(60)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                if event.type == pygame.VIDEORESIZE:
                    self.window = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    self._layout_ui()
                    continue

                # a click that closes the dropdown must not reach the map
                dropdown_was_open = self.dropdown_load.open
                self.dropdown_load.handle_event(event)

                if event.type == pygame.MOUSEBUTTONDOWN and not dropdown_was_open:
                    self.handle_mouse_down(event)

                if event.type == pygame.MOUSEBUTTONUP:
                    self.handle_mouse_up(event)

                if event.type == pygame.MOUSEMOTION:
                    self.handle_mouse_motion(event)

                if event.type == pygame.MOUSEWHEEL:
                    self.handle_mouse_wheel(event)

                if event.type == pygame.KEYDOWN:
                    self.handle_key(event)
                    self.map_name_input.handle_event(event)

            self.renderer.draw()
            self.draw_ui()
            pygame.display.flip()

        pygame.quit()
        sys.exit()
