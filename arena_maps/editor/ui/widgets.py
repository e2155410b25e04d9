from __future__ import annotations

from typing import Callable, List, Optional, Tuple
import pygame

Color = Tuple[int, int, int]


class Button:
    def __init__(
        self,
        rect: pygame.Rect,
        text: str,
        font: pygame.font.Font,
        on_click: Callable[[], None],
    ) -> None:
        self.rect = rect
        self.text = text
        self.font = font
        self.on_click = on_click
        self.hover: bool = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()

    def draw(self, surface: pygame.Surface) -> None:
        color = (100, 100, 120) if self.hover else (70, 70, 80)

        pygame.draw.rect(surface, color, self.rect, border_radius=4)
        pygame.draw.rect(surface, (20, 20, 20), self.rect, 1, border_radius=4)

        text_surf = self.font.render(self.text, True, (240, 240, 240))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))


def is_map_name_char(ch: str) -> bool:
    """Characters allowed in a map name; the name doubles as a file name."""
    return ch.isalnum() or ch in "-_ "


class TextInput:
    def __init__(
        self,
        rect: pygame.Rect,
        font: pygame.font.Font,
        text: str = "",
        placeholder: str = "",
        max_length: int = 32,
        allow: Callable[[str], bool] = is_map_name_char,
    ) -> None:
        self.rect = rect
        self.font = font
        self.text = text
        self.placeholder = placeholder
        self.active: bool = False
        self.max_length = max_length
        self.allow = allow

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.active = self.rect.collidepoint(event.pos)

        if event.type == pygame.KEYDOWN and self.active:
            if event.key in (pygame.K_RETURN, pygame.K_ESCAPE):
                self.active = False
            elif event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            elif len(self.text) < self.max_length and event.unicode and self.allow(event.unicode):
                self.text += event.unicode

    def draw(self, surface: pygame.Surface) -> None:
        bg_color = (30, 30, 40) if self.active else (20, 20, 30)
        border_color = (200, 200, 255) if self.active else (80, 80, 100)

        pygame.draw.rect(surface, bg_color, self.rect, border_radius=4)
        pygame.draw.rect(surface, border_color, self.rect, 1, border_radius=4)

        display_text = self.text if self.text else self.placeholder
        color = (240, 240, 240) if self.text else (150, 150, 170)

        text_surf = self.font.render(display_text, True, color)
        surface.blit(text_surf, text_surf.get_rect(midleft=(self.rect.x + 6, self.rect.centery)))


class MenuDropDown:
    """
    Dropdown menu listing saved maps.
    items: list of (label, callback); at most `max_visible` are shown.
    """

    def __init__(
        self,
        rect: pygame.Rect,
        font: pygame.font.Font,
        items: Optional[List[tuple[str, Callable[[], None]]]] = None,
        label: str = "Menu",
        max_visible: int = 12,
    ) -> None:
        self.rect = rect
        self.font = font
        self.items: List[tuple[str, Callable[[], None]]] = items or []
        self.label = label
        self.max_visible = max_visible
        self.open: bool = False
        self.hover: bool = False

    def set_items(self, items: List[tuple[str, Callable[[], None]]]) -> None:
        self.items = items

    def visible_items(self) -> List[tuple[str, Callable[[], None]]]:
        return self.items[: self.max_visible]

    def _list_rect(self) -> pygame.Rect:
        # list opens to the left so it stays inside the window
        width = self.rect.width + 80
        return pygame.Rect(
            self.rect.right - width,
            self.rect.bottom,
            width,
            self.rect.height * max(1, len(self.visible_items())),
        )

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.open = not self.open
                return

            if not self.open:
                return

            list_rect = self._list_rect()
            if list_rect.collidepoint(event.pos):
                index = int((event.pos[1] - list_rect.y) // self.rect.height)
                items = self.visible_items()
                if 0 <= index < len(items):
                    _label, cb = items[index]
                    cb()
            # any click closes the menu
            self.open = False

    def draw(self, surface: pygame.Surface) -> None:
        color = (90, 90, 120) if self.hover or self.open else (60, 60, 80)

        pygame.draw.rect(surface, color, self.rect, border_radius=4)
        pygame.draw.rect(surface, (20, 20, 20), self.rect, 1, border_radius=4)

        text_surf = self.font.render(f"{self.label} ({len(self.items)})", True, (240, 240, 240))
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

        if not self.open:
            return

        list_rect = self._list_rect()
        pygame.draw.rect(surface, (25, 25, 35), list_rect)
        pygame.draw.rect(surface, (10, 10, 10), list_rect, 1)

        labels = [label for label, _cb in self.visible_items()] or ["(no maps)"]
        for i, label in enumerate(labels):
            item_rect = pygame.Rect(
                list_rect.x,
                list_rect.y + i * self.rect.height,
                list_rect.width,
                self.rect.height,
            )
            pygame.draw.rect(surface, (40, 40, 55), item_rect)
            text_surf = self.font.render(label, True, (230, 230, 230))
            surface.blit(text_surf, text_surf.get_rect(midleft=(item_rect.x + 6, item_rect.centery)))


def draw_label(
    surface: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    x: int,
    y: int,
    color: Color = (220, 220, 220),
) -> None:
    surface.blit(font.render(text, True, color), (x, y))
