from __future__ import annotations

from .widgets import Button, TextInput, MenuDropDown, draw_label, is_map_name_char

__all__ = [
    "Button",
    "TextInput",
    "MenuDropDown",
    "draw_label",
    "is_map_name_char",
]
