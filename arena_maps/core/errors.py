from __future__ import annotations
from enum import Enum
from typing import Iterable, List


class MapError(Exception):
    """Base class for every failure raised by the map pipeline."""


class TileNotFoundError(MapError, LookupError):
    def __init__(self, tile_name: str) -> None:
        super().__init__(f"The tile '{tile_name}' cannot be found.")
        self.tile_name = tile_name


class MapNotFoundError(MapError, LookupError):
    def __init__(self, map_name: str) -> None:
        super().__init__(f"Map with the name of '{map_name}' not found.")
        self.map_name = map_name


class MapParseError(MapError, ValueError):
    pass


class SaveProblem(Enum):
    INSUFFICIENT_SPAWN_POINTS = "insufficient_spawn_points"
    MISSING_MAP_NAME = "missing_map_name"


class SaveValidationError(MapError):
    def __init__(self, problems: Iterable[SaveProblem], min_spawn_points: int = 0) -> None:
        self.problems: List[SaveProblem] = list(problems)
        messages = []
        for problem in self.problems:
            if problem is SaveProblem.INSUFFICIENT_SPAWN_POINTS:
                messages.append(f"A map requires a minimum of {min_spawn_points} spawn points.")
            elif problem is SaveProblem.MISSING_MAP_NAME:
                messages.append("The map needs a name.")
        super().__init__(" ".join(messages))
