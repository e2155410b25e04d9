from __future__ import annotations
from dataclasses import dataclass

from .tiles import SPAWN_POINT_TILE


@dataclass
class PipelineParams:
    maps_dir: str = "maps"
    min_spawn_points: int = 4
    spawn_point_tile: str = SPAWN_POINT_TILE
    default_tile: str = "Grass"
