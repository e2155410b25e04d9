from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from arena_maps.core.config import PipelineParams


@dataclass
class RenderParams:
    tile_size: int = 32
    window_title: str = "Arena Maps - Editor"
    show_grid: bool = True
    # Sidebar has a constant pixel width, independent of zoom
    sidebar_width_px: int = 220
    background_color: Tuple[int, int, int] = (15, 15, 20)
    # Background tiles are drawn with this alpha over the view
    background_tile_alpha: int = 110
    tile_asset_dir: str = "assets/tiles"


@dataclass
class AppConfig:
    pipeline: PipelineParams = field(default_factory=PipelineParams)
    render: RenderParams = field(default_factory=RenderParams)
