from __future__ import annotations
import logging
import sys

from arena_maps.core.config import PipelineParams
from arena_maps.core.errors import MapError
from arena_maps.core.io import DirectoryStorage
from arena_maps.core.loader import GameSession, MapLoader
from arena_maps.core.tiles import default_catalog


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if len(argv) != 1:
        print("usage: python cli_inspect.py <map name>")
        return 2

    params = PipelineParams()
    loader = MapLoader(default_catalog(), DirectoryStorage(params.maps_dir))
    session = GameSession()
    try:
        loaded = loader.load_map(argv[0], session)
    except MapError as e:
        print(e)
        return 1

    print(f"map:            {loaded.name}")
    print(f"tiles:          {len(loaded.tiles)} ({len(loaded.solid_colliders())} solid)")
    print(f"center offset:  {tuple(loaded.offset)}")
    print(f"lowest point:   {loaded.lowest_point}")
    print(f"surface cells:  {len(loaded.surface_positions())}")
    print("spawn points:")
    for sp in session.spawn_points:
        print(f"  {tuple(sp)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
