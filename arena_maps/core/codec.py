"""
JSON codec for map documents.

Persisted layout (one record per map):

    {
        "name": "...",
        "spawnPoints": [{"x": 0, "y": 0, "z": 0}, ...],
        "tiles": [
            {"tileName": "...", "position": {"x": 0, "y": 0, "z": 0}, "isBGtile": false},
            ...
        ]
    }

Both directions are pure; storage lives in io.py.
"""
from __future__ import annotations
import json
import math
from typing import Any, Dict, List, Set, Union

from .errors import MapParseError
from .types import GridPosition, MapDocument, Number, PlacedTile, Vec3


def encode(document: MapDocument) -> bytes:
    payload: Dict[str, Any] = {
        "name": document.name,
        "spawnPoints": [_vec_to_dict(sp) for sp in document.spawn_points],
        "tiles": [
            {
                "tileName": tile.tile_name,
                "position": _vec_to_dict(tile.position),
                "isBGtile": tile.is_background,
            }
            for tile in document.tiles
        ],
    }
    return json.dumps(payload, indent=4).encode("utf-8")


def decode(data: Union[bytes, str]) -> MapDocument:
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MapParseError(f"Map record is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise MapParseError("Map record must be a JSON object.")

    name = raw.get("name")
    if not isinstance(name, str):
        raise MapParseError("Map record needs a string 'name'.")

    raw_spawns = raw.get("spawnPoints", [])
    raw_tiles = raw.get("tiles", [])
    if not isinstance(raw_spawns, list):
        raise MapParseError("'spawnPoints' must be a list.")
    if not isinstance(raw_tiles, list):
        raise MapParseError("'tiles' must be a list.")

    spawn_points = [_parse_vec(item, f"spawnPoints[{i}]") for i, item in enumerate(raw_spawns)]

    tiles: List[PlacedTile] = []
    occupied: Set[GridPosition] = set()
    for i, item in enumerate(raw_tiles):
        where = f"tiles[{i}]"
        if not isinstance(item, dict):
            raise MapParseError(f"{where} must be an object.")

        tile_name = item.get("tileName")
        if not isinstance(tile_name, str) or not tile_name:
            raise MapParseError(f"{where} needs a non-empty 'tileName'.")

        is_bg = item.get("isBGtile", False)
        if not isinstance(is_bg, bool):
            raise MapParseError(f"{where}.isBGtile must be a boolean.")

        position = _parse_grid(item.get("position"), f"{where}.position")
        if position in occupied:
            raise MapParseError(f"{where} duplicates the tile position {tuple(position)}.")
        occupied.add(position)

        tiles.append(PlacedTile(tile_name, position, is_bg))

    return MapDocument(name=name, tiles=tiles, spawn_points=spawn_points)


# ---------------------------------------------------------------- helpers

def _vec_to_dict(vec: Vec3) -> Dict[str, Number]:
    return {"x": vec[0], "y": vec[1], "z": vec[2]}


def _parse_number(value: Any, where: str) -> Number:
    # bool is an int subclass; JSON true/false are never coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MapParseError(f"{where} must be a number.")
    if isinstance(value, float) and not math.isfinite(value):
        raise MapParseError(f"{where} must be a finite number, got {value}.")
    return value


def _parse_vec(value: Any, where: str) -> Vec3:
    if not isinstance(value, dict):
        raise MapParseError(f"{where} must be an object with x, y, z.")
    if "x" not in value or "y" not in value:
        raise MapParseError(f"{where} is missing a coordinate.")
    return Vec3(
        _parse_number(value["x"], f"{where}.x"),
        _parse_number(value["y"], f"{where}.y"),
        _parse_number(value.get("z", 0), f"{where}.z"),
    )


def _parse_grid(value: Any, where: str) -> GridPosition:
    vec = _parse_vec(value, where)
    coords = []
    for axis, c in zip("xyz", vec):
        if isinstance(c, float):
            if not c.is_integer():
                raise MapParseError(f"{where}.{axis} must be a whole grid coordinate, got {c}.")
            c = int(c)
        coords.append(c)
    if coords[2] != 0:
        raise MapParseError(f"{where}.z must be 0 for a tile, got {coords[2]}.")
    return GridPosition(*coords)
