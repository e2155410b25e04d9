from __future__ import annotations

import json

import pytest

from arena_maps.core import codec
from arena_maps.core.config import PipelineParams
from arena_maps.core.errors import (
    MapNotFoundError,
    MapParseError,
    SaveProblem,
    SaveValidationError,
    TileNotFoundError,
)
from arena_maps.core.tiles import SPAWN_POINT_TILE
from arena_maps.core.types import GridPosition, MapDocument, PlacedTile, Vec3

from .conftest import spawn, store, tile


def place_spawns(surface, count: int) -> None:
    surface.set_active_brush(SPAWN_POINT_TILE)
    for i in range(count):
        surface.place_tile(GridPosition(i, 5))


# ---------------------------------------------------------------- placement

def test_default_brush_comes_from_params(surface):
    assert surface.active_brush == PipelineParams().default_tile


def test_place_tile_adds_tile(surface):
    placed = surface.place_tile(GridPosition(2, 3))

    assert placed == PlacedTile("Grass", GridPosition(2, 3), False)
    assert surface.tile_at(GridPosition(2, 3)) == placed
    assert surface.tiles() == [placed]


def test_placing_same_type_again_is_a_no_op(surface):
    surface.place_tile(GridPosition(0, 0))
    before = surface.tiles()

    assert surface.place_tile(GridPosition(0, 0)) is None
    assert surface.place_tile(GridPosition(0, 0), background=True) is None
    assert surface.tiles() == before


def test_placing_other_type_replaces_tile(surface):
    surface.place_tile(GridPosition(0, 0))
    surface.set_active_brush("Stone")
    surface.place_tile(GridPosition(0, 0), background=True)

    assert surface.tiles() == [PlacedTile("Stone", GridPosition(0, 0), True)]


def test_background_flag_travels_with_its_tile(surface):
    surface.place_tile(GridPosition(0, 0), background=True)
    surface.place_tile(GridPosition(1, 0))
    surface.remove_tile_at(GridPosition(0, 0))
    surface.place_tile(GridPosition(2, 0))

    assert [t.is_background for t in surface.tiles()] == [False, False]


def test_remove_tile_at(surface):
    surface.place_tile(GridPosition(4, 4))

    removed = surface.remove_tile_at(GridPosition(4, 4))

    assert removed.position == GridPosition(4, 4)
    assert surface.tiles() == []
    assert surface.remove_tile_at(GridPosition(4, 4)) is None


def test_unknown_brush_is_rejected(surface):
    with pytest.raises(TileNotFoundError):
        surface.set_active_brush("Lava")
    assert surface.active_brush == "Grass"


def test_unresolvable_brush_never_places(surface):
    surface.active_brush = "Lava"
    with pytest.raises(TileNotFoundError):
        surface.place_tile(GridPosition(0, 0))
    assert surface.tiles() == []


def test_spawn_count_and_listener(surface):
    counts = []
    surface.on_spawn_count_changed.append(counts.append)

    place_spawns(surface, 3)
    surface.remove_tile_at(GridPosition(0, 5))
    surface.set_active_brush("Stone")
    surface.place_tile(GridPosition(1, 5))

    assert counts == [1, 2, 3, 2]
    assert surface.spawn_point_count() == 2
    assert surface.tile_at(GridPosition(1, 5)).tile_name == "Stone"


# ---------------------------------------------------------------- save

def test_validate_reports_every_problem(surface):
    assert surface.validate_for_save("") == [
        SaveProblem.INSUFFICIENT_SPAWN_POINTS,
        SaveProblem.MISSING_MAP_NAME,
    ]

    place_spawns(surface, 4)
    assert surface.validate_for_save("") == [SaveProblem.MISSING_MAP_NAME]
    assert surface.validate_for_save("arena") == []


def test_whitespace_name_counts_as_missing(surface):
    place_spawns(surface, 4)

    assert surface.validate_for_save("   ") == [SaveProblem.MISSING_MAP_NAME]
    with pytest.raises(SaveValidationError):
        surface.save("\t ")


def test_save_needs_minimum_spawn_points(surface, storage):
    surface.place_tile(GridPosition(0, 0))
    place_spawns(surface, 3)

    with pytest.raises(SaveValidationError) as exc:
        surface.save("arena")

    assert exc.value.problems == [SaveProblem.INSUFFICIENT_SPAWN_POINTS]
    assert "4 spawn points" in str(exc.value)
    assert storage.maps == {}


def test_save_needs_a_name(surface, storage):
    place_spawns(surface, 6)

    with pytest.raises(SaveValidationError) as exc:
        surface.save("")

    assert exc.value.problems == [SaveProblem.MISSING_MAP_NAME]
    assert storage.maps == {}


def test_minimum_spawn_points_is_configurable(catalog, storage):
    from arena_maps.core.authoring import AuthoringSurface

    surface = AuthoringSurface(catalog, storage, PipelineParams(min_spawn_points=1))
    place_spawns(surface, 1)
    surface.save("solo")
    assert storage.list_maps() == ["solo"]


def test_save_splits_spawn_points_from_tiles(surface, storage):
    surface.place_tile(GridPosition(0, 0), background=True)
    surface.set_active_brush("Stone")
    surface.place_tile(GridPosition(1, 0))
    place_spawns(surface, 4)

    document = surface.save("arena")

    assert document.tiles == [tile("Grass", 0, 0, background=True), tile("Stone", 1, 0)]
    assert document.spawn_points == [Vec3(i, 5, 0) for i in range(4)]

    raw = json.loads(storage.read_map("arena"))
    assert raw["name"] == "arena"
    assert len(raw["spawnPoints"]) == 4
    assert raw["tiles"][0]["isBGtile"] is True


# ---------------------------------------------------------------- load

def test_load_restores_saved_map(catalog, storage, surface):
    surface.place_tile(GridPosition(0, 0), background=True)
    surface.set_active_brush("Stone")
    surface.place_tile(GridPosition(0, -1))
    place_spawns(surface, 4)
    surface.save("arena")
    saved = surface.tiles()

    surface.clear()
    surface.load("arena")

    assert sorted(surface.tiles(), key=repr) == sorted(saved, key=repr)
    assert surface.spawn_point_count() == 4
    assert surface.tile_at(GridPosition(0, 0)).is_background is True


def test_load_replaces_current_tiles(surface, storage):
    store(storage, MapDocument("other", [tile("Stone", 9, 9)], [spawn(1, 1)]))
    surface.place_tile(GridPosition(0, 0))

    surface.load("other")

    assert surface.tile_at(GridPosition(0, 0)) is None
    assert surface.tile_at(GridPosition(9, 9)).tile_name == "Stone"
    assert surface.tile_at(GridPosition(1, 1)) is None
    assert surface.spawn_points() == [Vec3(1, 1, 0)]


def test_load_missing_map_keeps_current_tiles(surface):
    surface.place_tile(GridPosition(0, 0))

    with pytest.raises(MapNotFoundError):
        surface.load("nowhere")

    assert len(surface.tiles()) == 1


def test_load_malformed_map_keeps_current_tiles(surface, storage):
    storage.write_map("broken", b"{")
    surface.place_tile(GridPosition(0, 0))

    with pytest.raises(MapParseError):
        surface.load("broken")

    assert len(surface.tiles()) == 1


def test_load_skips_unknown_tile_types(surface, storage, caplog):
    store(storage, MapDocument("odd", [tile("Lava", 0, 0), tile("Stone", 1, 0)]))

    surface.load("odd")

    assert [t.tile_name for t in surface.tiles()] == ["Stone"]
    assert "Lava" in caplog.text


def test_load_keeps_fractional_spawn_points(surface, storage):
    storage.write_map("frac", codec.encode(MapDocument("frac", spawn_points=[spawn(1.2, -0.7)])))

    surface.load("frac")

    assert surface.spawn_points() == [Vec3(1.2, -0.7, 0)]
    assert surface.spawn_cells() == [GridPosition(1, -1)]
    assert surface.tile_at(GridPosition(1, -1)) is None


def test_load_keeps_tile_under_spawn_point(surface, storage):
    store(storage, MapDocument(
        "shared",
        [tile("Stone", 0, 0)],
        [spawn(0, 0), spawn(1, 0), spawn(2, 0), spawn(3, 0)],
    ))

    surface.load("shared")
    document = surface.save("shared-copy")

    assert document.tiles == [tile("Stone", 0, 0)]
    assert document.spawn_points == [spawn(0, 0), spawn(1, 0), spawn(2, 0), spawn(3, 0)]
    assert codec.decode(storage.read_map("shared-copy")).tiles == [tile("Stone", 0, 0)]


def test_load_keeps_stacked_spawn_points(surface, storage):
    spawns = [spawn(0, 0), spawn(0, 0), spawn(1, 0), spawn(2, 0)]
    store(storage, MapDocument("stacked", [], spawns))

    surface.load("stacked")

    assert surface.spawn_point_count() == 4
    assert surface.validate_for_save("stacked") == []
    assert surface.save("stacked").spawn_points == spawns


def test_load_rejects_non_finite_spawn_point(surface, storage):
    storage.write_map("nan", b'{"name": "nan", "spawnPoints": [{"x": NaN, "y": 0}]}')
    place_spawns(surface, 2)

    with pytest.raises(MapParseError):
        surface.load("nan")

    assert surface.spawn_point_count() == 2


# ---------------------------------------------------------------- spawn layer

def test_spawn_brush_keeps_tile_in_cell(surface):
    surface.place_tile(GridPosition(0, 0))
    surface.set_active_brush(SPAWN_POINT_TILE)

    placed = surface.place_tile(GridPosition(0, 0))

    assert placed.tile_name == SPAWN_POINT_TILE
    assert surface.tile_at(GridPosition(0, 0)).tile_name == "Grass"
    assert surface.spawn_points() == [Vec3(0, 0, 0)]


def test_spawn_brush_twice_on_one_cell_is_a_no_op(surface):
    counts = []
    surface.on_spawn_count_changed.append(counts.append)
    surface.set_active_brush(SPAWN_POINT_TILE)

    surface.place_tile(GridPosition(3, 3))
    assert surface.place_tile(GridPosition(3, 3)) is None

    assert surface.spawn_point_count() == 1
    assert counts == [1]


def test_remove_erases_spawn_points_before_tile(surface):
    surface.place_tile(GridPosition(0, 0))
    surface.set_active_brush(SPAWN_POINT_TILE)
    surface.place_tile(GridPosition(0, 0))

    first = surface.remove_tile_at(GridPosition(0, 0))
    assert first.tile_name == SPAWN_POINT_TILE
    assert surface.spawn_point_count() == 0
    assert surface.tile_at(GridPosition(0, 0)).tile_name == "Grass"

    second = surface.remove_tile_at(GridPosition(0, 0))
    assert second.tile_name == "Grass"
    assert surface.tiles() == []


def test_remove_erases_every_spawn_point_in_cell(surface, storage):
    store(storage, MapDocument("stacked", [], [spawn(0, 0), spawn(0.2, 0.1), spawn(1, 0)]))
    surface.load("stacked")

    surface.remove_tile_at(GridPosition(0, 0))

    assert surface.spawn_points() == [Vec3(1, 0, 0)]


def test_clear_drops_spawn_points(surface):
    counts = []
    surface.on_spawn_count_changed.append(counts.append)
    place_spawns(surface, 2)

    surface.clear()

    assert surface.spawn_point_count() == 0
    assert counts == [1, 2, 0]


# ---------------------------------------------------------------- geometry

def test_geometry_is_reused_until_tiles_change(surface):
    surface.place_tile(GridPosition(0, 0))
    first = surface.geometry()

    assert surface.geometry() is first
    surface.place_tile(GridPosition(0, 0))  # no-op
    assert surface.geometry() is first

    surface.place_tile(GridPosition(0, 1))
    second = surface.geometry()
    assert second is not first
    assert second.surface_positions() == {Vec3(0, 2, 0)}


def test_geometry_ignores_spawn_markers(surface):
    surface.place_tile(GridPosition(0, -3))
    place_spawns(surface, 1)

    geometry = surface.geometry()
    assert geometry.lowest_point() == -3
    assert geometry.surface_positions() == {Vec3(0, -2, 0)}
