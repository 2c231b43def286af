"""Tests for dungeon validator."""

import networkx as nx

from voxdungeon.config import DungeonMapSpec, RoomGraphSpec
from voxdungeon.generator import DungeonMeta, GenerationResult
from voxdungeon.lattice import Extent, Point
from voxdungeon.room import SpawnArea, spawn_in_room
from voxdungeon.validator import ValidationResult, validate_dungeon


def box(minimum: tuple[int, int, int], size: tuple[int, int, int]) -> Extent:
    """Shorthand for building an Extent in tests."""
    return Extent(Point(*minimum), Point(*size))


def make_result() -> GenerationResult:
    """Three rooms in a row along X, joined by doors, spawning in the middle."""
    rooms = {
        0: box((0, 0, 0), (8, 8, 8)),
        1: box((8, 0, 0), (8, 8, 8)),
        2: box((16, 0, 0), (8, 8, 8)),
    }
    doors = {
        (0, 1): box((7, 1, 1), (2, 2, 2)),
        (1, 2): box((15, 1, 1), (2, 2, 2)),
    }
    return GenerationResult(
        meta=DungeonMeta(spawn_area=spawn_in_room(rooms[1])),
        rooms=rooms,
        doors=doors,
        main_path=[0, 1],
        room_graph=nx.path_graph(3),
        validation=ValidationResult(is_valid=True),
    )


def make_config(num_rooms: int = 3) -> DungeonMapSpec:
    return DungeonMapSpec(room_graph=RoomGraphSpec(num_rooms=num_rooms))


def test_valid_dungeon():
    """A well-formed dungeon has no errors or warnings."""
    validation = validate_dungeon(make_result(), make_config())
    assert validation.is_valid
    assert validation.errors == []
    assert validation.warnings == []


# =============================================================================
# Room count
# =============================================================================


def test_too_few_rooms_is_error():
    validation = validate_dungeon(make_result(), make_config(num_rooms=4))
    assert not validation.is_valid
    assert "Only 3 rooms, wanted 4" in validation.errors


def test_too_many_rooms_is_warning():
    validation = validate_dungeon(make_result(), make_config(num_rooms=2))
    assert validation.is_valid
    assert any("Pruning stalled" in w for w in validation.warnings)


# =============================================================================
# Geometry
# =============================================================================


def test_overlapping_rooms():
    result = make_result()
    result.rooms[2] = box((12, 0, 0), (8, 8, 8))
    validation = validate_dungeon(result, make_config())
    assert "Rooms 1 and 2 overlap" in validation.errors


def test_door_not_touching_room():
    result = make_result()
    result.doors[(1, 2)] = box((30, 1, 1), (2, 2, 2))
    validation = validate_dungeon(result, make_config())
    assert not validation.is_valid
    assert "Door (1, 2) doesn't touch room 1" in validation.errors
    assert "Door (1, 2) doesn't touch room 2" in validation.errors


# =============================================================================
# Graph
# =============================================================================


def test_disconnected_graph():
    result = make_result()
    result.room_graph.remove_edge(1, 2)
    validation = validate_dungeon(result, make_config())
    assert "Room graph is not connected" in validation.errors


def test_graph_nodes_must_match_rooms():
    result = make_result()
    result.room_graph.add_edge(2, 3)
    validation = validate_dungeon(result, make_config())
    assert "Room graph nodes don't match the room set" in validation.errors


def test_pruned_main_path_room():
    result = make_result()
    del result.rooms[0]
    del result.doors[(0, 1)]
    result.room_graph.remove_node(0)
    validation = validate_dungeon(result, make_config(num_rooms=2))
    assert "Main path room 0 was pruned" in validation.errors


def test_door_to_pruned_room():
    result = make_result()
    del result.rooms[2]
    result.room_graph.remove_node(2)
    validation = validate_dungeon(result, make_config(num_rooms=2))
    assert "Door (1, 2) leads to a pruned room" in validation.errors


# =============================================================================
# Spawn
# =============================================================================


def test_empty_spawn_area():
    result = make_result()
    result.meta.spawn_area = SpawnArea()
    validation = validate_dungeon(result, make_config())
    assert "Spawn area is empty" in validation.errors


def test_spawn_outside_room():
    result = make_result()
    result.meta.spawn_area = SpawnArea(valid_spawn_points=[Point(1, 1, 1)])
    validation = validate_dungeon(result, make_config())
    assert "1 spawn points lie outside the spawn room" in validation.errors


def test_spawn_in_doorway_is_warning():
    result = make_result()
    result.meta.spawn_area = SpawnArea(valid_spawn_points=[Point(8, 1, 1)])
    validation = validate_dungeon(result, make_config())
    assert validation.is_valid
    assert "1 spawn points lie inside a doorway" in validation.warnings
