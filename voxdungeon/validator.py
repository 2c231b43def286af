"""Dungeon validation for voxdungeon.

This module validates generated dungeons against configuration requirements,
distinguishing between errors (blocking) and warnings (informational).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import TYPE_CHECKING

import networkx as nx

from voxdungeon.config import DungeonMapSpec

if TYPE_CHECKING:
    from voxdungeon.generator import GenerationResult


@dataclass
class ValidationResult:
    """Result of dungeon validation.

    Attributes:
        is_valid: True if the dungeon passes all required checks (no errors).
        errors: List of blocking issues that make the dungeon invalid.
        warnings: List of informational issues that don't block validation.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_dungeon(result: GenerationResult, config: DungeonMapSpec) -> ValidationResult:
    """Validate a generated dungeon against all constraints.

    Checks:
    - Room count (too few = error, too many = warning)
    - No two rooms overlap
    - Room graph is connected and matches the room set
    - Every main path room survived
    - Every door touches both of its rooms
    - Spawn area is non-empty and inside the last main path room
    - Spawn points inside doors (warning)

    Args:
        result: The generation result to validate.
        config: Configuration with the requested room count.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    _check_room_count(result, config, errors, warnings)
    _check_overlaps(result, errors)
    _check_graph(result, errors)
    _check_doors(result, errors)
    _check_spawn(result, errors, warnings)

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_room_count(
    result: GenerationResult,
    config: DungeonMapSpec,
    errors: list[str],
    warnings: list[str],
) -> None:
    wanted = config.room_graph.num_rooms
    actual = len(result.rooms)
    if actual < wanted:
        errors.append(f"Only {actual} rooms, wanted {wanted}")
    elif actual > wanted:
        warnings.append(f"Pruning stalled at {actual} rooms (wanted {wanted})")


def _check_overlaps(result: GenerationResult, errors: list[str]) -> None:
    for (i, r1), (j, r2) in combinations(result.rooms.items(), 2):
        if not r1.intersection(r2).is_empty():
            errors.append(f"Rooms {i} and {j} overlap")


def _check_graph(result: GenerationResult, errors: list[str]) -> None:
    graph = result.room_graph
    if set(graph.nodes) != set(result.rooms):
        errors.append("Room graph nodes don't match the room set")
    if graph.number_of_nodes() > 0 and not nx.is_connected(graph):
        errors.append("Room graph is not connected")
    for room in result.main_path:
        if room not in result.rooms:
            errors.append(f"Main path room {room} was pruned")


def _check_doors(result: GenerationResult, errors: list[str]) -> None:
    for (i, j), door in result.doors.items():
        if i not in result.rooms or j not in result.rooms:
            errors.append(f"Door ({i}, {j}) leads to a pruned room")
            continue
        for room in (i, j):
            if door.intersection(result.rooms[room]).is_empty():
                errors.append(f"Door ({i}, {j}) doesn't touch room {room}")


def _check_spawn(
    result: GenerationResult, errors: list[str], warnings: list[str]
) -> None:
    points = result.meta.spawn_area.valid_spawn_points
    if not points:
        errors.append("Spawn area is empty")
        return
    if not result.main_path:
        errors.append("Main path is empty")
        return

    spawn_room = result.rooms.get(result.main_path[-1])
    if spawn_room is None:
        return
    outside = [p for p in points if not spawn_room.contains(p)]
    if outside:
        errors.append(f"{len(outside)} spawn points lie outside the spawn room")

    in_doors = [p for p in points if any(d.contains(p) for d in result.doors.values())]
    if in_doors:
        warnings.append(f"{len(in_doors)} spawn points lie inside a doorway")
