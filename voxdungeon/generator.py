"""Dungeon layout generation.

One attempt runs:
- Sample 10x the requested number of room candidates
- Push overlapping candidates apart
- Cut doors between face-adjacent candidates to form the room graph
- Keep the largest connected piece, pick a main path along the longest
  path of its spanning tree
- Prune outer rooms down to the requested count without touching the
  main path
- Write room and door voxels, spawn the player in the last main path room

Attempts that end up with too few connected rooms, too short a main path,
or a spawn room too small to stand in are thrown away and retried with
fresh samples from the same rng.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import networkx as nx
import structlog

from voxdungeon.config import DungeonMapSpec
from voxdungeon.extent import resolve_extent_overlaps
from voxdungeon.graph import (
    largest_connected_subgraph,
    longest_path_in_tree,
    prune_outer_nodes_to_reach_size,
)
from voxdungeon.lattice import Extent
from voxdungeon.room import (
    SpawnArea,
    VoxelEncoder,
    collect_doors_from_room_graph,
    collect_rooms_from_room_graph,
    fill_map_with_doors,
    fill_map_with_rooms,
    generate_door_graph,
    spawn_in_room,
)
from voxdungeon.sampling import sample_extents, seeded_rng
from voxdungeon.symmetric_map import SymmetricMap
from voxdungeon.validator import ValidationResult, validate_dungeon

log = structlog.get_logger()

MAX_GENERATE_TRIES = 200
CANDIDATES_PER_ROOM = 10


class GenerationError(Exception):
    """Error during dungeon generation."""

    pass


@dataclass
class DungeonMeta:
    """Everything about a generated dungeon the game needs besides voxels."""

    spawn_area: SpawnArea


@dataclass
class GenerationResult:
    """Result of dungeon generation.

    Attributes:
        meta: Spawn metadata.
        rooms: Surviving room extents by room index.
        doors: Surviving door extents by ordered room index pair.
        main_path: Room indices pinned from entrance to objective.
        room_graph: Final room graph (nodes are room indices).
        validation: Validation result (with any warnings).
        attempts: Number of generation attempts made.
    """

    meta: DungeonMeta
    rooms: dict[int, Extent]
    doors: dict[tuple[int, int], Extent]
    main_path: list[int]
    room_graph: nx.Graph
    validation: ValidationResult
    attempts: int = 1


def validate_config(config: DungeonMapSpec) -> list[str]:
    """Check cross-field constraints that make generation impossible.

    Args:
        config: Configuration to validate.

    Returns:
        List of error messages (empty if valid).
    """
    errors: list[str] = []

    if config.room_graph.num_rooms < 1:
        errors.append(f"num_rooms must be >= 1, got {config.room_graph.num_rooms}")

    path_len = config.room_graph.entrance_to_objective_path_length
    if path_len < 2:
        errors.append(
            f"entrance_to_objective_path_length must be >= 2, got {path_len}"
        )

    if config.min_room_dim > config.max_room_dim:
        errors.append(
            f"min_room_dim ({config.min_room_dim}) is greater than "
            f"max_room_dim ({config.max_room_dim})"
        )

    if config.min_door_dim > config.max_door_dim:
        errors.append(
            f"min_door_dim ({config.min_door_dim}) is greater than "
            f"max_door_dim ({config.max_door_dim})"
        )

    return errors


def generate_room_candidates(config: DungeonMapSpec, rng: random.Random) -> list[Extent]:
    """Sample room boxes whose sides all fall within the room size bounds."""
    return sample_extents(
        CANDIDATES_PER_ROOM * config.room_graph.num_rooms,
        config.valid_room_size,
        config.room_dist.location.make(),
        config.room_dist.size.make(),
        rng,
    )


def choose_main_path(desired_len: int, mst: nx.Graph) -> list[int] | None:
    """Pick the main path rooms from the spanning tree.

    Returns:
        The first ``desired_len - 1`` room indices of the tree's longest
        path, or None if that path is shorter than `desired_len`.
    """
    path = longest_path_in_tree(mst)
    if len(path) < desired_len:
        return None
    return path[: desired_len - 1]


def prune_rooms_to_desired_size(
    config: DungeonMapSpec, main_path: list[int], room_graph: nx.Graph
) -> bool:
    """Prune outer rooms in place, keeping every main path room.

    A removal is also refused if it would leave fewer rooms than requested,
    which can happen when it cuts off a whole branch.

    Returns:
        True iff exactly the requested number of rooms is left.
    """
    keep_rooms = set(main_path)
    num_rooms = config.room_graph.num_rooms

    def accept_fn(graph_after_node_removal: nx.Graph) -> bool:
        if graph_after_node_removal.number_of_nodes() < num_rooms:
            return False
        return all(room in graph_after_node_removal for room in keep_rooms)

    prune_outer_nodes_to_reach_size(room_graph, accept_fn, num_rooms)
    log.debug(
        "Pruned outer rooms",
        rooms=room_graph.number_of_nodes(),
        edges=room_graph.number_of_edges(),
    )
    return room_graph.number_of_nodes() == num_rooms


def spawn_area_fits_room(spawn_area: SpawnArea, room: Extent) -> bool:
    """True if the spawn area is non-empty and lies inside `room`.

    Rooms less than 3 wide have no interior, and rooms 1 high put the
    spawn slab above their own ceiling.
    """
    points = spawn_area.valid_spawn_points
    return bool(points) and all(room.contains(p) for p in points)


def try_generate(
    config: DungeonMapSpec,
    rng: random.Random,
    encoder: VoxelEncoder,
) -> GenerationResult | None:
    """Run a single generation attempt.

    On success, writes the generated voxels into `encoder`. Leaves the
    encoder untouched on failure.

    Returns:
        GenerationResult, or None if this attempt should be retried.

    Raises:
        GenerationError: If the produced dungeon breaks a structural invariant.
    """
    log.debug("Generating dungeon map")

    room_candidates = generate_room_candidates(config, rng)
    log.debug("Generated room candidates", count=len(room_candidates))

    passes = resolve_extent_overlaps(room_candidates)
    log.debug("Resolved room overlaps", passes=passes)

    doors: SymmetricMap[Extent] = SymmetricMap()
    room_graph = generate_door_graph(
        room_candidates,
        config.min_door_dim,
        config.max_door_dim,
        rng,
        doors,
    )

    # Drop rooms that can't be reached.
    subgraph = largest_connected_subgraph(room_graph)
    if subgraph is not None:
        room_graph = subgraph
    if room_graph.number_of_nodes() < config.room_graph.num_rooms:
        log.debug(
            "Attempt failed: too few connected rooms",
            connected=room_graph.number_of_nodes(),
            wanted=config.room_graph.num_rooms,
        )
        return None
    log.debug("Connected rooms", count=room_graph.number_of_nodes())

    mst = nx.minimum_spanning_tree(room_graph)
    log.debug("Spanning tree before pruning", edges=mst.number_of_edges())

    main_path = choose_main_path(
        config.room_graph.entrance_to_objective_path_length, mst
    )
    if main_path is None:
        log.debug(
            "Attempt failed: longest path too short",
            wanted=config.room_graph.entrance_to_objective_path_length,
        )
        return None
    log.debug("Main path", rooms=main_path)

    if not prune_rooms_to_desired_size(config, main_path, room_graph):
        log.debug("Pruning stalled", rooms=room_graph.number_of_nodes())

    chosen_rooms = collect_rooms_from_room_graph(room_candidates, room_graph)
    chosen_doors = collect_doors_from_room_graph(doors, room_graph)
    spawn_room = room_candidates[main_path[-1]]
    spawn_area = spawn_in_room(spawn_room)
    if not spawn_area_fits_room(spawn_area, spawn_room):
        log.debug(
            "Attempt failed: no room to spawn in",
            room=main_path[-1],
            size=spawn_room.local_supremum.as_tuple(),
        )
        return None
    log.debug("Spawn area", points=len(spawn_area.valid_spawn_points))

    result = GenerationResult(
        meta=DungeonMeta(spawn_area=spawn_area),
        rooms=chosen_rooms,
        doors=chosen_doors,
        main_path=main_path,
        room_graph=room_graph,
        validation=ValidationResult(is_valid=True),
    )
    result.validation = validate_dungeon(result, config)
    if not result.validation.is_valid:
        errors = "; ".join(result.validation.errors)
        raise GenerationError(f"Validation failed: {errors}")

    fill_map_with_rooms(chosen_rooms.values(), encoder)
    fill_map_with_doors(chosen_doors.values(), encoder)

    return result


def generate(
    config: DungeonMapSpec,
    rng: random.Random,
    encoder: VoxelEncoder,
    max_attempts: int = MAX_GENERATE_TRIES,
) -> GenerationResult:
    """Retry `try_generate` until an attempt succeeds.

    Raises:
        GenerationError: If every attempt fails. The room count, path length
            and size bounds are then most likely infeasible together.
    """
    for attempt in range(max_attempts):
        result = try_generate(config, rng, encoder)
        if result is not None:
            result.attempts = attempt + 1
            log.info("Generated dungeon", attempts=result.attempts, rooms=len(result.rooms))
            return result
        log.debug("Attempt failed", attempt=attempt + 1)

    raise GenerationError(f"Failed to generate dungeon after {max_attempts} attempts")


def generate_with_retry(
    config: DungeonMapSpec,
    encoder: VoxelEncoder,
    max_attempts: int = MAX_GENERATE_TRIES,
) -> GenerationResult:
    """Generate a dungeon from `config`, seeding the rng from `config.seed`.

    Args:
        config: Configuration
        encoder: Voxel sink, written once on success
        max_attempts: Maximum retry attempts

    Returns:
        GenerationResult with metadata, rooms, doors and attempt count.

    Raises:
        GenerationError: If the configuration is invalid or generation fails
            after max_attempts
    """
    config_errors = validate_config(config)
    if config_errors:
        raise GenerationError(f"Invalid configuration: {'; '.join(config_errors)}")

    rng = seeded_rng(config.seed)
    return generate(config, rng, encoder, max_attempts=max_attempts)
