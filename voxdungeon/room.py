"""Room and door geometry.

Decides where doors can be cut between adjacent rooms, builds the room
adjacency graph, and writes room shells and door openings into a voxel sink.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import networkx as nx
import structlog

from voxdungeon.lattice import ALL_DIRECTIONS, Direction, Extent, Point, plane_span
from voxdungeon.sampling import sample_range
from voxdungeon.symmetric_map import SymmetricMap

log = structlog.get_logger()

WALL_THICKNESS = 5
DOOR_THICKNESS = 2


@dataclass(frozen=True)
class Voxel:
    """Voxel payload written to the sink."""

    distance: float
    voxel_type: int


# Largest finite 32-bit float
F32_MAX = 3.4028234663852886e38

EMPTY_VOXEL = Voxel(distance=F32_MAX, voxel_type=0)
FLOOR_VOXEL = Voxel(distance=-1.0, voxel_type=1)


class VoxelEncoder(Protocol):
    """Sink that receives generated voxels.

    Implement this to let the generator write into your own world storage.
    """

    def encode_voxel(self, point: Point, data: Voxel) -> None: ...


@dataclass
class SpawnArea:
    """Points a player may spawn on."""

    valid_spawn_points: list[Point] = field(default_factory=list)


def fill_map_with_rooms(rooms: Iterable[Extent], encoder: VoxelEncoder) -> None:
    """Write a WALL_THICKNESS shell of floor voxels for each room."""
    for r in rooms:
        r_interior = r.radial_grow(-WALL_THICKNESS)
        for p in r:
            if not r_interior.contains(p):
                encoder.encode_voxel(p, FLOOR_VOXEL)


def fill_map_with_doors(doors: Iterable[Extent], encoder: VoxelEncoder) -> None:
    """Carve every door extent out as empty voxels."""
    for d in doors:
        for p in d:
            encoder.encode_voxel(p, EMPTY_VOXEL)


def get_door_able_extent_for_rooms(
    r1: Extent, r2: Extent
) -> tuple[Extent, Direction] | None:
    """Return the region where a doorway could be cut between two rooms.

    Returns:
        ``(extent, direction)`` where `direction` is the face of `r1` that
        touches `r2`, or None if the rooms don't share exactly one face. The
        extent may be empty when the faces don't actually overlap.
    """
    pen = r1.penetrations(r2)
    zeroes = [d for d in ALL_DIRECTIONS if pen[d] == 0]

    # One zero is a shared face. Two would be a shared edge, three a corner.
    if len(zeroes) != 1:
        return None

    direction = zeroes[0]
    neg_dir = direction.negate()

    # Keep the door off the room's own corners.
    grow_by = {d: -1 for d in ALL_DIRECTIONS if d not in (direction, neg_dir)}

    # Grow the rooms into each other along the door normal so the door
    # region is just their intersection.
    r1_grow_by = dict(grow_by)
    r1_grow_by[neg_dir] = 1
    r2_grow_by = dict(grow_by)
    r2_grow_by[direction] = 1

    grown_r1 = r1.directional_grow(r1_grow_by)
    grown_r2 = r2.directional_grow(r2_grow_by)

    return grown_r1.intersection(grown_r2), direction


def try_generate_door_big_enough_between_rooms(
    min_door_dim: int,
    max_door_dim: int,
    r1: Extent,
    r2: Extent,
    rng: random.Random,
) -> Extent | None:
    """Pick a random DOOR_THICKNESS x N x M door between two rooms.

    N and M are clamped to ``[min_door_dim, max_door_dim]``. Returns None if
    the rooms aren't face-adjacent, the shared face is too small, or clamping
    pushed the door outside the shared face.
    """
    found = get_door_able_extent_for_rooms(r1, r2)
    if found is None:
        return None
    extent, direction = found
    if extent.is_empty():
        return None

    n = direction.positive().unit
    u, v = plane_span(direction.axis)

    sup = extent.local_supremum
    u_sup = sup.dot(u)
    v_sup = sup.dot(v)
    if u_sup < min_door_dim or v_sup < min_door_dim:
        return None

    minimum = extent.minimum
    u_min = minimum.dot(u)
    v_min = minimum.dot(v)

    door_u_min, door_u_max = sample_range(rng, u_min, u_min + u_sup - 1)
    door_v_min, door_v_max = sample_range(rng, v_min, v_min + v_sup - 1)
    door_u_sup = max(min(1 + door_u_max - door_u_min, max_door_dim), min_door_dim)
    door_v_sup = max(min(1 + door_v_max - door_v_min, max_door_dim), min_door_dim)

    door_min = n * minimum.dot(n) + u * door_u_min + v * door_v_min
    door_sup = n * DOOR_THICKNESS + u * door_u_sup + v * door_v_sup
    door = Extent.from_min_and_local_supremum(door_min, door_sup)

    if door.is_subset(extent):
        return door
    return None


def generate_door_graph(
    rooms: list[Extent],
    min_door_dim: int,
    max_door_dim: int,
    rng: random.Random,
    doors: SymmetricMap[Extent],
) -> nx.Graph:
    """Build the room adjacency graph, cutting one door per adjacent pair.

    Node keys are indices into `rooms`. Door extents go into `doors` rather
    than onto the edges, keyed by the same indices.
    """
    graph = nx.Graph()
    graph.add_nodes_from(range(len(rooms)))
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            door = try_generate_door_big_enough_between_rooms(
                min_door_dim, max_door_dim, rooms[i], rooms[j], rng
            )
            if door is not None:
                doors.insert(i, j, door)
                graph.add_edge(i, j)

    log.debug("Built door graph", rooms=len(rooms), doors=graph.number_of_edges())
    return graph


def collect_rooms_from_room_graph(
    room_candidates: list[Extent], room_graph: nx.Graph
) -> dict[int, Extent]:
    """Map each room left in the graph to its extent."""
    return {i: room_candidates[i] for i in room_graph.nodes}


def collect_doors_from_room_graph(
    doors: SymmetricMap[Extent], room_graph: nx.Graph
) -> dict[tuple[int, int], Extent]:
    """Map each edge left in the graph to its door extent."""
    return {
        SymmetricMap.order_indices(i, j): doors.get(i, j) for i, j in room_graph.edges
    }


def spawn_in_room(room: Extent) -> SpawnArea:
    """The 1-voxel-high slab inside the room walls, just above the floor.

    Doors cut into the floor are not excluded, so a spawn point may sit in
    a doorway.
    """
    internal_boundary = room.radial_grow(-1)
    sup = internal_boundary.local_supremum.replace_axis(1, 1)
    hero_spawn_area = internal_boundary.with_local_supremum(sup)
    return SpawnArea(valid_spawn_points=list(hero_spawn_area))
