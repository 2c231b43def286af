"""Overlap resolution for sets of lattice boxes."""

from __future__ import annotations

from voxdungeon.lattice import Extent


def push_extents_apart(r1: Extent, r2: Extent) -> tuple[Extent, Extent]:
    """Separate two overlapping extents along their minimum penetration axis.

    Only ever moves an extent in a positive direction: when the shallowest
    exit for `r1` is negative, `r2` is pushed the opposite way instead.
    """
    push_v, direction = r1.min_penetration(r2)

    # Only push in positive directions to prevent infinite cycles.
    if direction.is_negative:
        return r1, r2 - push_v
    return r1 + push_v, r2


def resolve_extent_overlaps(rooms: list[Extent]) -> int:
    """Push extents apart in place until no two of them intersect.

    Each pass visits every unordered pair, so a pass is O(N^2); fine for a
    few hundred rooms, slow for thousands.

    Args:
        rooms: Extents to separate. Modified in place; sizes never change.

    Returns:
        Number of full passes made over the pairs.
    """
    num_rooms = len(rooms)
    passes = 0
    while True:
        passes += 1
        all_rooms_separated = True
        for i in range(num_rooms):
            for j in range(i + 1, num_rooms):
                r1, r2 = rooms[i], rooms[j]
                if r1.intersection(r2).is_empty():
                    continue

                all_rooms_separated = False
                r1, r2 = push_extents_apart(r1, r2)
                assert r1.intersection(r2).is_empty(), "push left extents overlapping"
                rooms[i] = r1
                rooms[j] = r2

        if all_rooms_separated:
            return passes
