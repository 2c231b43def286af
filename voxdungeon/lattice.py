"""Integer lattice value types.

Points, face directions and axis-aligned boxes ("extents") on the 3D integer
lattice. All types are immutable and hashable so they can be used as dict
keys and copied freely.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Point:
    """A point (or vector) on the integer lattice."""

    x: int
    y: int
    z: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: int) -> Point:
        return Point(self.x * scalar, self.y * scalar, self.z * scalar)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y, -self.z)

    def __getitem__(self, axis: int) -> int:
        return (self.x, self.y, self.z)[axis]

    def dot(self, other: Point) -> int:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def meet(self, other: Point) -> Point:
        """Component-wise minimum."""
        return Point(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def join(self, other: Point) -> Point:
        """Component-wise maximum."""
        return Point(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def replace_axis(self, axis: int, value: int) -> Point:
        """Copy of this point with one component replaced."""
        components = [self.x, self.y, self.z]
        components[axis] = value
        return Point(*components)

    def all_ge(self, other: Point) -> bool:
        return self.x >= other.x and self.y >= other.y and self.z >= other.z

    def all_le(self, other: Point) -> bool:
        return self.x <= other.x and self.y <= other.y and self.z <= other.z

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)


ZERO = Point(0, 0, 0)
UNIT_X = Point(1, 0, 0)
UNIT_Y = Point(0, 1, 0)
UNIT_Z = Point(0, 0, 1)

_AXIS_UNITS = (UNIT_X, UNIT_Y, UNIT_Z)


class Direction(Enum):
    """One of the six face normals of a lattice box.

    Members are declared in the order used wherever a "first" direction is
    picked (penetration minimum, adjacency tests).
    """

    NEG_X = (0, True)
    POS_X = (0, False)
    NEG_Y = (1, True)
    POS_Y = (1, False)
    NEG_Z = (2, True)
    POS_Z = (2, False)

    @property
    def axis(self) -> int:
        return self.value[0]

    @property
    def is_negative(self) -> bool:
        return self.value[1]

    @property
    def unit(self) -> Point:
        """Unit vector pointing along this direction."""
        u = _AXIS_UNITS[self.axis]
        return -u if self.is_negative else u

    def negate(self) -> Direction:
        return _DIRECTION_BY_VALUE[(self.axis, not self.is_negative)]

    def positive(self) -> Direction:
        return _DIRECTION_BY_VALUE[(self.axis, False)]


_DIRECTION_BY_VALUE = {d.value: d for d in Direction}

ALL_DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


def plane_span(axis: int) -> tuple[Point, Point]:
    """Return the two unit vectors spanning the plane normal to `axis`."""
    if axis == 0:
        return UNIT_Y, UNIT_Z
    if axis == 1:
        return UNIT_X, UNIT_Z
    return UNIT_X, UNIT_Y


@dataclass(frozen=True)
class Extent:
    """Axis-aligned box on the lattice.

    Stored as a minimum corner plus a per-axis size ("local supremum"). The
    box covers every point p with ``minimum <= p < minimum + local_supremum``.
    An extent with any non-positive size component is empty.
    """

    minimum: Point
    local_supremum: Point

    @classmethod
    def from_min_and_local_supremum(cls, minimum: Point, local_supremum: Point) -> Extent:
        return cls(minimum, local_supremum)

    @classmethod
    def from_min_and_world_supremum(cls, minimum: Point, world_supremum: Point) -> Extent:
        return cls(minimum, world_supremum - minimum)

    @property
    def world_supremum(self) -> Point:
        """Exclusive upper corner."""
        return self.minimum + self.local_supremum

    def is_empty(self) -> bool:
        sup = self.local_supremum
        return sup.x <= 0 or sup.y <= 0 or sup.z <= 0

    @property
    def num_points(self) -> int:
        if self.is_empty():
            return 0
        sup = self.local_supremum
        return sup.x * sup.y * sup.z

    def contains(self, p: Point) -> bool:
        sup = self.world_supremum
        return p.all_ge(self.minimum) and p.x < sup.x and p.y < sup.y and p.z < sup.z

    def intersection(self, other: Extent) -> Extent:
        minimum = self.minimum.join(other.minimum)
        sup = self.world_supremum.meet(other.world_supremum)
        return Extent(minimum, (sup - minimum).join(ZERO))

    def is_subset(self, other: Extent) -> bool:
        """True if every point of this extent lies in `other`."""
        if self.is_empty():
            return True
        return self.minimum.all_ge(other.minimum) and self.world_supremum.all_le(
            other.world_supremum
        )

    def __add__(self, offset: Point) -> Extent:
        return Extent(self.minimum + offset, self.local_supremum)

    def __sub__(self, offset: Point) -> Extent:
        return Extent(self.minimum - offset, self.local_supremum)

    def with_local_supremum(self, local_supremum: Point) -> Extent:
        return Extent(self.minimum, local_supremum)

    def penetrations(self, other: Extent) -> dict[Direction, int]:
        """How far this extent must move along each direction to clear `other`.

        The value is measured along the direction's axis only. Zero means the
        two extents share a face on that side; negative means they are already
        separated along that axis.
        """
        pens: dict[Direction, int] = {}
        for d in ALL_DIRECTIONS:
            a = d.axis
            if d.is_negative:
                pens[d] = self.world_supremum[a] - other.minimum[a]
            else:
                pens[d] = other.world_supremum[a] - self.minimum[a]
        return pens

    def min_penetration(self, other: Extent) -> tuple[Point, Direction]:
        """Smallest penetration as a displacement vector and its direction."""
        pens = self.penetrations(other)
        direction = min(ALL_DIRECTIONS, key=lambda d: pens[d])
        return direction.unit * pens[direction], direction

    def directional_grow(self, grow_by: Mapping[Direction, int]) -> Extent:
        """Move each face outward by the given amount (negative shrinks)."""
        minimum = [self.minimum.x, self.minimum.y, self.minimum.z]
        sup = [self.local_supremum.x, self.local_supremum.y, self.local_supremum.z]
        for d, amount in grow_by.items():
            if d.is_negative:
                minimum[d.axis] -= amount
            sup[d.axis] += amount
        return Extent(Point(*minimum), Point(*sup))

    def radial_grow(self, amount: int) -> Extent:
        return self.directional_grow({d: amount for d in ALL_DIRECTIONS})

    def __iter__(self) -> Iterator[Point]:
        if self.is_empty():
            return
        lo = self.minimum
        hi = self.world_supremum
        for z in range(lo.z, hi.z):
            for y in range(lo.y, hi.y):
                for x in range(lo.x, hi.x):
                    yield Point(x, y, z)

    def to_dict(self) -> dict[str, list[int]]:
        return {
            "minimum": list(self.minimum.as_tuple()),
            "local_supremum": list(self.local_supremum.as_tuple()),
        }
