"""Tests for lattice value types."""

from voxdungeon.lattice import (
    UNIT_X,
    UNIT_Y,
    UNIT_Z,
    Direction,
    Extent,
    Point,
    plane_span,
)


def box(minimum: tuple[int, int, int], size: tuple[int, int, int]) -> Extent:
    """Shorthand for building an Extent in tests."""
    return Extent(Point(*minimum), Point(*size))


# =============================================================================
# Point tests
# =============================================================================


class TestPoint:
    """Tests for Point arithmetic."""

    def test_add_sub(self):
        assert Point(1, 2, 3) + Point(4, 5, 6) == Point(5, 7, 9)
        assert Point(1, 2, 3) - Point(4, 5, 6) == Point(-3, -3, -3)

    def test_scalar_mul_and_neg(self):
        assert Point(1, -2, 3) * 2 == Point(2, -4, 6)
        assert -Point(1, -2, 3) == Point(-1, 2, -3)

    def test_dot(self):
        assert Point(1, 2, 3).dot(Point(4, 5, 6)) == 32

    def test_meet_join(self):
        a = Point(1, 5, 3)
        b = Point(4, 2, 3)
        assert a.meet(b) == Point(1, 2, 3)
        assert a.join(b) == Point(4, 5, 3)

    def test_replace_axis(self):
        assert Point(1, 2, 3).replace_axis(1, 9) == Point(1, 9, 3)

    def test_hashable(self):
        """Points work as dict keys."""
        d = {Point(1, 2, 3): "a"}
        assert d[Point(1, 2, 3)] == "a"


# =============================================================================
# Direction tests
# =============================================================================


class TestDirection:
    """Tests for face directions."""

    def test_negate(self):
        assert Direction.NEG_X.negate() == Direction.POS_X
        assert Direction.POS_Z.negate() == Direction.NEG_Z

    def test_positive(self):
        assert Direction.NEG_Y.positive() == Direction.POS_Y
        assert Direction.POS_Y.positive() == Direction.POS_Y

    def test_unit(self):
        assert Direction.POS_Z.unit == UNIT_Z
        assert Direction.NEG_Y.unit == Point(0, -1, 0)

    def test_order(self):
        """Directions iterate in negative/positive pairs per axis."""
        assert list(Direction) == [
            Direction.NEG_X,
            Direction.POS_X,
            Direction.NEG_Y,
            Direction.POS_Y,
            Direction.NEG_Z,
            Direction.POS_Z,
        ]

    def test_plane_span(self):
        assert plane_span(0) == (UNIT_Y, UNIT_Z)
        assert plane_span(1) == (UNIT_X, UNIT_Z)
        assert plane_span(2) == (UNIT_X, UNIT_Y)


# =============================================================================
# Extent tests
# =============================================================================


class TestExtent:
    """Tests for Extent set operations."""

    def test_world_supremum(self):
        assert box((1, 2, 3), (4, 4, 4)).world_supremum == Point(5, 6, 7)

    def test_from_world_supremum(self):
        e = Extent.from_min_and_world_supremum(Point(1, 1, 1), Point(3, 4, 5))
        assert e == box((1, 1, 1), (2, 3, 4))

    def test_is_empty(self):
        assert not box((0, 0, 0), (1, 1, 1)).is_empty()
        assert box((0, 0, 0), (0, 4, 4)).is_empty()
        assert box((0, 0, 0), (4, -1, 4)).is_empty()

    def test_num_points(self):
        assert box((0, 0, 0), (2, 3, 4)).num_points == 24
        assert box((0, 0, 0), (0, 3, 4)).num_points == 0

    def test_contains(self):
        e = box((0, 0, 0), (4, 4, 4))
        assert e.contains(Point(0, 0, 0))
        assert e.contains(Point(3, 3, 3))
        assert not e.contains(Point(4, 0, 0))
        assert not e.contains(Point(0, -1, 0))

    def test_intersection_overlapping(self):
        a = box((0, 0, 0), (4, 4, 4))
        b = box((2, 2, 2), (4, 4, 4))
        assert a.intersection(b) == box((2, 2, 2), (2, 2, 2))

    def test_intersection_disjoint_is_empty(self):
        a = box((0, 0, 0), (2, 2, 2))
        b = box((5, 5, 5), (2, 2, 2))
        result = a.intersection(b)
        assert result.is_empty()
        # Sizes are clamped rather than left negative
        assert result.local_supremum == Point(0, 0, 0)

    def test_intersection_touching_faces_is_empty(self):
        a = box((0, 0, 0), (4, 4, 4))
        b = box((4, 0, 0), (4, 4, 4))
        assert a.intersection(b).is_empty()

    def test_is_subset(self):
        outer = box((0, 0, 0), (4, 4, 4))
        assert box((1, 1, 1), (2, 2, 2)).is_subset(outer)
        assert outer.is_subset(outer)
        assert not box((3, 3, 3), (2, 2, 2)).is_subset(outer)

    def test_translate(self):
        e = box((0, 0, 0), (2, 2, 2))
        assert e + Point(1, 2, 3) == box((1, 2, 3), (2, 2, 2))
        assert e - Point(1, 2, 3) == box((-1, -2, -3), (2, 2, 2))

    def test_directional_grow(self):
        e = box((0, 0, 0), (4, 4, 4))
        grown = e.directional_grow({Direction.NEG_X: 1, Direction.POS_Y: 2})
        assert grown == box((-1, 0, 0), (5, 6, 4))

    def test_radial_shrink(self):
        assert box((0, 0, 0), (4, 4, 4)).radial_grow(-1) == box((1, 1, 1), (2, 2, 2))

    def test_iteration_order(self):
        """Points are visited with x varying fastest."""
        points = list(box((0, 0, 0), (2, 1, 2)))
        assert points == [
            Point(0, 0, 0),
            Point(1, 0, 0),
            Point(0, 0, 1),
            Point(1, 0, 1),
        ]

    def test_iterate_empty(self):
        assert list(box((0, 0, 0), (0, 5, 5))) == []

    def test_to_dict(self):
        assert box((1, 2, 3), (4, 5, 6)).to_dict() == {
            "minimum": [1, 2, 3],
            "local_supremum": [4, 5, 6],
        }


class TestPenetration:
    """Tests for per-direction penetration depth."""

    def test_shared_face(self):
        """Box below on Z has zero penetration toward +Z only."""
        a = box((0, 0, 0), (4, 4, 4))
        b = box((0, 0, -4), (4, 4, 4))
        pens = a.penetrations(b)
        assert pens == {
            Direction.NEG_X: 4,
            Direction.POS_X: 4,
            Direction.NEG_Y: 4,
            Direction.POS_Y: 4,
            Direction.NEG_Z: 8,
            Direction.POS_Z: 0,
        }

    def test_separated_axis_is_negative(self):
        a = box((0, 0, 0), (4, 4, 4))
        b = box((10, 0, 0), (4, 4, 4))
        pens = a.penetrations(b)
        assert pens[Direction.NEG_X] == -6
        assert pens[Direction.POS_X] == 14

    def test_min_penetration(self):
        a = box((0, 0, 0), (4, 4, 4))
        b = box((3, 1, 1), (4, 4, 4))
        vector, direction = a.min_penetration(b)
        assert direction == Direction.NEG_X
        assert vector == Point(-1, 0, 0)

    def test_min_penetration_tie_picks_first(self):
        """Identical boxes tie on every direction; NEG_X comes first."""
        a = box((0, 0, 0), (4, 4, 4))
        vector, direction = a.min_penetration(a)
        assert direction == Direction.NEG_X
        assert vector == Point(-4, 0, 0)
