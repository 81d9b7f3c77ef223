"""Tests for vector geometry, predicates and depth passes."""

import pytest

from routerpath.core.geometry import (
    INCH_TO_MILLIMETER,
    angle_sign,
    barycenter_2d,
    clockwise,
    inch_to_millimeter,
    is_clockwise_polygon,
    is_convex_polygon,
    millimeter_to_inch,
    rotate_2d,
)
from routerpath.core.passes import depth_passes
from routerpath.domain import Polygon, Vector
from routerpath.exceptions import (
    EmptyInputError,
    InvalidConfigurationError,
    InvalidGeometryError,
)


@pytest.fixture
def square() -> Polygon:
    """Unit square, positive signed area."""
    return Polygon.from_coords([(0, 0), (1, 0), (1, 1), (0, 1)])


@pytest.fixture
def l_shape() -> Polygon:
    """L shape with one reflex vertex at (1, 1), positive signed area."""
    return Polygon.from_coords([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])


class TestRotate:
    """Tests for 2D rotation and scale."""

    def test_quarter_turn(self) -> None:
        p = rotate_2d(Vector(1, 0), Vector(0, 0), 90.0)
        assert p.x == pytest.approx(0.0, abs=1e-12)
        assert p.y == pytest.approx(1.0)

    def test_rotation_around_center(self) -> None:
        p = rotate_2d(Vector(3, 2), Vector(2, 2), 180.0)
        assert p.x == pytest.approx(1.0)
        assert p.y == pytest.approx(2.0)

    def test_scale(self) -> None:
        p = rotate_2d(Vector(1, 0), Vector(0, 0), 0.0, scale=2.5)
        assert p.x == pytest.approx(2.5)

    def test_keeps_z(self) -> None:
        assert rotate_2d(Vector(1, 0, -3), Vector(0, 0), 45.0).z == -3

    def test_input_not_modified(self) -> None:
        point = Vector(1, 0)
        rotate_2d(point, Vector(0, 0), 90.0)
        assert point == Vector(1, 0)


class TestBarycenter:
    """Tests for barycenter_2d."""

    def test_square(self, square: Polygon) -> None:
        assert barycenter_2d(square) == Vector(0.5, 0.5, 0.0)

    def test_drops_z(self) -> None:
        assert barycenter_2d([Vector(0, 0, 5), Vector(2, 0, 5)]) == Vector(1, 0, 0)

    def test_empty_input(self) -> None:
        with pytest.raises(EmptyInputError):
            barycenter_2d([])


class TestPredicates:
    """Tests for angle sign, convexity and orientation."""

    def test_angle_sign(self) -> None:
        center = Vector(0, 0)
        assert angle_sign(center, Vector(1, 0), Vector(0, 1))
        assert not angle_sign(center, Vector(0, 1), Vector(1, 0))
        # Collinear counts as positive
        assert angle_sign(center, Vector(1, 0), Vector(2, 0))

    def test_convex_square(self, square: Polygon) -> None:
        assert is_convex_polygon(square)
        assert is_convex_polygon(square.reversed())

    def test_reflex_vertex_not_convex(self, l_shape: Polygon) -> None:
        assert not is_convex_polygon(l_shape)
        assert not is_convex_polygon(l_shape.reversed())

    def test_small_polygons(self) -> None:
        assert not is_convex_polygon([Vector(0, 0), Vector(1, 0)])
        assert is_convex_polygon([Vector(0, 0), Vector(1, 0), Vector(0, 1)])

    def test_clockwise_flips_under_reversal(self, square: Polygon, l_shape: Polygon) -> None:
        assert is_clockwise_polygon(square)
        assert not is_clockwise_polygon(square.reversed())
        assert is_clockwise_polygon(l_shape)
        assert not is_clockwise_polygon(l_shape.reversed())

    def test_clockwise_follows_y_down(self) -> None:
        square = [Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1)]
        assert is_clockwise_polygon(square)

    def test_collinear_counts_as_clockwise(self) -> None:
        assert is_clockwise_polygon([Vector(0, 0), Vector(1, 0), Vector(2, 0)])

    def test_clockwise_needs_three_points(self) -> None:
        with pytest.raises(InvalidGeometryError):
            is_clockwise_polygon([Vector(0, 0), Vector(1, 0)])

    def test_clockwise_copy(self, square: Polygon) -> None:
        result = clockwise(square.reversed())
        assert is_clockwise_polygon(result)
        assert result == square
        assert clockwise(result) == result


class TestUnits:
    """Tests for inch/millimeter conversion."""

    def test_inch_to_millimeter(self) -> None:
        assert inch_to_millimeter(1.0) == INCH_TO_MILLIMETER
        assert inch_to_millimeter(0.5) == pytest.approx(12.7)

    def test_millimeter_to_inch(self) -> None:
        assert millimeter_to_inch(25.4) == pytest.approx(1.0, abs=1e-6)


class TestDepthPasses:
    """Tests for depth pass computation."""

    def test_exact_division(self) -> None:
        assert depth_passes(1.0, 0.5) == [-0.5, -1.0]

    def test_last_pass_clamped(self) -> None:
        passes = depth_passes(1.0, 0.3)
        assert len(passes) == 4
        assert passes[-1] == -1.0
        assert passes[2] == pytest.approx(-0.9)

    def test_round_off(self) -> None:
        """1.1 / 0.1 is slightly above 11 in floating point."""
        passes = depth_passes(1.1, 0.1)
        assert len(passes) == 11
        assert passes[-1] == -1.1

    def test_pass_deeper_than_depth(self) -> None:
        assert depth_passes(0.25, 1.0) == [-0.25]

    def test_zero_depth(self) -> None:
        assert depth_passes(0.0, 0.5) == []

    @pytest.mark.parametrize("pass_depth", [0.0, -0.1])
    def test_invalid_pass_depth(self, pass_depth: float) -> None:
        with pytest.raises(InvalidConfigurationError):
            depth_passes(1.0, pass_depth)

    def test_negative_depth(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            depth_passes(-1.0, 0.5)
