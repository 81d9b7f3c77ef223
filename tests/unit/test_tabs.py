"""Tests for tab placement on segments and circles."""

import logging
import math

import pytest

from routerpath.config import TabProperties
from routerpath.core.geometry import rotate_2d
from routerpath.core.tabs import tab_angle_for_circle, tab_arc_for_circle, tab_points_for_segment
from routerpath.domain import Vector
from routerpath.exceptions import InvalidGeometryError


@pytest.fixture
def tabs() -> TabProperties:
    return TabProperties(width=1.0, height=0.1)


class TestSegmentTabs:
    """Tests for tab_points_for_segment."""

    def test_centered_tab(self, tabs: TabProperties) -> None:
        points = tab_points_for_segment(Vector(0, 0), Vector(4, 0), tabs)
        assert points == (Vector(0, 0), Vector(1.5, 0), Vector(2.5, 0), Vector(4, 0))

    def test_inner_points_width_apart(self, tabs: TabProperties) -> None:
        start = Vector(1, 1)
        end = Vector(4, 5)
        _, tab_start, tab_end, _ = tab_points_for_segment(start, end, tabs)

        assert Vector.from_points(tab_start, tab_end).length() == pytest.approx(tabs.width)
        assert Vector.from_points(start, tab_start).length() == pytest.approx(2.0)
        direction = Vector.from_points(start, end).normalized()
        step = Vector.from_points(tab_start, tab_end).normalized()
        assert step.equals(direction, precision=1e-9)

    def test_segment_too_short(self, tabs: TabProperties) -> None:
        """A segment not longer than the tab gets no tab."""
        assert len(tab_points_for_segment(Vector(0, 0), Vector(0.5, 0), tabs)) == 2
        assert len(tab_points_for_segment(Vector(0, 0), Vector(1.0, 0), tabs)) == 2

    def test_inactive_tabs(self) -> None:
        points = tab_points_for_segment(Vector(0, 0), Vector(10, 0), TabProperties())
        assert points == (Vector(0, 0), Vector(10, 0))

    def test_inactive_when_height_is_zero(self) -> None:
        tabs = TabProperties(width=1.0, height=0.0)
        assert not tabs.is_active
        assert len(tab_points_for_segment(Vector(0, 0), Vector(10, 0), tabs)) == 2

    def test_drops_z(self, tabs: TabProperties) -> None:
        points = tab_points_for_segment(Vector(0, 0, -1), Vector(4, 0, -1), tabs)
        assert all(p.z == 0.0 for p in points)


class TestCircleTabs:
    """Tests for tab_arc_for_circle."""

    def test_tab_angle(self) -> None:
        assert tab_angle_for_circle(5.0, 0.5) == pytest.approx(5.7296, abs=1e-4)
        assert tab_angle_for_circle(0.5, 0.5) == pytest.approx(57.296, abs=1e-3)

    def test_active_tabs(self) -> None:
        center = Vector(1, 2)
        layout = tab_arc_for_circle(center, 5.0, TabProperties(width=0.5, height=0.1))

        assert layout.is_active
        assert layout.tab_angle == pytest.approx(5.7296, abs=1e-4)
        assert layout.start == Vector(6, 2)

        expected = rotate_2d(layout.start, center, 180.0 - layout.tab_angle)
        assert layout.endpoints[0].equals(expected, precision=1e-9)
        for point in layout.endpoints:
            assert math.dist((point.x, point.y), (center.x, center.y)) == pytest.approx(5.0)

    def test_endpoints_split_circle(self) -> None:
        """Cut arcs and tab arcs add up to a full turn."""
        center = Vector(0, 0)
        layout = tab_arc_for_circle(center, 5.0, TabProperties(width=0.5, height=0.1))
        first, second, third = layout.endpoints

        def angle(p: Vector) -> float:
            return math.degrees(math.atan2(p.y, p.x)) % 360.0

        assert angle(first) == pytest.approx(180.0 - layout.tab_angle)
        assert angle(second) == pytest.approx(180.0)
        assert angle(third) == pytest.approx(360.0 - layout.tab_angle)

    def test_too_wide_disables_tabs(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="routerpath.core.tabs"):
            layout = tab_arc_for_circle(Vector(0, 0), 0.5, TabProperties(width=0.5, height=0.1))

        assert not layout.is_active
        assert layout.endpoints == ()
        assert layout.tab_angle == pytest.approx(57.296, abs=1e-3)
        assert "Tabs disabled" in caplog.text

    def test_inactive_tabs(self) -> None:
        layout = tab_arc_for_circle(Vector(0, 0), 5.0, TabProperties())
        assert not layout.is_active
        assert layout.start == Vector(5, 0)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_invalid_radius(self, radius: float) -> None:
        with pytest.raises(InvalidGeometryError):
            tab_arc_for_circle(Vector(0, 0), radius, TabProperties(width=0.5, height=0.1))
