# tests/domain/test_nav_grid.py
import pytest

from venue_nav.domain.entities.geography import Point, Rect
from venue_nav.domain.entities.venue import Obstacle
from venue_nav.domain.mechanics.mechanics_grid import (
    GridParams,
    approach_points,
    boundary_points,
    build_grid,
    corner_points,
    corridor_points,
    perimeter_points,
    shortcut_points,
)
from venue_nav.domain.mechanics.mechanics_obstacles import expand
from venue_nav.domain.mechanics.mechanics_safety import point_is_safe

VENUE = Rect(-100, -100, 200, 200)

# ---------- Fixtures


@pytest.fixture
def pair():
    # expanded bounds (-1, -1, 21, 41) and (49, -1, 71, 41): 28 apart, level with each other
    return expand(
        [
            Obstacle("o1", Point(0, 0), 20, 40),
            Obstacle("o2", Point(50, 0), 20, 40),
        ]
    )


# ---------- Phases


def test_perimeter_is_denser_near_corners():
    top = [p.x for p in perimeter_points(Rect(0, 0, 100, 10), GridParams(perimeter_offset=0)) if p.y == 0]
    assert top[:11] == [0, 5, 10, 15, 20, 35, 50, 65, 80, 95, 100]


def test_perimeter_samples_sit_on_offset_ring():
    pts = perimeter_points(Rect(-1, -1, 21, 41), GridParams())
    ring = Rect(-2, -2, 22, 42)
    for p in pts:
        on_x_edge = p.x in (ring.left, ring.right) and ring.top <= p.y <= ring.bottom
        on_y_edge = p.y in (ring.top, ring.bottom) and ring.left <= p.x <= ring.right
        assert on_x_edge or on_y_edge


def test_corner_points_are_offset_outward():
    pts = corner_points(Rect(-1, -1, 21, 41), GridParams())
    assert Point(-11, -11) in pts and Point(31, 51) in pts


def test_shortcut_points_between_close_level_obstacles(pair):
    pts = shortcut_points(pair, GridParams())
    assert Point(35, 20) in pts  # centre midpoint and the corridor between facing edges
    assert shortcut_points(pair, GridParams(shortcut_distance=10)) == []


def test_corridor_points_include_shared_edge_midpoints(pair):
    pts = corridor_points(pair, GridParams())
    assert Point(35, -1) in pts
    assert Point(35, 41) in pts


def test_approach_points_surround_each_access_point():
    pts = approach_points([Point(-2, 20)], GridParams())
    assert pts == [Point(-2, 20), Point(-12, 20), Point(8, 20), Point(-2, 10), Point(-2, 30)]


def test_boundary_points_count():
    pts = boundary_points(Rect(0, 0, 60, 60), GridParams())
    assert len(pts) == 4 + 4 * 5
    assert Point(10, 0) in pts and Point(60, 50) in pts


# ---------- Whole grid


def test_grid_contains_only_safe_points(pair):
    grid = build_grid(pair, VENUE, [Point(-2, 20)])
    assert grid
    assert all(point_is_safe(p, pair) for p in grid)
    assert Point(35, 20) in grid
    assert Point(-2, 20) in grid
    assert Point(8, 20) not in grid  # inside o1


def test_grid_without_obstacles_is_boundary_and_approaches():
    grid = build_grid(expand([]), Rect(0, 0, 60, 60), [Point(30, 30)])
    assert len(grid) == 24 + 5


def test_grid_is_deterministic(pair):
    assert build_grid(pair, VENUE, []) == build_grid(pair, VENUE, [])
