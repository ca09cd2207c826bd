# tests/domain/test_leg_router.py
import pytest

from venue_nav.domain.entities.geography import Point, Rect
from venue_nav.domain.entities.route import Route
from venue_nav.domain.entities.venue import Obstacle
from venue_nav.domain.mechanics.mechanics_core import LegRouter
from venue_nav.domain.mechanics.mechanics_grid import build_grid
from venue_nav.domain.mechanics.mechanics_obstacles import expand
from venue_nav.domain.mechanics.mechanics_safety import path_is_safe
from venue_nav.domain.mechanics.mechanics_strategies import (
    CornerStrategy,
    DirectStrategy,
    GridRefineStrategy,
    WrapAroundStrategy,
)


class _CountingHooks:
    def __init__(self):
        self.legs = []

    def leg_planned(self, leg, *, origin, destination):
        self.legs.append((origin, destination, leg))


# ---------- Fixtures


@pytest.fixture
def field():
    return expand([Obstacle("o1", Point(0, 0), 20, 40)])


@pytest.fixture
def cascade():
    return [DirectStrategy(), CornerStrategy(), GridRefineStrategy(), WrapAroundStrategy()]


# ---------- Cascade


def test_cheapest_strategy_wins(field, cascade):
    r = LegRouter(field, frozenset(), cascade)
    assert r.route(Point(50, 50), Point(-2, 20)).strategy == "direct"
    assert r.route(Point(-5, 20), Point(30, 50)).strategy == "corner"
    leg = r.route(Point(-5, 20), Point(30, 20))
    assert leg.strategy == "refine"
    assert leg.verified_safe and path_is_safe(leg.points, field)


def test_graph_search_when_no_strategy_applies(field):
    grid = build_grid(field, Rect(-50, -50, 80, 90), [])
    leg = LegRouter(field, grid, []).route(Point(-5, 20), Point(30, 20))
    assert leg.strategy == "visibility"
    assert leg.verified_safe
    assert abs(leg.length - 79.0) < 1e-9


def test_unreachable_leg_is_flagged_not_hidden(field):
    r = LegRouter(field, frozenset(), [], graph_search=False)
    a, b = Point(-5, 20), Point(30, 20)
    leg = r.route(a, b)
    assert leg.strategy == "fallback"
    assert not leg.verified_safe
    assert leg.points == (a, b)
    assert Route(waypoints=(), legs=(leg,)).degraded


def test_legs_are_memoised_and_reported_once(field, cascade):
    hooks = _CountingHooks()
    r = LegRouter(field, frozenset(), cascade, hooks=hooks)
    a, b = Point(50, 50), Point(-2, 20)
    first = r.route(a, b)
    assert r.route(a, b) is first
    assert r.distance(a, b) == first.length == 82
    assert len(hooks.legs) == 1


def test_identity_leg(field, cascade):
    p = Point(-2, 20)
    leg = LegRouter(field, frozenset(), cascade).route(p, p)
    assert leg.points == (p,)
    assert leg.length == 0
