# tests/domain/test_obstacles_targets.py
import pytest

from venue_nav.domain.entities.geography import Point, Rect
from venue_nav.domain.entities.venue import Obstacle, Side, Target, Venue
from venue_nav.domain.mechanics.mechanics_obstacles import expand
from venue_nav.domain.mechanics.mechanics_targets import (
    TargetNotFound,
    access_point,
    find_target,
    resolve_access,
    target_position,
)

# ---------- Fixtures


@pytest.fixture
def aisle() -> Obstacle:
    return Obstacle(
        "aisle-1",
        Point(0, 0),
        width=20,
        length=40,
        side_a=(Target("t1"),),
        side_b=(Target("t2"),),
    )


@pytest.fixture
def venue(aisle) -> Venue:
    return Venue(boundary=(Point(50, 50), Point(-50, 50), Point(-50, -50)), obstacles=(aisle,))


# ---------- Expansion


def test_expand_grows_every_edge_by_margin(aisle):
    field = expand([aisle], margin=1.0)
    assert field[0].bounds == Rect(-1, -1, 21, 41)
    assert field.bounds.tolist() == [[-1.0, -1.0, 21.0, 41.0]]
    assert len(field) == 1


def test_field_bounds_are_read_only(aisle):
    field = expand([aisle])
    with pytest.raises(ValueError):
        field.bounds[0, 0] = 5.0


# ---------- Target layout


def test_sole_target_is_centred_on_its_side(aisle):
    assert aisle.is_tall
    assert target_position(aisle, Side.A, aisle.side_a[0]) == Point(4, 20)
    assert target_position(aisle, Side.B, aisle.side_b[0]) == Point(16, 20)


def test_wide_obstacle_lays_targets_along_x():
    wide = Obstacle("w", Point(0, 0), width=40, length=20, side_a=(Target("t"),))
    pos = target_position(wide, Side.A, wide.side_a[0])
    assert pos == Point(20, 4)
    assert access_point(wide, Side.A, pos, 2.0) == Point(20, -2)


def test_weighted_slots():
    ob = Obstacle("o", Point(0, 0), 20, 40, side_a=(Target("a", 1.0), Target("b", 3.0)))
    # span 40 - 4 * 3 = 28 split 7 / 21
    assert abs(target_position(ob, Side.A, ob.side_a[0]).y - 7.5) < 1e-9
    assert abs(target_position(ob, Side.A, ob.side_a[1]).y - 25.5) < 1e-9


def test_zero_weights_do_not_divide_by_zero():
    ob = Obstacle("o", Point(0, 0), 20, 40, side_a=(Target("a", 0.0),))
    assert target_position(ob, Side.A, ob.side_a[0]) == Point(4, 4)


# ---------- Resolution


def test_find_target_scans_both_sides(venue, aisle):
    ob, side, t = find_target(venue, "t2")
    assert ob is aisle and side is Side.B and t.id == "t2"


def test_unknown_target_raises_lookup_error(venue):
    with pytest.raises(TargetNotFound) as exc:
        find_target(venue, "nope")
    assert exc.value.target_id == "nope"
    assert isinstance(exc.value, LookupError)


def test_access_point_sits_outside_expanded_bound(venue):
    field = expand(venue.obstacles)
    acc = resolve_access(venue, "t1", field)
    assert acc.target_position == Point(4, 20)
    assert acc.access_point == Point(-2, 20)
    assert acc.side is Side.A
    assert acc.reach_safe


def test_access_point_is_pushed_past_a_neighbouring_bound(aisle):
    neighbour = Obstacle("n", Point(-10, 0), width=7, length=40)  # expanded x in [-11, -2]
    venue = Venue(boundary=(Point(50, 50),), obstacles=(aisle, neighbour))
    acc = resolve_access(venue, "t1", expand(venue.obstacles))
    assert acc.access_point == Point(-12, 20)
    # reaching back in from -12 crosses the neighbour
    assert not acc.reach_safe


def test_reach_check_ignores_the_target_obstacle_itself(aisle):
    far = Obstacle("far", Point(200, 200), 10, 10)
    venue = Venue(boundary=(Point(50, 50),), obstacles=(aisle, far))
    assert resolve_access(venue, "t2", expand(venue.obstacles)).reach_safe
