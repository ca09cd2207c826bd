# tests/app/test_build_planner.py
import pytest
from pydantic import ValidationError

from venue_nav.app.build import build
from venue_nav.app.hooks import NoopHooks
from venue_nav.app.planner import RoutePlanner
from venue_nav.config.models import PlannerModel, PointModel, SearchModel, VenueModel
from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.venue import Obstacle, Target, Venue
from venue_nav.io.planner_logging import PlannerLogging
from venue_nav.runtime.registries import make_strategy

VENUE = Venue(
    boundary=(Point(50, 50), Point(-50, 50), Point(-50, -50)),
    obstacles=(Obstacle("aisle-1", Point(0, 0), 20, 40, side_a=(Target("t1"),)),),
)


def test_build_with_defaults():
    planner = build(use_logging=False)
    assert isinstance(planner, RoutePlanner)
    assert isinstance(planner.hooks, NoopHooks)
    assert planner.config == PlannerModel()
    assert planner.config.search.strategies == ["direct", "corner", "refine", "wrap"]


def test_build_with_logging_uses_planner_logging():
    planner = build({"run_id": "t-1"})
    assert isinstance(planner.hooks, PlannerLogging)
    assert planner.hooks.run_id == "t-1"


def test_build_passes_venue_name_to_logging():
    assert build({"name": "store-7"}).hooks.name == "store-7"


def test_mapping_overrides_geometry():
    planner = build({"geometry": {"safe_margin": 2.0}}, use_logging=False)
    route = planner.plan(VENUE, ["t1"])
    # access point sits margin + clearance outside the raw edge
    assert route.destinations()[0].point == Point(4, 20)
    assert Point(-3, 20) in route.points


def test_graph_search_only():
    planner = build({"search": {"strategies": []}}, use_logging=False)
    route = planner.plan(VENUE, ["t1"])
    assert route is not None and not route.degraded
    assert {leg.strategy for leg in route.legs} == {"visibility"}


@pytest.mark.parametrize(
    "cfg",
    [
        {"search": {"strategies": ["direct", "direct"]}},
        {"search": {"strategies": ["teleport"]}},
        {"search": {"refine_resolutions": [50, 0]}},
        {"grid": {"perimeter_spacing": 0}},
        {"geometry": {"access_clearance": 0}},
        {"geometry": {"safe_margin": -1}},
        {"unknown": 1},
    ],
)
def test_invalid_config_is_rejected(cfg):
    with pytest.raises(ValidationError):
        build(cfg, use_logging=False)


def test_unknown_strategy_kind_in_registry():
    with pytest.raises(ValueError, match="teleport"):
        make_strategy("teleport", SearchModel())


# ---------- Venue input models


def test_point_model_accepts_pairs():
    assert PointModel.model_validate([3, 4]).to_domain() == Point(3, 4)


def test_venue_model_rejects_duplicate_target_ids():
    raw = {
        "boundary": [[0, 0]],
        "obstacles": [
            {"id": "a", "position": [0, 0], "width": 1, "length": 2, "side_a": [{"id": "x"}]},
            {"id": "b", "position": [5, 0], "width": 1, "length": 2, "side_b": [{"id": "x"}]},
        ],
    }
    with pytest.raises(ValidationError):
        VenueModel.model_validate(raw)


def test_venue_model_rejects_negative_size():
    with pytest.raises(ValidationError):
        VenueModel.model_validate(
            {"obstacles": [{"id": "a", "position": [0, 0], "width": -1, "length": 2}]}
        )


def test_venue_model_to_domain():
    raw = {
        "boundary": [[50, 50], [-50, 50], [-50, -50]],
        "obstacles": [
            {"id": "aisle-1", "position": [0, 0], "width": 20, "length": 40, "side_a": [{"id": "t1"}]}
        ],
    }
    assert VenueModel.model_validate(raw).to_domain() == VENUE
