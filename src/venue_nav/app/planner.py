# venue_nav/app/planner.py
import time
from collections.abc import Mapping, Sequence

from venue_nav.app.hooks import NoopHooks, PlannerHooks
from venue_nav.app.protocols import LegRouting
from venue_nav.config.models import PlannerModel, VenueModel
from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.route import LegPath, Route, Waypoint, WaypointType
from venue_nav.domain.entities.venue import Venue
from venue_nav.domain.mechanics.mechanics_factory import build_leg_router, grid_params
from venue_nav.domain.mechanics.mechanics_grid import build_grid
from venue_nav.domain.mechanics.mechanics_obstacles import expand
from venue_nav.domain.mechanics.mechanics_targets import TargetAccess, TargetNotFound, resolve_access


def visit_order(origin: Point, accesses: Sequence[TargetAccess], router: LegRouting) -> list[TargetAccess]:
    """Greedy nearest-unvisited order; ties go to the earlier request."""
    remaining = list(accesses)
    order: list[TargetAccess] = []
    here = origin
    while remaining:
        best, best_d = 0, router.distance(here, remaining[0].access_point)
        for i in range(1, len(remaining)):
            d = router.distance(here, remaining[i].access_point)
            if d < best_d:
                best, best_d = i, d
        nxt = remaining.pop(best)
        order.append(nxt)
        here = nxt.access_point
    return order


def _step(waypoints: list[Waypoint], p: Point, kind: WaypointType):
    if waypoints[-1].point != p:
        waypoints.append(Waypoint(p, kind))


def assemble_route(origin: Point, order: Sequence[TargetAccess], router: LegRouting) -> Route:
    """
    Start at the origin, walk each leg to the target's access point, reach in
    to the target and step back out, then return to the origin.
    """
    waypoints = [Waypoint(origin, WaypointType.START)]
    legs: list[LegPath] = []
    here = origin
    for ordinal, acc in enumerate(order, start=1):
        leg = router.route(here, acc.access_point)
        legs.append(leg)
        for p in leg.points[1:]:
            _step(waypoints, p, WaypointType.REGULAR)
        waypoints.append(
            Waypoint(acc.target_position, WaypointType.DESTINATION, ordinal, acc.target_id)
        )
        _step(waypoints, acc.access_point, WaypointType.REGULAR)
        here = acc.access_point

    back = router.route(here, origin)
    legs.append(back)
    for p in back.points[1:]:
        _step(waypoints, p, WaypointType.REGULAR)
    last = waypoints[-1]
    if last.type is WaypointType.REGULAR and last.point == origin:
        waypoints[-1] = Waypoint(origin, WaypointType.END)
    else:
        waypoints.append(Waypoint(origin, WaypointType.END))
    unsafe = tuple(acc.target_id for acc in order if not acc.reach_safe)
    return Route(tuple(waypoints), tuple(legs), unsafe)


class RoutePlanner:
    def __init__(self, config: PlannerModel | None = None, hooks: PlannerHooks | None = None):
        self.config = config or PlannerModel()
        self.hooks = hooks or NoopHooks()

    def plan(self, venue: Venue | Mapping, target_ids: Sequence[str]) -> Route | None:
        t0 = time.perf_counter()
        if not isinstance(venue, Venue):
            venue = VenueModel.model_validate(venue).to_domain()
        ids = list(target_ids)
        if not venue.boundary or not ids:
            self.hooks.error(reason="empty_input", targets=ids)
            return None

        geo = self.config.geometry
        obstacles = expand(venue.obstacles, geo.safe_margin)
        self.hooks.plan_start(targets=ids, obstacles=len(obstacles))
        try:
            accesses = [
                resolve_access(
                    venue,
                    tid,
                    obstacles,
                    margin=geo.safe_margin,
                    clearance=geo.access_clearance,
                    spacing=geo.shelf_spacing,
                )
                for tid in ids
            ]
        except TargetNotFound as exc:
            self.hooks.error(reason="target_not_found", target_id=exc.target_id)
            return None

        origin = venue.origin
        nav_grid = build_grid(
            obstacles,
            venue.bounds(),
            [a.access_point for a in accesses],
            grid_params(self.config.grid),
        )
        self.hooks.grid_built(points=len(nav_grid))

        router = build_leg_router(self.config, obstacles, nav_grid, hooks=self.hooks)
        route = assemble_route(origin, visit_order(origin, accesses, router), router)
        self.hooks.plan_end(route=route, wall_ms=(time.perf_counter() - t0) * 1000.0)
        return route

    def plan_one(self, venue: Venue | Mapping, target_id: str) -> Route | None:
        return self.plan(venue, [target_id])


def find_route_to_targets(
    venue: Venue | Mapping,
    target_ids: Sequence[str],
    *,
    config: PlannerModel | None = None,
    hooks: PlannerHooks | None = None,
) -> Route | None:
    return RoutePlanner(config, hooks).plan(venue, target_ids)


def find_route_to_target(
    venue: Venue | Mapping,
    target_id: str,
    *,
    config: PlannerModel | None = None,
    hooks: PlannerHooks | None = None,
) -> Route | None:
    return find_route_to_targets(venue, [target_id], config=config, hooks=hooks)
