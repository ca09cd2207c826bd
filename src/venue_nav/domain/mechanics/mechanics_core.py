# venue_nav/domain/mechanics/mechanics_core.py
from collections.abc import Sequence
from dataclasses import dataclass, field

from venue_nav.app.hooks import NoopHooks, PlannerHooks
from venue_nav.app.protocols import LegRouting, LegStrategy
from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.route import LegPath
from venue_nav.domain.geometry import drop_repeats, elbow, ensure_manhattan, path_length
from venue_nav.domain.mechanics.mechanics_obstacles import ObstacleField
from venue_nav.domain.mechanics.mechanics_safety import path_is_safe
from venue_nav.domain.mechanics.mechanics_visibility import find_path


@dataclass
class LegRouter(LegRouting):
    obstacles: ObstacleField
    nav_grid: frozenset[Point]
    strategies: Sequence[LegStrategy]
    graph_search: bool = True
    hooks: PlannerHooks = field(default_factory=NoopHooks)
    _memo: dict[tuple[Point, Point], LegPath] = field(default_factory=dict, init=False, repr=False)

    def route(self, a: Point, b: Point) -> LegPath:
        key = (a, b)
        if key not in self._memo:
            leg = self._solve(a, b)
            self._memo[key] = leg
            self.hooks.leg_planned(leg, origin=a, destination=b)
        return self._memo[key]

    def distance(self, a: Point, b: Point) -> float:
        return self.route(a, b).length

    def _solve(self, a: Point, b: Point) -> LegPath:
        for strategy in self.strategies:
            found = strategy.candidates(a, b, self.obstacles)
            if found:
                # min keeps the first of equally short candidates
                return self._finish(min(found, key=path_length), strategy.name)
        if self.graph_search:
            path = find_path(a, b, self.nav_grid, self.obstacles)
            if path is not None:
                return self._finish(path, "visibility")
        return LegPath(tuple(drop_repeats(elbow(a, b))), "fallback", verified_safe=False)

    def _finish(self, path: Sequence[Point], name: str) -> LegPath:
        points = drop_repeats(ensure_manhattan(path))
        return LegPath(tuple(points), name, path_is_safe(points, self.obstacles))
