# app/hooks.py
from typing import Protocol

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.route import LegPath, Route


class PlannerHooks(Protocol):
    def plan_start(self, *, targets: list[str], obstacles: int): ...
    def grid_built(self, *, points: int): ...
    def leg_planned(self, leg: LegPath, *, origin: Point, destination: Point): ...
    def plan_end(self, *, route: Route, wall_ms: float): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def plan_start(self, **_):
        pass

    def grid_built(self, **_):
        pass

    def leg_planned(self, *_, **__):
        pass

    def plan_end(self, **_):
        pass

    def error(self, **_):
        pass
