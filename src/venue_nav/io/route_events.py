# venue_nav/io/route_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for planning records (analytics only, never fed back into planning)
@dataclass
class RouteEvent:
    run_id: str
    name: str  # stable event name


@dataclass
class LegPlanned(RouteEvent):
    origin: tuple[float, float]
    destination: tuple[float, float]
    strategy: str
    length: float
    points: int
    verified_safe: bool


@dataclass
class RouteRejected(RouteEvent):
    reason: Literal["empty_input", "target_not_found"]
    target_id: str | None = None


@dataclass
class RoutePlanned(RouteEvent):
    waypoints: int
    destinations: list[str]
    length: float
    degraded: bool
    wall_ms: float | None = None
