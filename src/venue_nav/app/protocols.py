from typing import Protocol, runtime_checkable

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.route import LegPath
from venue_nav.domain.mechanics.mechanics_obstacles import ObstacleField


# ------------- Mechanics --------------------
@runtime_checkable
class LegStrategy(Protocol):
    """
    Responsibilities:
      • Propose Manhattan paths from a to b that stay clear of every expanded obstacle.
      • Return only paths that already passed the safety check; [] means "no luck,
        try the next strategy".
    Strategies are stateless apart from their tuning and may be shared between calls.
    """

    name: str

    def candidates(self, a: Point, b: Point, obstacles: ObstacleField) -> list[list[Point]]: ...


@runtime_checkable
class LegRouting(Protocol):
    """
    Responsibilities:
      • Compute one leg between two points (strategy cascade, then graph search).
      • Report the leg's Manhattan length for visit ordering.
    """

    def route(self, a: Point, b: Point) -> LegPath: ...
    def distance(self, a: Point, b: Point) -> float: ...
