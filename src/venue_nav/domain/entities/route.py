from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from venue_nav.domain.entities.geography import Point


class WaypointType(Enum):
    START = "start"
    REGULAR = "regular"
    DESTINATION = "destination"
    END = "end"


@dataclass(frozen=True)
class Waypoint:
    point: Point
    type: WaypointType
    ordinal: int | None = None  # only set for DESTINATION, 1-based visit order
    target_id: str | None = None


@dataclass(frozen=True)
class LegPath:
    """Points of one leg plus how they were found.

    ``verified_safe`` is False only for the last-resort elbow returned when every
    strategy and the graph search failed; such a leg may cross an obstacle.
    """

    points: tuple[Point, ...]
    strategy: str
    verified_safe: bool = True

    @property
    def length(self) -> float:
        return sum(
            abs(b.x - a.x) + abs(b.y - a.y) for a, b in zip(self.points, self.points[1:])
        )


@dataclass(frozen=True)
class Route:
    waypoints: tuple[Waypoint, ...]
    legs: tuple[LegPath, ...] = ()
    unsafe_reaches: tuple[str, ...] = ()  # targets reached through another obstacle

    @property
    def degraded(self) -> bool:
        return bool(self.unsafe_reaches) or any(not leg.verified_safe for leg in self.legs)

    @property
    def points(self) -> list[Point]:
        return [w.point for w in self.waypoints]

    def destinations(self) -> list[Waypoint]:
        return [w for w in self.waypoints if w.type is WaypointType.DESTINATION]

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)

    def __len__(self) -> int:
        return len(self.waypoints)

    def __getitem__(self, i):
        return self.waypoints[i]
