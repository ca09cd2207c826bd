from dataclasses import dataclass, field
from enum import Enum

from venue_nav.domain.entities.geography import Point, Rect


class Side(Enum):
    A = "a"  # left edge of a tall obstacle, top edge otherwise
    B = "b"  # right edge of a tall obstacle, bottom edge otherwise


@dataclass(frozen=True)
class Target:
    id: str
    weight: float = 1.0  # share of the side's span


@dataclass(frozen=True)
class Obstacle:
    id: str
    position: Point  # top-left corner
    width: float
    length: float
    side_a: tuple[Target, ...] = ()
    side_b: tuple[Target, ...] = ()

    @property
    def rect(self) -> Rect:
        return Rect(
            self.position.x,
            self.position.y,
            self.position.x + self.width,
            self.position.y + self.length,
        )

    @property
    def is_tall(self) -> bool:
        return self.length > self.width

    def targets(self, side: Side) -> tuple[Target, ...]:
        return self.side_a if side is Side.A else self.side_b


@dataclass(frozen=True)
class Venue:
    boundary: tuple[Point, ...]
    obstacles: tuple[Obstacle, ...] = field(default_factory=tuple)

    @property
    def origin(self) -> Point | None:
        return self.boundary[0] if self.boundary else None

    def bounds(self) -> Rect:
        return Rect.bounding(self.boundary)
