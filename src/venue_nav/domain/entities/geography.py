from collections.abc import Iterable
from dataclasses import dataclass


# Core geometry types used by mechanics
@dataclass(frozen=True)
class Point:
    x: float  # venue units, y grows downwards
    y: float


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def expanded(self, d: float) -> "Rect":
        return Rect(self.left - d, self.top - d, self.right + d, self.bottom + d)

    def contains(self, p: Point) -> bool:
        """Inclusive containment: points on the edge count as inside."""
        return self.left <= p.x <= self.right and self.top <= p.y <= self.bottom

    def edges(self) -> list[tuple[Point, Point]]:
        tl, tr = Point(self.left, self.top), Point(self.right, self.top)
        br, bl = Point(self.right, self.bottom), Point(self.left, self.bottom)
        return [(tl, tr), (tr, br), (br, bl), (bl, tl)]

    @classmethod
    def bounding(cls, points: Iterable[Point]) -> "Rect":
        pts = list(points)
        if not pts:
            raise ValueError("bounding box of an empty point set")
        xs, ys = [p.x for p in pts], [p.y for p in pts]
        return cls(min(xs), min(ys), max(xs), max(ys))
