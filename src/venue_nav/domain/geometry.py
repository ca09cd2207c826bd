import math
from collections.abc import Sequence

from venue_nav.domain.entities.geography import Point, Rect


def manhattan(a: Point, b: Point) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)


def path_length(points: Sequence[Point]) -> float:
    return sum(manhattan(a, b) for a, b in zip(points, points[1:]))


def elbow(a: Point, b: Point, horizontal_first: bool = True) -> list[Point]:
    """Single-corner Manhattan path from a to b."""
    if a == b:
        return [a]
    corner = Point(b.x, a.y) if horizontal_first else Point(a.x, b.y)
    return [a, corner, b]


def ensure_manhattan(points: Sequence[Point]) -> list[Point]:
    """Insert a horizontal-first corner wherever two consecutive points differ on both axes."""
    if len(points) <= 1:
        return list(points)
    out = [points[0]]
    for cur, nxt in zip(points, points[1:]):
        if cur.x != nxt.x and cur.y != nxt.y:
            out.append(Point(nxt.x, cur.y))
        out.append(nxt)
    return out


def drop_repeats(points: Sequence[Point]) -> list[Point]:
    out: list[Point] = []
    for p in points:
        if not out or out[-1] != p:
            out.append(p)
    return out


def _orientation(p: Point, q: Point, r: Point) -> int:
    v = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if v > 0:
        return 1  # clockwise
    if v < 0:
        return 2  # counter-clockwise
    return 0


def _on_segment(p: Point, q: Point, r: Point) -> bool:
    return min(p.x, r.x) <= q.x <= max(p.x, r.x) and min(p.y, r.y) <= q.y <= max(p.y, r.y)


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Closed segment intersection; touching endpoints count."""
    # fast path: one vertical, one horizontal
    if a1.x == a2.x and b1.y == b2.y and a1.y != a2.y:
        return (min(b1.x, b2.x) <= a1.x <= max(b1.x, b2.x)) and (
            min(a1.y, a2.y) <= b1.y <= max(a1.y, a2.y)
        )
    if a1.y == a2.y and b1.x == b2.x and a1.x != a2.x:
        return (min(a1.x, a2.x) <= b1.x <= max(a1.x, a2.x)) and (
            min(b1.y, b2.y) <= a1.y <= max(b1.y, b2.y)
        )

    o1 = _orientation(a1, a2, b1)
    o2 = _orientation(a1, a2, b2)
    o3 = _orientation(b1, b2, a1)
    o4 = _orientation(b1, b2, a2)
    if o1 != o2 and o3 != o4:
        return True
    # collinear special cases
    if o1 == 0 and _on_segment(a1, b1, a2):
        return True
    if o2 == 0 and _on_segment(a1, b2, a2):
        return True
    if o3 == 0 and _on_segment(b1, a1, b2):
        return True
    if o4 == 0 and _on_segment(b1, a2, b2):
        return True
    return False


def segment_hits_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """True if the (possibly diagonal) segment p1-p2 touches the closed rectangle."""
    if rect.contains(p1) or rect.contains(p2):
        return True
    return any(segments_intersect(p1, p2, e1, e2) for e1, e2 in rect.edges())


def rect_gap(r1: Rect, r2: Rect) -> float:
    """Euclidean separation between two rectangles, 0 when they touch or overlap."""
    dx = max(0.0, max(r1.left, r2.left) - min(r1.right, r2.right))
    dy = max(0.0, max(r1.top, r2.top) - min(r1.bottom, r2.bottom))
    return math.hypot(dx, dy)
