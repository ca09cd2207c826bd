# venue_nav/domain/mechanics/mechanics_strategies.py
"""Local leg strategies, tried cheapest first.

Every strategy returns only candidates that passed ``path_is_safe``; the router
picks the shortest of the first non-empty set.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from venue_nav.app.protocols import LegStrategy
from venue_nav.domain.entities.geography import Point, Rect
from venue_nav.domain.geometry import elbow, ensure_manhattan, segment_hits_rect
from venue_nav.domain.mechanics.mechanics_obstacles import ExpandedObstacle, ObstacleField
from venue_nav.domain.mechanics.mechanics_safety import path_is_safe, paths_are_safe

REFINE_RESOLUTIONS = (100.0, 50.0, 25.0, 10.0)
WRAP_MARGIN = 5.0
WRAP_RELEVANCE_MARGIN = 50.0


def _keep_safe(paths: Iterable[Sequence[Point]], obstacles: ObstacleField) -> list[list[Point]]:
    out = []
    for path in paths:
        path = ensure_manhattan(path)
        if path_is_safe(path, obstacles):
            out.append(path)
    return out


def _to_points(batch: np.ndarray) -> list[list[Point]]:
    return [[Point(float(x), float(y)) for x, y in path] for path in batch]


class DirectStrategy(LegStrategy):
    name = "direct"

    def candidates(self, a, b, obstacles):
        return _keep_safe([elbow(a, b)], obstacles)


class CornerStrategy(LegStrategy):
    name = "corner"

    def candidates(self, a, b, obstacles):
        return _keep_safe([elbow(a, b, True), elbow(a, b, False)], obstacles)


def _steps(lo: float, hi: float, step: float) -> np.ndarray:
    """lo, lo+step, ... up to and including hi."""
    n = int(np.floor((hi - lo) / step + 1e-9)) + 1
    return lo + step * np.arange(max(n, 0), dtype=float)


class GridRefineStrategy(LegStrategy):
    """Two- and three-turn detours through a coarse-to-fine lattice around a and b.

    The first resolution yielding any safe candidate wins. At each resolution the
    order is: vertical corridors, horizontal corridors, then lattice points
    (x-major) alternating the two three-turn shapes.
    """

    name = "refine"

    def __init__(self, resolutions: Sequence[float] = REFINE_RESOLUTIONS):
        self.resolutions = tuple(float(r) for r in resolutions)

    def candidates(self, a, b, obstacles):
        for r in self.resolutions:
            found = []
            for batch in self._batches(a, b, obstacles, r):
                if len(batch):
                    found += _to_points(batch[paths_are_safe(batch, obstacles)])
            if found:
                return found
        return []

    def _batches(self, a: Point, b: Point, obstacles: ObstacleField, r: float):
        bnd = obstacles.bounds
        min_x, max_x = min(a.x, b.x) - r, max(a.x, b.x) + r
        min_y, max_y = min(a.y, b.y) - r, max(a.y, b.y) + r

        # a vertical run at x must miss every bound horizontally
        xs = _steps(min_x, max_x, r / 2)
        xs = xs[((xs[:, None] < bnd[:, 0]) | (xs[:, None] > bnd[:, 2])).all(axis=1)]
        via_x = np.empty((len(xs), 4, 2))
        via_x[:, 0] = (a.x, a.y)
        via_x[:, 1, 0], via_x[:, 1, 1] = xs, a.y
        via_x[:, 2, 0], via_x[:, 2, 1] = xs, b.y
        via_x[:, 3] = (b.x, b.y)
        yield via_x

        ys = _steps(min_y, max_y, r / 2)
        ys = ys[((ys[:, None] < bnd[:, 1]) | (ys[:, None] > bnd[:, 3])).all(axis=1)]
        via_y = np.empty((len(ys), 4, 2))
        via_y[:, 0] = (a.x, a.y)
        via_y[:, 1, 0], via_y[:, 1, 1] = a.x, ys
        via_y[:, 2, 0], via_y[:, 2, 1] = b.x, ys
        via_y[:, 3] = (b.x, b.y)
        yield via_y

        gx, gy = np.meshgrid(_steps(min_x, max_x, r), _steps(min_y, max_y, r), indexing="ij")
        gx, gy = gx.ravel(), gy.ravel()
        inside = ~(
            (gx[:, None] < bnd[:, 0])
            | (gx[:, None] > bnd[:, 2])
            | (gy[:, None] < bnd[:, 1])
            | (gy[:, None] > bnd[:, 3])
        )
        keep = ~inside.any(axis=1)
        gx, gy = gx[keep], gy[keep]
        n = len(gx)
        # [a, (a.x, y), (x, y), (b.x, y), b]
        p1 = np.empty((n, 5, 2))
        p1[:, 0] = (a.x, a.y)
        p1[:, 1, 0], p1[:, 1, 1] = a.x, gy
        p1[:, 2, 0], p1[:, 2, 1] = gx, gy
        p1[:, 3, 0], p1[:, 3, 1] = b.x, gy
        p1[:, 4] = (b.x, b.y)
        # [a, (x, a.y), (x, y), (x, b.y), b]
        p2 = np.empty((n, 5, 2))
        p2[:, 0] = (a.x, a.y)
        p2[:, 1, 0], p2[:, 1, 1] = gx, a.y
        p2[:, 2, 0], p2[:, 2, 1] = gx, gy
        p2[:, 3, 0], p2[:, 3, 1] = gx, b.y
        p2[:, 4] = (b.x, b.y)
        yield np.stack([p1, p2], axis=1).reshape(-1, 5, 2)


def detours(a: Point, b: Point, bounds: Rect, margin: float) -> list[list[Point]]:
    """The twelve hugging shapes around one bound: each side two ways, each corner once."""
    top, bottom = bounds.top - margin, bounds.bottom + margin
    left, right = bounds.left - margin, bounds.right + margin
    return [
        [a, Point(b.x, a.y), Point(b.x, top), b],
        [a, Point(a.x, top), Point(b.x, top), b],
        [a, Point(b.x, a.y), Point(b.x, bottom), b],
        [a, Point(a.x, bottom), Point(b.x, bottom), b],
        [a, Point(left, a.y), Point(left, b.y), b],
        [a, Point(a.x, b.y), Point(left, b.y), b],
        [a, Point(right, a.y), Point(right, b.y), b],
        [a, Point(a.x, b.y), Point(right, b.y), b],
        [a, Point(a.x, top), Point(left, top), Point(left, b.y), b],
        [a, Point(a.x, top), Point(right, top), Point(right, b.y), b],
        [a, Point(a.x, bottom), Point(left, bottom), Point(left, b.y), b],
        [a, Point(a.x, bottom), Point(right, bottom), Point(right, b.y), b],
    ]


class WrapAroundStrategy(LegStrategy):
    name = "wrap"

    def __init__(self, margin: float = WRAP_MARGIN, relevance_margin: float = WRAP_RELEVANCE_MARGIN):
        self.margin = margin
        self.relevance_margin = relevance_margin

    def is_relevant(self, a: Point, b: Point, o: ExpandedObstacle) -> bool:
        if not path_is_safe(elbow(a, b), [o]):
            return True
        return segment_hits_rect(a, b, o.bounds.expanded(self.relevance_margin))

    def candidates(self, a, b, obstacles):
        relevant = [o for o in obstacles if self.is_relevant(a, b, o)]
        found = self._around(a, b, relevant, obstacles)
        if not found and len(relevant) < len(obstacles):
            found = self._around(a, b, obstacles, obstacles)
        return found

    def _around(self, a, b, around: Iterable[ExpandedObstacle], obstacles: ObstacleField):
        out = []
        for o in around:
            out += _keep_safe(detours(a, b, o.bounds, self.margin), obstacles)
        return out
