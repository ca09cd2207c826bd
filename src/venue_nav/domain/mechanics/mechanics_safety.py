"""Obstacle safety checks.

A point is unsafe when it lies inside or on any expanded bound. A segment is
unsafe when it passes through the open interior of a bound; running flush along
an edge is allowed. The batched variants evaluate many equal-length paths at once
and back the scalar API.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.mechanics.mechanics_obstacles import (
    ExpandedObstacle,
    ObstacleField,
    as_field,
)

Obstacles = ObstacleField | Iterable[ExpandedObstacle]


def _col(v) -> np.ndarray:
    return np.asarray(v, dtype=float)[..., None]


def points_clear(xs, ys, bounds: np.ndarray) -> np.ndarray:
    x, y = _col(xs), _col(ys)
    inside = (x >= bounds[:, 0]) & (x <= bounds[:, 2]) & (y >= bounds[:, 1]) & (y <= bounds[:, 3])
    return ~inside.any(axis=-1)


def horizontal_clear(ys, xa, xb, bounds: np.ndarray) -> np.ndarray:
    y = _col(ys)
    lo, hi = _col(np.minimum(xa, xb)), _col(np.maximum(xa, xb))
    hit = (y > bounds[:, 1]) & (y < bounds[:, 3]) & (hi > bounds[:, 0]) & (lo < bounds[:, 2])
    return ~hit.any(axis=-1)


def vertical_clear(xs, ya, yb, bounds: np.ndarray) -> np.ndarray:
    x = _col(xs)
    lo, hi = _col(np.minimum(ya, yb)), _col(np.maximum(ya, yb))
    hit = (x > bounds[:, 0]) & (x < bounds[:, 2]) & (hi > bounds[:, 1]) & (lo < bounds[:, 3])
    return ~hit.any(axis=-1)


def point_is_safe(p: Point, obstacles: Obstacles) -> bool:
    return bool(points_clear(p.x, p.y, as_field(obstacles).bounds))


def segment_is_safe(p1: Point, p2: Point, obstacles: Obstacles) -> bool:
    if p1 == p2:
        return True
    b = as_field(obstacles).bounds
    if p1.y == p2.y:
        return bool(horizontal_clear(p1.y, p1.x, p2.x, b))
    if p1.x == p2.x:
        return bool(vertical_clear(p1.x, p1.y, p2.y, b))
    return False  # diagonal


def paths_are_safe(paths: np.ndarray, obstacles: Obstacles) -> np.ndarray:
    """Batched path_is_safe over paths of equal length, shape (m, k, 2) -> (m,) bool."""
    paths = np.asarray(paths, dtype=float)
    if paths.size == 0:
        return np.zeros(len(paths), dtype=bool)
    b = as_field(obstacles).bounds
    xs, ys = paths[..., 0], paths[..., 1]
    ok = points_clear(xs, ys, b).all(axis=-1)
    if paths.shape[1] < 2:
        return ok

    x0, x1 = xs[:, :-1], xs[:, 1:]
    y0, y1 = ys[:, :-1], ys[:, 1:]
    horiz, vert = y0 == y1, x0 == x1
    seg_ok = np.where(
        horiz,
        horizontal_clear(y0, x0, x1, b),
        np.where(vert, vertical_clear(x0, y0, y1, b), False),
    )
    return ok & seg_ok.all(axis=-1)


def path_is_safe(points: Sequence[Point], obstacles: Obstacles) -> bool:
    if not points:
        return False
    arr = np.array([[(p.x, p.y) for p in points]], dtype=float)
    return bool(paths_are_safe(arr, obstacles)[0])
