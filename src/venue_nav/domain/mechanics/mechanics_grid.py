"""Candidate waypoint generation for the visibility graph.

Each phase returns a fresh list of raw candidates; ``build_grid`` concatenates
them, drops anything inside an expanded bound and deduplicates.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from venue_nav.domain.entities.geography import Point, Rect
from venue_nav.domain.geometry import rect_gap
from venue_nav.domain.mechanics.mechanics_obstacles import ObstacleField
from venue_nav.domain.mechanics.mechanics_safety import point_is_safe, points_clear


@dataclass(frozen=True)
class GridParams:
    perimeter_spacing: float = 15.0
    corner_spacing: float = 5.0
    corner_zone: float = 20.0  # denser sampling this close to a corner
    perimeter_offset: float = 1.0  # ring distance outside the expanded bound
    corner_offset: float = 10.0
    shortcut_distance: float = 60.0
    alignment_tolerance: float = 20.0
    edge_alignment_tolerance: float = 5.0
    corridor_offset: float = 10.0
    approach_offset: float = 10.0
    boundary_samples: int = 5


def _ring(b: Rect, p: GridParams) -> Rect:
    return b.expanded(p.perimeter_offset)


def _walk(lo: float, hi: float, p: GridParams) -> list[float]:
    vals, v = [], lo
    while v <= hi:
        vals.append(v)
        near_corner = v < lo + p.corner_zone or v > hi - p.corner_zone
        v += p.corner_spacing if near_corner else p.perimeter_spacing
    return vals


def perimeter_points(b: Rect, p: GridParams) -> list[Point]:
    r = _ring(b, p)
    xs, ys = _walk(r.left, r.right, p), _walk(r.top, r.bottom, p)
    return (
        [Point(x, r.top) for x in xs]
        + [Point(r.right, y) for y in ys]
        + [Point(x, r.bottom) for x in reversed(xs)]
        + [Point(r.left, y) for y in reversed(ys)]
    )


def side_points(b: Rect, p: GridParams) -> list[Point]:
    """Midpoints and quarter points of every side."""
    r = _ring(b, p)
    out = []
    for i in (1, 2, 3):
        x = r.left + i * r.width / 4
        y = r.top + i * r.height / 4
        out += [Point(x, r.top), Point(x, r.bottom), Point(r.left, y), Point(r.right, y)]
    return out


def corner_points(b: Rect, p: GridParams) -> list[Point]:
    d = p.corner_offset
    return [
        Point(b.left - d, b.top - d),
        Point(b.right + d, b.top - d),
        Point(b.left - d, b.bottom + d),
        Point(b.right + d, b.bottom + d),
    ]


def shortcut_points(field: ObstacleField, p: GridParams) -> list[Point]:
    """Centre midpoints and facing-edge corridors between nearby obstacles."""
    out = []
    for o1, o2 in combinations(field, 2):
        b1, b2 = o1.bounds, o2.bounds
        if rect_gap(b1, b2) > p.shortcut_distance:
            continue
        c1, c2 = b1.center, b2.center
        out.append(Point((c1.x + c2.x) / 2, (c1.y + c2.y) / 2))
        if abs(c1.x - c2.x) < p.alignment_tolerance:
            y = (b1.bottom + b2.top) / 2 if b1.bottom < b2.top else (b2.bottom + b1.top) / 2
            out.append(Point(c1.x, y))
        if abs(c1.y - c2.y) < p.alignment_tolerance:
            x = (b1.right + b2.left) / 2 if b1.right < b2.left else (b2.right + b1.left) / 2
            out.append(Point(x, c1.y))
    return out


def corridor_points(field: ObstacleField, p: GridParams) -> list[Point]:
    """Cross points of every pair's edge lines, their near neighbours, and shared-edge midpoints."""
    out = []
    d = p.corridor_offset
    tol = p.edge_alignment_tolerance
    for o1, o2 in combinations(field, 2):
        b1, b2 = o1.bounds, o2.bounds
        crossings = [
            Point(b1.left, b2.top),
            Point(b1.right, b2.top),
            Point(b1.left, b2.bottom),
            Point(b1.right, b2.bottom),
            Point(b2.left, b1.top),
            Point(b2.right, b1.top),
            Point(b2.left, b1.bottom),
            Point(b2.right, b1.bottom),
        ]
        for c in crossings:
            if not point_is_safe(c, field):
                continue
            out += [
                c,
                Point(c.x + d, c.y),
                Point(c.x - d, c.y),
                Point(c.x, c.y + d),
                Point(c.x, c.y - d),
            ]

        mid_y = (max(b1.top, b2.top) + min(b1.bottom, b2.bottom)) / 2
        mid_x = (max(b1.left, b2.left) + min(b1.right, b2.right)) / 2
        if abs(b1.left - b2.left) < tol:
            out.append(Point(b1.left, mid_y))
        if abs(b1.right - b2.right) < tol:
            out.append(Point(b1.right, mid_y))
        if abs(b1.top - b2.top) < tol:
            out.append(Point(mid_x, b1.top))
        if abs(b1.bottom - b2.bottom) < tol:
            out.append(Point(mid_x, b1.bottom))
    return out


def approach_points(access_points: Iterable[Point], p: GridParams) -> list[Point]:
    d = p.approach_offset
    out = []
    for a in access_points:
        out += [a, Point(a.x - d, a.y), Point(a.x + d, a.y), Point(a.x, a.y - d), Point(a.x, a.y + d)]
    return out


def boundary_points(bounds: Rect, p: GridParams) -> list[Point]:
    out = [
        Point(bounds.left, bounds.top),
        Point(bounds.right, bounds.top),
        Point(bounds.left, bounds.bottom),
        Point(bounds.right, bounds.bottom),
    ]
    n = p.boundary_samples
    for i in range(1, n + 1):
        f = i / (n + 1)
        x = bounds.left + bounds.width * f
        y = bounds.top + bounds.height * f
        out += [
            Point(x, bounds.top),
            Point(x, bounds.bottom),
            Point(bounds.left, y),
            Point(bounds.right, y),
        ]
    return out


def build_grid(
    field: ObstacleField,
    venue_bounds: Rect,
    access_points: Iterable[Point],
    params: GridParams | None = None,
) -> frozenset[Point]:
    p = params or GridParams()
    candidates: list[Point] = []
    for o in field:
        candidates += perimeter_points(o.bounds, p)
        candidates += side_points(o.bounds, p)
        candidates += corner_points(o.bounds, p)
    candidates += shortcut_points(field, p)
    candidates += corridor_points(field, p)
    candidates += approach_points(access_points, p)
    candidates += boundary_points(venue_bounds, p)

    unique = list(dict.fromkeys(candidates))
    if not unique:
        return frozenset()
    xs = np.array([c.x for c in unique], dtype=float)
    ys = np.array([c.y for c in unique], dtype=float)
    keep = points_clear(xs, ys, field.bounds)
    return frozenset(c for c, k in zip(unique, keep) if k)
