# venue_nav/domain/mechanics/mechanics_visibility.py
"""A* over the navigation grid.

Two nodes are connected when the horizontal-first elbow between them is safe.
Adjacency rows are computed lazily, one vectorised sweep per expanded node.
"""

import heapq
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import count

import numpy as np

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.geometry import elbow, ensure_manhattan, manhattan
from venue_nav.domain.mechanics.mechanics_obstacles import ObstacleField
from venue_nav.domain.mechanics.mechanics_safety import (
    horizontal_clear,
    path_is_safe,
    points_clear,
    vertical_clear,
)


@dataclass
class VisibilityGraph:
    nodes: list[Point]
    obstacles: ObstacleField
    _xy: np.ndarray = field(repr=False)
    _safe: np.ndarray = field(repr=False)
    _index: dict[Point, int] = field(default_factory=dict, repr=False)
    _adj: dict[int, list[tuple[int, float]]] = field(default_factory=dict, repr=False)

    @classmethod
    def build(cls, nav_grid: Iterable[Point], a: Point, b: Point, obstacles: ObstacleField):
        # sorted so ties in the search resolve the same way on every run
        nodes = sorted(set(nav_grid) | {a, b}, key=lambda p: (p.x, p.y))
        xy = np.array([(p.x, p.y) for p in nodes], dtype=float).reshape(len(nodes), 2)
        safe = points_clear(xy[:, 0], xy[:, 1], obstacles.bounds)
        index = {p: i for i, p in enumerate(nodes)}
        return cls(nodes, obstacles, xy, safe, index)

    def index(self, p: Point) -> int:
        return self._index[p]

    def neighbors(self, i: int) -> list[tuple[int, float]]:
        if i not in self._adj:
            self._adj[i] = self._visible_from(i)
        return self._adj[i]

    def _visible_from(self, i: int) -> list[tuple[int, float]]:
        if not self._safe[i]:
            return []
        b = self.obstacles.bounds
        px, py = self._xy[i]
        qx, qy = self._xy[:, 0], self._xy[:, 1]
        # elbow p -> (qx, py) -> q
        ok = self._safe & points_clear(qx, py, b)
        ok &= horizontal_clear(np.full_like(qx, py), px, qx, b)
        ok &= vertical_clear(qx, py, qy, b)
        ok[i] = False
        idx = np.nonzero(ok)[0]
        w = np.abs(qx[idx] - px) + np.abs(qy[idx] - py)
        return list(zip(idx.tolist(), w.tolist()))


@dataclass
class SearchNode:
    point: Point
    parent: int | None  # index into the graph's node list
    g: float
    f: float


def astar(graph: VisibilityGraph, start: int, goal: int) -> list[int] | None:
    goal_pt = graph.nodes[goal]

    def h(i: int) -> float:
        return manhattan(graph.nodes[i], goal_pt)

    arena: dict[int, SearchNode] = {start: SearchNode(graph.nodes[start], None, 0.0, h(start))}
    tie = count()
    open_set = [(arena[start].f, next(tie), start)]
    closed: set[int] = set()

    while open_set:
        f, _, cur = heapq.heappop(open_set)
        node = arena[cur]
        if cur in closed or f > node.f:
            continue  # stale entry
        if cur == goal:
            path = [cur]
            while arena[path[-1]].parent is not None:
                path.append(arena[path[-1]].parent)
            path.reverse()
            return path
        closed.add(cur)

        for nb, w in graph.neighbors(cur):
            g = node.g + w
            known = arena.get(nb)
            if known is None or g < known.g:
                arena[nb] = SearchNode(graph.nodes[nb], cur, g, g + h(nb))
                closed.discard(nb)
                heapq.heappush(open_set, (arena[nb].f, next(tie), nb))
    return None


def shortcut(path: Sequence[Point], obstacles: ObstacleField) -> list[Point]:
    """Skip ahead to the farthest node whose elbow from the current one is already on the path and safe."""
    if len(path) <= 2:
        return list(path)
    on_path = set(path)
    out = [path[0]]
    i = 0
    while i < len(path) - 1:
        nxt = i + 1
        for j in range(len(path) - 1, i + 1, -1):
            hop = elbow(path[i], path[j])
            if all(p in on_path for p in hop) and path_is_safe(hop, obstacles):
                nxt = j
                break
        out.append(path[nxt])
        i = nxt
    return out


def find_path(
    a: Point, b: Point, nav_grid: Iterable[Point], obstacles: ObstacleField
) -> list[Point] | None:
    """Shortest safe Manhattan path over the grid, or None if b is unreachable."""
    graph = VisibilityGraph.build(nav_grid, a, b, obstacles)
    found = astar(graph, graph.index(a), graph.index(b))
    if found is None:
        return None
    return ensure_manhattan(shortcut([graph.nodes[i] for i in found], obstacles))
