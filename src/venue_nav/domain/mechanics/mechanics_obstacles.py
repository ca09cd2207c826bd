from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from venue_nav.domain.entities.geography import Rect
from venue_nav.domain.entities.venue import Obstacle

SAFE_MARGIN = 1.0


@dataclass(frozen=True)
class ExpandedObstacle:
    obstacle: Obstacle
    bounds: Rect  # obstacle rect grown by the safety margin


@dataclass(frozen=True)
class ObstacleField(Sequence):
    """Expanded obstacles plus their bounds packed as an (n, 4) array.

    Columns are left, top, right, bottom. All safety checks run against this array.
    """

    obstacles: tuple[ExpandedObstacle, ...]
    bounds: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def of(cls, obstacles: Iterable[ExpandedObstacle]) -> "ObstacleField":
        obs = tuple(obstacles)
        arr = np.array(
            [(o.bounds.left, o.bounds.top, o.bounds.right, o.bounds.bottom) for o in obs],
            dtype=float,
        ).reshape(len(obs), 4)
        arr.setflags(write=False)
        return cls(obs, arr)

    def __getitem__(self, i):
        return self.obstacles[i]

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[ExpandedObstacle]:
        return iter(self.obstacles)


def as_field(obstacles: "ObstacleField | Iterable[ExpandedObstacle]") -> ObstacleField:
    return obstacles if isinstance(obstacles, ObstacleField) else ObstacleField.of(obstacles)


def expand(obstacles: Iterable[Obstacle], margin: float = SAFE_MARGIN) -> ObstacleField:
    return ObstacleField.of(ExpandedObstacle(o, o.rect.expanded(margin)) for o in obstacles)
