from dataclasses import dataclass

from venue_nav.domain.entities.geography import Point
from venue_nav.domain.entities.venue import Obstacle, Side, Target, Venue
from venue_nav.domain.mechanics.mechanics_obstacles import SAFE_MARGIN, ObstacleField
from venue_nav.domain.mechanics.mechanics_safety import path_is_safe

SHELF_SPACING = 4.0
ACCESS_CLEARANCE = 1.0


class TargetNotFound(LookupError):
    def __init__(self, target_id: str):
        super().__init__(f"unknown target {target_id!r}")
        self.target_id = target_id


@dataclass(frozen=True)
class TargetAccess:
    target_id: str
    target_position: Point  # where the target sits on the obstacle
    access_point: Point  # where a walker stands to reach it
    obstacle: Obstacle
    side: Side
    reach_safe: bool = True  # access->target crosses no other obstacle


def find_target(venue: Venue, target_id: str) -> tuple[Obstacle, Side, Target]:
    for ob in venue.obstacles:
        for side in (Side.A, Side.B):
            for t in ob.targets(side):
                if t.id == target_id:
                    return ob, side, t
    raise TargetNotFound(target_id)


def target_position(
    obstacle: Obstacle, side: Side, target: Target, spacing: float = SHELF_SPACING
) -> Point:
    """Centre of the target's slot along its side, inset by ``spacing`` from the edge."""
    targets = obstacle.targets(side)
    total = sum(t.weight for t in targets)
    extent = obstacle.length if obstacle.is_tall else obstacle.width
    available = extent - spacing * (len(targets) + 1)

    def slot(t: Target) -> float:
        return t.weight / total * available if total > 0 else 0.0

    along = spacing
    for t in targets:
        if t.id == target.id:
            break
        along += slot(t) + spacing
    along += slot(target) / 2

    x0, y0 = obstacle.position.x, obstacle.position.y
    if obstacle.is_tall:
        x = x0 + spacing if side is Side.A else x0 + obstacle.width - spacing
        return Point(x, y0 + along)
    y = y0 + spacing if side is Side.A else y0 + obstacle.length - spacing
    return Point(x0 + along, y)


def access_point(obstacle: Obstacle, side: Side, position: Point, offset: float) -> Point:
    """Point ``offset`` outside the raw obstacle edge, level with ``position``."""
    r = obstacle.rect
    if obstacle.is_tall:
        return Point(r.left - offset if side is Side.A else r.right + offset, position.y)
    return Point(position.x, r.top - offset if side is Side.A else r.bottom + offset)


def clear_outward(
    p: Point, obstacle: Obstacle, side: Side, field: ObstacleField, clearance: float
) -> Point:
    """Push p further along its approach direction until no expanded bound contains it."""
    outward = -1.0 if side is Side.A else 1.0
    for _ in range(len(field) + 1):
        blocking = [o.bounds for o in field if o.bounds.contains(p)]
        if not blocking:
            return p
        if obstacle.is_tall:
            x = (
                min(b.left for b in blocking) - clearance
                if outward < 0
                else max(b.right for b in blocking) + clearance
            )
            p = Point(x, p.y)
        else:
            y = (
                min(b.top for b in blocking) - clearance
                if outward < 0
                else max(b.bottom for b in blocking) + clearance
            )
            p = Point(p.x, y)
    return p


def resolve_access(
    venue: Venue,
    target_id: str,
    field: ObstacleField,
    *,
    margin: float = SAFE_MARGIN,
    clearance: float = ACCESS_CLEARANCE,
    spacing: float = SHELF_SPACING,
) -> TargetAccess:
    obstacle, side, target = find_target(venue, target_id)
    pos = target_position(obstacle, side, target, spacing)
    ap = access_point(obstacle, side, pos, margin + clearance)
    ap = clear_outward(ap, obstacle, side, field, clearance)
    others = [o for o in field if o.obstacle is not obstacle]
    return TargetAccess(
        target_id=target_id,
        target_position=pos,
        access_point=ap,
        obstacle=obstacle,
        side=side,
        reach_safe=path_is_safe([ap, pos], others),
    )
