# venue_nav/domain/mechanics/mechanics_factory.py

from venue_nav.app.hooks import NoopHooks, PlannerHooks
from venue_nav.config.models import GridModel, PlannerModel
from venue_nav.domain.entities.geography import Point
from venue_nav.domain.mechanics.mechanics_core import LegRouter
from venue_nav.domain.mechanics.mechanics_grid import GridParams
from venue_nav.domain.mechanics.mechanics_obstacles import ObstacleField
from venue_nav.runtime.registries import make_strategy


def grid_params(cfg: GridModel) -> GridParams:
    return GridParams(**cfg.model_dump())


def build_leg_router(
    cfg: PlannerModel,
    obstacles: ObstacleField,
    nav_grid: frozenset[Point],
    *,
    hooks: PlannerHooks | None = None,
) -> LegRouter:
    strategies = [make_strategy(kind, cfg.search) for kind in cfg.search.strategies]
    return LegRouter(
        obstacles=obstacles,
        nav_grid=nav_grid,
        strategies=strategies,
        graph_search=cfg.search.graph_search,
        hooks=hooks or NoopHooks(),
    )
