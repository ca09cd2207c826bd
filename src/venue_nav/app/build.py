# venue_nav/app/build.py
from collections.abc import Mapping

from venue_nav.app.hooks import NoopHooks
from venue_nav.app.planner import RoutePlanner
from venue_nav.config.models import PlannerModel
from venue_nav.io.planner_logging import PlannerLogging  # JSON logs
from venue_nav.io.recorder import Recorder
from venue_nav.runtime.registries import make_strategy


def build(
    cfg: PlannerModel | Mapping | None = None,
    *,
    use_logging: bool = True,
    recorder: Recorder | None = None,
) -> RoutePlanner:
    # 0) Validate config
    model = cfg if isinstance(cfg, PlannerModel) else PlannerModel.model_validate(cfg or {})

    # 1) Fail on unknown strategies now rather than on the first plan
    for kind in model.search.strategies:
        make_strategy(kind, model.search)

    # 2) Hooks
    hooks = (
        PlannerLogging(
            run_id=model.run_id,
            name=model.name,
            level=model.log.level,
            debug=model.log.debug,
            recorder=recorder,
        )
        if use_logging
        else NoopHooks()
    )
    return RoutePlanner(model, hooks=hooks)
