# io/planner_logging.py
import json
import logging
import sys

from venue_nav.app.hooks import NoopHooks
from venue_nav.domain.geometry import path_length
from venue_nav.io.recorder import Recorder
from venue_nav.io.route_events import LegPlanned, RoutePlanned, RouteRejected


def _default_json_logger(name="venue_nav", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "ts": round(record.created, 3),
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _xy(p) -> tuple[float, float]:
    return (p.x, p.y)


class PlannerLogging(NoopHooks):
    """
    Shapes planner hooks into structured log lines and, when a recorder is
    attached, into route records.
    """

    def __init__(
        self,
        run_id: str = "local",
        name: str = "venue",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.name, self.debug = run_id, name, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "planner": self.name}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _record(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # ------------- Planner lifecycle --------------------------

    def plan_start(self, *, targets, obstacles):
        self._emit("INFO", "plan_start", targets=list(targets), obstacles=obstacles)

    def grid_built(self, *, points):
        if self.debug:
            self._emit("DEBUG", "grid_built", points=points)

    def leg_planned(self, leg, *, origin, destination):
        ev = LegPlanned(
            run_id=self.run_id,
            name="leg_planned",
            origin=_xy(origin),
            destination=_xy(destination),
            strategy=leg.strategy,
            length=leg.length,
            points=len(leg.points),
            verified_safe=leg.verified_safe,
        )
        extra = dict(
            origin=ev.origin, destination=ev.destination, strategy=ev.strategy, length=ev.length
        )
        if not leg.verified_safe:
            self._emit("WARNING", "degraded_leg", **extra)
        elif self.debug:
            self._emit("DEBUG", "leg_planned", **extra)
        self._record(ev)

    def plan_end(self, *, route, wall_ms):
        ev = RoutePlanned(
            run_id=self.run_id,
            name="route_planned",
            waypoints=len(route),
            destinations=[w.target_id for w in route.destinations()],
            length=path_length(route.points),
            degraded=route.degraded,
            wall_ms=wall_ms,
        )
        self._emit(
            "INFO",
            "plan_end",
            waypoints=ev.waypoints,
            destinations=ev.destinations,
            length=ev.length,
            degraded=ev.degraded,
            unsafe_reaches=list(route.unsafe_reaches),
            wall_ms=round(wall_ms, 3),
        )
        self._record(ev)

    def error(self, *, reason, **extra):
        self._emit("WARNING", "route_rejected", reason=reason, **extra)
        self._record(RouteRejected(self.run_id, "route_rejected", reason, extra.get("target_id")))
