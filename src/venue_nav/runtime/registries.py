# runtime/registries.py
from collections.abc import Callable

from venue_nav.app.protocols import LegStrategy
from venue_nav.config.models import SearchModel
from venue_nav.domain.mechanics.mechanics_strategies import (
    CornerStrategy,
    DirectStrategy,
    GridRefineStrategy,
    WrapAroundStrategy,
)

StrategyFactory = Callable[[SearchModel], LegStrategy]

_strategy_registry: dict[str, StrategyFactory] = {}


# ------------------- Leg strategies ---------------------------


def register_strategy(kind: str):
    def deco(fn: StrategyFactory):
        _strategy_registry[kind] = fn
        return fn

    return deco


def make_strategy(kind: str, cfg: SearchModel) -> LegStrategy:
    try:
        factory = _strategy_registry[kind]
    except KeyError:
        raise ValueError(f"Unknown strategy kind {kind!r}") from None
    return factory(cfg)


@register_strategy("direct")
def _make_direct(cfg: SearchModel):
    return DirectStrategy()


@register_strategy("corner")
def _make_corner(cfg: SearchModel):
    return CornerStrategy()


@register_strategy("refine")
def _make_refine(cfg: SearchModel):
    return GridRefineStrategy(cfg.refine_resolutions)


@register_strategy("wrap")
def _make_wrap(cfg: SearchModel):
    return WrapAroundStrategy(cfg.wrap_margin, cfg.wrap_relevance_margin)
