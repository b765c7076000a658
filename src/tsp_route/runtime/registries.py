# runtime/registries.py
from collections.abc import Callable

from tsp_route.app.protocols import MatchingSolver, RoutePlanner
from tsp_route.config.models import (
    MatchingBlossomModel,
    MatchingUnion,
    RoutePlannerEuclideanModel,
    RoutePlannerGridModel,
    RoutePlannerManhattanModel,
    RoutePlannerUnion,
)
from tsp_route.domain.routing.matching import BlossomMatchingSolver
from tsp_route.domain.routing.route_planners import (
    EuclidRoutePlanner,
    GridRoutePlanner,
    ManhattanRoutePlanner,
)

RoutePlannerFactory = Callable[[RoutePlannerUnion, dict], RoutePlanner]
MatchingFactory = Callable[[MatchingUnion, dict], MatchingSolver]

_route_planner_registry: dict[str, RoutePlannerFactory] = {}
_matching_registry: dict[str, MatchingFactory] = {}


# --------------------- Route Planners  ---------------------
def register_route_planner(kind: str):
    def deco(fn: RoutePlannerFactory):
        _route_planner_registry[kind] = fn
        return fn

    return deco


def make_route_planner(cfg: RoutePlannerUnion, *, deps: dict | None = None) -> RoutePlanner:
    try:
        factory = _route_planner_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown route planner kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_route_planner("euclidean")
def _make_euclidean(cfg: RoutePlannerEuclideanModel, deps):
    return EuclidRoutePlanner()


@register_route_planner("manhattan")
def _make_manhattan(cfg: RoutePlannerManhattanModel, deps):
    return ManhattanRoutePlanner()


@register_route_planner("grid")
def _make_grid(cfg: RoutePlannerGridModel, deps):
    return GridRoutePlanner(cfg.grid, metric=cfg.metric)


# ---------------------- Matching ----------------------------


def register_matching(kind: str):
    def deco(fn: MatchingFactory):
        _matching_registry[kind] = fn
        return fn

    return deco


def make_matching(cfg: MatchingUnion, *, deps: dict | None = None) -> MatchingSolver:
    try:
        factory = _matching_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown matching kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_matching("blossom")
def _make_blossom(cfg: MatchingBlossomModel, deps):
    return BlossomMatchingSolver()
