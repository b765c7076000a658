# app/planner.py
import time
from collections.abc import Callable, Iterable, Mapping

import numpy as np

from tsp_route.app.protocols import MatchingSolver, RoutePlanner
from tsp_route.config.models import AnnealingModel, ProblemModel, route_planner_model
from tsp_route.domain.entities.geography import Node, PathResult
from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.domain.errors import NotInitialized, ReconstructionUnavailable
from tsp_route.domain.heuristics.annealing import SimulatedAnnealing
from tsp_route.domain.heuristics.christofides import Christofides
from tsp_route.domain.heuristics.greedy import GreedyHeuristics
from tsp_route.domain.heuristics.mst import MinimumSpanningTree
from tsp_route.domain.matrix import MatrixBuild, build_cost_matrix
from tsp_route.domain.routing.matching import BlossomMatchingSolver
from tsp_route.runtime.hooks import NoopHooks, SolverHooks
from tsp_route.runtime.registries import make_matching, make_route_planner
from tsp_route.runtime.rng import RNGRegistry
from tsp_route.runtime.types import EdgeSort, Heuristic, Metric


class TourPlanner:
    """
    Public entry point. Builds the cost matrix once (`init()`), then answers any
    number of heuristic requests against it.

    A closed tour is produced unless `end` is given and differs from `start`,
    in which case every result starts at `start` and finishes at `end`.
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        start: Node,
        end: Node | None = None,
        *,
        grid: list[list[int]] | None = None,
        metric: Metric | str = Metric.MANHATTAN,
        reconstruct_route: bool = False,
        seed: int = 0,
        problem: str | int = 0,
        workers: int = 1,
        annealing: AnnealingModel | None = None,
        route_planner: RoutePlanner | None = None,
        matching: MatchingSolver | None = None,
        hooks: SolverHooks | None = None,
    ):
        self.nodes = list(nodes)
        self.start, self.end = start, end
        self.grid = grid
        self.metric = Metric(metric)
        self.reconstruct_route = reconstruct_route
        self.workers = workers
        self.annealing = annealing or AnnealingModel()
        self.route_planner = route_planner or make_route_planner(
            route_planner_model(grid, self.metric.value)
        )
        self.matching = matching or BlossomMatchingSolver()
        self.hooks = hooks or NoopHooks()
        self.rng = RNGRegistry(seed, problem=problem)
        self._build: MatrixBuild | None = None

    @classmethod
    def from_config(
        cls, cfg: ProblemModel | Mapping, *, hooks: SolverHooks | None = None
    ) -> "TourPlanner":
        """Validate `cfg`, wire the configured collaborators and build the matrix."""
        model = cfg if isinstance(cfg, ProblemModel) else ProblemModel.model_validate(cfg)
        planner = cls(
            [n.to_node() for n in model.nodes],
            model.start.to_node(),
            model.end.to_node() if model.end else None,
            grid=model.grid,
            metric=model.metric,
            reconstruct_route=model.reconstruct_route,
            seed=model.seed,
            problem=model.name,
            workers=model.workers,
            annealing=model.annealing,
            route_planner=make_route_planner(model.route_planner()),
            matching=make_matching(model.matching),
            hooks=hooks,
        )
        return planner.init()

    # ---------------- Lifecycle ----------------------

    def init(self) -> "TourPlanner":
        self._build = build_cost_matrix(
            self.nodes,
            self.start,
            self.end,
            planner=self.route_planner,
            want_routes=self.reconstruct_route,
            workers=self.workers,
            hooks=self.hooks,
        )
        if self._build.ok:
            m = self._build.matrix
            self.mst = MinimumSpanningTree(m)
            self.greedy = GreedyHeuristics(m)
            self.christofides_solver = Christofides(m, self.matching, self.mst)
        return self

    @property
    def initialized(self) -> bool:
        return self._build is not None

    @property
    def error(self):
        return None if self._build is None else self._build.error

    def _ready(self) -> MatrixBuild:
        if self._build is None:
            raise NotInitialized()
        self._build.unwrap()
        return self._build

    @property
    def vertices(self) -> list[Node]:
        """Nodes in matrix order: start, end (fixed-endpoint paths only), then the rest."""
        return list(self._ready().nodes)

    @property
    def matrix(self) -> CostMatrix:
        return self._ready().matrix

    # ---------------- Heuristics ----------------------

    def nearest_neighbor(self) -> PathResult:
        return self._run(Heuristic.NEAREST_NEIGHBOR, lambda: self.greedy.nearest_neighbor())

    def nearest_insertion(self) -> PathResult:
        return self._run(Heuristic.NEAREST_INSERTION, lambda: self.greedy.nearest_insertion())

    def farthest_insertion(self) -> PathResult:
        return self._run(Heuristic.FARTHEST_INSERTION, lambda: self.greedy.farthest_insertion())

    def christofides(self) -> PathResult:
        return self._run(Heuristic.CHRISTOFIDES, lambda: self.christofides_solver.solve())

    def mst_preorder(self) -> PathResult:
        """Walk the MST depth-first, finishing short branches before long ones."""

        def compute():
            m = self.matrix
            tree = self.mst.to_adjacency_tree(self.mst.build(), sort=EdgeSort.LEAF_FIRST)
            order = self.mst.preorder(tree)
            if not m.is_path:
                return order
            return [m.start, *(v for v in order if v not in (m.start, m.end)), m.end]

        return self._run(Heuristic.MST_PREORDER, compute)

    def simulated_annealing(
        self, *, restart: int = 0, rng: np.random.Generator | None = None, **params
    ) -> PathResult:
        """
        Anneal from the identity ordering. `params` override the planner's
        AnnealingModel fields for this call only.

        Draws come from the seeded ("annealing", restart) stream, so repeating a call
        with the same restart repeats the tour; pass another restart for a fresh
        search, or `rng` to supply the generator directly.
        """
        cfg = AnnealingModel.model_validate({**self.annealing.model_dump(), **params})

        def compute():
            gen = rng if rng is not None else self.rng.stream("annealing", restart)
            engine = SimulatedAnnealing(self.matrix, gen, self.hooks)
            path = engine.run(**cfg.model_dump()).path
            return path if self.matrix.is_path else path[:-1]

        return self._run(Heuristic.SIMULATED_ANNEALING, compute)

    def alphanumeric_sort(self) -> PathResult:
        """Baseline: visit the locations in label order."""

        def compute():
            m = self.matrix
            nodes = self._ready().nodes
            middle = sorted(m.regular, key=lambda i: nodes[i].id)
            return [m.start, *middle, m.end] if m.is_path else [m.start, *middle]

        return self._run(Heuristic.ALPHANUMERIC_SORT, compute)

    def solve(self, heuristic: Heuristic | str, **params) -> PathResult:
        h = Heuristic(heuristic)
        if h is Heuristic.SIMULATED_ANNEALING:
            return self.simulated_annealing(**params)
        if params:
            raise TypeError(f"{h.value} takes no parameters, got {sorted(params)}")
        return getattr(self, h.value)()

    # ---------------- Helpers ----------------------

    def _run(self, heuristic: Heuristic, compute: Callable[[], list[int]]) -> PathResult:
        m = self.matrix
        self.hooks.heuristic_start(heuristic.value, size=m.n)
        t0 = time.perf_counter()
        raw = list(compute())
        if not m.is_path:
            raw.append(m.start)
        wall_ms = (time.perf_counter() - t0) * 1000

        result = PathResult(
            path=self.to_nodes(raw),
            estimated_cost=self.estimate_cost(raw),
            execution_time_ms=wall_ms,
            heuristic=heuristic.value,
        )
        if self.reconstruct_route:
            result.route = self.reconstruct(raw)
        self.hooks.heuristic_end(heuristic.value, cost=result.estimated_cost, wall_ms=wall_ms)
        return result

    def to_nodes(self, raw: Iterable[int]) -> list[Node]:
        nodes = self._ready().nodes
        return [nodes[i] for i in raw]

    def estimate_cost(self, raw: list[int]) -> float:
        return self.matrix.path_cost(raw)

    def reconstruct(self, raw: list[int]) -> list[Node]:
        """Concatenate the stored per-edge routes along `raw`."""
        routes = self._ready().routes
        if not self.reconstruct_route or routes is None:
            raise ReconstructionUnavailable(
                "route data was not stored; create the planner with reconstruct_route=True"
            )
        if self.grid is None:
            raise ReconstructionUnavailable("cannot reconstruct a route without a grid")
        out: list[Node] = []
        for a, b in zip(raw, raw[1:]):
            out.extend(routes[a][b])
        return out
