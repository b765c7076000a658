# domain/matrix.py
import math
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np

from tsp_route.app.protocols import RoutePlanner
from tsp_route.domain.entities.geography import Node, RouteQuery
from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.domain.errors import UnreachableLocation
from tsp_route.runtime.hooks import NoopHooks, SolverHooks

Routes = list[list[list[Node]]]


@dataclass
class MatrixBuild:
    """Outcome of the one-off matrix construction: either a matrix or the fatal error."""

    nodes: list[Node]
    matrix: CostMatrix | None = None
    routes: Routes | None = None
    error: UnreachableLocation | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> CostMatrix:
        if self.error is not None:
            raise self.error
        return self.matrix


def arrange_vertices(
    nodes: Iterable[Node], start: Node, end: Node | None = None
) -> tuple[list[Node], bool]:
    """
    Order vertices as [start, end?, *regular]. The end slot exists only for a
    fixed-endpoint path, i.e. when an end is given that differs from the start.
    Nodes repeating a reserved or earlier id are dropped.
    """
    fixed_end = end is not None and end.id != start.id
    seen = {start.id, end.id} if fixed_end else {start.id}
    regular = []
    for node in nodes:
        if node.id in seen:
            continue
        seen.add(node.id)
        regular.append(node)
    head = [start, end] if fixed_end else [start]
    return head + regular, fixed_end


def _results(pairs, query, workers: int) -> Iterator[tuple[int, int, RouteQuery]]:
    if workers <= 1:
        yield from map(query, pairs)
        return
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(query, rc) for rc in pairs]
        try:
            for fut in as_completed(futures):
                yield fut.result()
        finally:
            # consumer stopped early: drop whatever has not started yet
            for fut in futures:
                fut.cancel()


def build_cost_matrix(
    nodes: Iterable[Node],
    start: Node,
    end: Node | None = None,
    *,
    planner: RoutePlanner,
    want_routes: bool = False,
    workers: int = 1,
    hooks: SolverHooks | None = None,
) -> MatrixBuild:
    hooks = hooks or NoopHooks()
    vertices, fixed_end = arrange_vertices(nodes, start, end)
    n = len(vertices)
    weights = np.zeros((n, n), dtype=float)
    routes: Routes | None = [[[] for _ in range(n)] for _ in range(n)] if want_routes else None

    def query(rc):
        r, c = rc
        return r, c, planner.query(vertices[r], vertices[c], want_route=want_routes)

    pairs = [(r, c) for r in range(n) for c in range(n) if r != c]
    hooks.matrix_start(size=n, fixed_end=fixed_end, workers=workers)
    t0 = time.perf_counter()

    done = 0
    for r, c, res in _results(pairs, query, workers):
        if not math.isfinite(res.cost):
            a, b = vertices[r], vertices[c]
            hooks.unreachable(a=a.id, b=b.id)
            return MatrixBuild(nodes=vertices, error=UnreachableLocation(a, b))
        weights[r, c] = res.cost
        if routes is not None:
            routes[r][c] = list(res.route or [])
        done += 1

    endpoint_cost = math.inf
    if fixed_end:
        endpoint_cost = float(weights[0, 1])
        weights[0, 1] = weights[1, 0] = math.inf

    matrix = CostMatrix.from_weights(weights, fixed_end=fixed_end, endpoint_cost=endpoint_cost)
    hooks.matrix_end(size=n, queries=done, wall_ms=(time.perf_counter() - t0) * 1000)
    return MatrixBuild(nodes=vertices, matrix=matrix, routes=routes)
