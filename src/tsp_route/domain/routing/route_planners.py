import math

import networkx as nx

from tsp_route.app.protocols import RoutePlanner
from tsp_route.domain.entities.geography import Node, RouteQuery
from tsp_route.runtime.types import Metric

SQRT2 = math.sqrt(2.0)


class EuclidRoutePlanner(RoutePlanner):
    def query(self, a, b, *, want_route=False):
        d = math.hypot(b.x - a.x, b.y - a.y)
        return RouteQuery(d, [a, b] if want_route else None)


class ManhattanRoutePlanner(RoutePlanner):
    def query(self, a, b, *, want_route=False):
        d = abs(b.x - a.x) + abs(b.y - a.y)
        if not want_route:
            return RouteQuery(d)
        if a.x == b.x or a.y == b.y:
            return RouteQuery(d, [a, b])
        return RouteQuery(d, [a, Node(b.x, a.y), b])


class GridRoutePlanner(RoutePlanner):
    """
    A* over a floorplan. `grid[y][x] == 0` is walkable, anything else is a wall.

    Manhattan moves along the four axes at cost 1. Euclidean also allows
    diagonal moves at cost sqrt(2) when neither adjacent orthogonal cell is a wall.
    """

    def __init__(self, grid: list[list[int]], metric: Metric | str = Metric.MANHATTAN):
        self.grid = [list(row) for row in grid]
        self.height = len(self.grid)
        self.width = len(self.grid[0]) if self.grid else 0
        self.metric = Metric(metric)
        self.G = self._build_graph()

    def _is_open(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and 0 <= x < self.width and self.grid[y][x] == 0

    def _build_graph(self) -> nx.Graph:
        G = nx.grid_2d_graph(self.width, self.height)  # nodes are (x, y)
        nx.set_edge_attributes(G, 1.0, "weight")
        G.remove_nodes_from([(x, y) for x, y in list(G.nodes) if not self._is_open(x, y)])
        if self.metric is Metric.EUCLIDEAN:
            for x, y in list(G.nodes):
                for dx in (-1, 1):
                    tx, ty = x + dx, y + 1
                    if (
                        self._is_open(tx, ty)
                        and self._is_open(x + dx, y)
                        and self._is_open(x, y + 1)
                    ):
                        G.add_edge((x, y), (tx, ty), weight=SQRT2)
        return G

    def _cell(self, p: Node) -> tuple[int, int] | None:
        c = (int(round(p.x)), int(round(p.y)))
        return c if c in self.G else None

    def _h(self, u, v) -> float:
        if self.metric is Metric.EUCLIDEAN:
            return math.hypot(v[0] - u[0], v[1] - u[1])
        return abs(v[0] - u[0]) + abs(v[1] - u[1])

    def query(self, a, b, *, want_route=False):
        ca, cb = self._cell(a), self._cell(b)
        if ca is None or cb is None:
            return RouteQuery(math.inf)
        try:
            if not want_route:
                return RouteQuery(nx.astar_path_length(self.G, ca, cb, heuristic=self._h))
            cells = nx.astar_path(self.G, ca, cb, heuristic=self._h)
        except nx.NetworkXNoPath:
            return RouteQuery(math.inf)
        cost = nx.path_weight(self.G, cells, weight="weight")
        route = [a, *(Node(x, y) for x, y in cells[1:-1]), b]
        return RouteQuery(cost, route)
