# domain/heuristics/christofides.py
from tsp_route.app.protocols import MatchingSolver
from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.domain.errors import UnsupportedTopology
from tsp_route.domain.heuristics.mst import MinimumSpanningTree
from tsp_route.domain.routing.matching import BlossomMatchingSolver
from tsp_route.runtime.types import EdgeSort


class Christofides:
    """
    MST + minimum-weight matching on the odd vertices + Eulerian shortcut.

    For a fixed-endpoint path the odd set is flipped at START and END
    (Hoogeveen's variant): afterwards exactly those two have odd degree, so the
    Eulerian walk from START is a trail that finishes at END.
    """

    def __init__(
        self,
        matrix: CostMatrix,
        matching: MatchingSolver | None = None,
        mst: MinimumSpanningTree | None = None,
    ):
        self.matrix = matrix
        self.matching = matching or BlossomMatchingSolver()
        self.mst = mst or MinimumSpanningTree(matrix)

    def odd_vertices(self, tree) -> list[int]:
        odd = set(self.mst.odd_degree_vertices(tree))
        if self.matrix.is_path:
            odd ^= {self.matrix.start, self.matrix.end}
        return sorted(odd)

    def solve(self) -> list[int]:
        m = self.matrix
        if m.n <= 2:
            return [m.start, m.end] if m.is_path else list(range(m.n))

        tree = self.mst.to_adjacency_tree(
            self.mst.build(), undirected=True, sort=EdgeSort.BY_WEIGHT
        )
        odd = self.odd_vertices(tree)
        matches = self.matching.solve(odd, m.weight)

        covered = set()
        for edges in matches.values():
            for e in edges:
                covered.update((e.a, e.b))
                # multigraph: parallel edges stay
                tree[e.a].append(e)
                tree[e.b].append(e.reversed())
        if covered != set(odd):
            raise UnsupportedTopology(
                f"no perfect matching over odd vertices {sorted(set(odd) - covered)}"
            )

        self.mst.sort_by_weight(tree)
        tour = self.mst.eulerian_tour(tree, start=m.start)
        path = self.mst.hamiltonian_path(tour)
        if not m.is_path:
            return path
        rest = [v for v in path if v not in (m.start, m.end)]
        return [m.start, *rest, m.end]
