# domain/heuristics/mst.py
import math
from collections.abc import Sequence

from tsp_route.domain.entities.graph import (
    AdjacencyTree,
    CostMatrix,
    Edge,
    clone_tree,
    empty_tree,
)
from tsp_route.runtime.types import EdgeSort


class MinimumSpanningTree:
    """
    Prim's tree over a cost matrix plus the tree utilities Christofides needs:
    adjacency conversion, degree analysis, Eulerian walks and shortcutting.
    """

    def __init__(self, matrix: CostMatrix):
        self.matrix = matrix
        self.n = matrix.n
        self._edges: list[Edge] | None = None

    # ----------------- Construction ---------------------

    def build(self) -> list[Edge]:
        """
        Edges in the order their child vertex was attached. Among all edges
        leaving the visited set the lightest wins; ties go to the lowest
        (from, to) pair, i.e. the first one met when scanning rows then columns.
        """
        if self._edges is not None:
            return list(self._edges)
        rows, n, root = self.matrix.rows, self.n, self.matrix.start
        in_tree = [False] * n
        in_tree[root] = True
        key = [rows[root][v] for v in range(n)]
        parent = [root] * n
        edges: list[Edge] = []

        for _ in range(n - 1):
            b = min(
                (v for v in range(n) if not in_tree[v]),
                key=lambda v: (key[v], parent[v], v),
            )
            in_tree[b] = True
            edges.append(Edge(parent[b], b, key[b]))
            for v in range(n):
                if in_tree[v]:
                    continue
                w = rows[b][v]
                if w < key[v] or (w == key[v] and b < parent[v]):
                    key[v], parent[v] = w, b

        self._edges = edges
        return list(edges)

    def to_adjacency_tree(
        self,
        edges: Sequence[Edge],
        *,
        undirected: bool = False,
        sort: EdgeSort = EdgeSort.NONE,
    ) -> AdjacencyTree:
        tree = empty_tree(self.n)
        for e in edges:
            tree[e.a].append(e)
            if undirected:
                tree[e.b].append(e.reversed())
        if sort is EdgeSort.BY_WEIGHT:
            self.sort_by_weight(tree)
        elif sort is EdgeSort.LEAF_FIRST:
            self.sort_leaf_first(tree)
        return tree

    # ----------------- Edge ordering (mutating) ---------------------

    @staticmethod
    def sort_by_weight(tree: AdjacencyTree) -> None:
        for slot in tree:
            slot.sort(key=lambda e: e.weight)

    def descendants(self, tree: AdjacencyTree) -> list[int]:
        """Number of descendants of every vertex when the tree hangs from START."""
        root = self.matrix.start
        counts = [0] * self.n
        seen = {root}
        order, stack = [], [(root, -1)]
        while stack:
            v, up = stack.pop()
            order.append((v, up))
            for e in tree[v]:
                if e.b not in seen:
                    seen.add(e.b)
                    stack.append((e.b, v))
        for v, up in reversed(order):
            if up >= 0:
                counts[up] += counts[v] + 1
        return counts

    def sort_leaf_first(self, tree: AdjacencyTree) -> None:
        """
        Visit children with the fewest descendants first, so short branches are
        finished before walking into a large subtree that leads away.
        """
        counts = self.descendants(tree)
        for slot in tree:
            slot.sort(key=lambda e: (counts[e.b], e.weight))

    # ----------------- Analysis ---------------------

    @staticmethod
    def odd_degree_vertices(tree: AdjacencyTree) -> list[int]:
        return [v for v, slot in enumerate(tree) if len(slot) % 2 == 1]

    def eulerian_tour(self, tree: AdjacencyTree, start: int | None = None) -> list[int]:
        """
        Hierholzer walk consuming every edge once, beginning at `start` (START by default).
        All-even input gives a closed circuit; with exactly two odd vertices and
        `start` one of them, the walk ends at the other.
        """
        work = clone_tree(tree)
        current = self.matrix.start if start is None else start
        stack: list[int] = []
        emitted: list[int] = []
        while True:
            slot = work[current]
            if slot:
                edge = slot.pop(0)
                _drop_one(work[edge.b], current)
                stack.append(current)
                current = edge.b
                continue
            emitted.append(current)
            if not stack:
                break
            current = stack.pop()
        emitted.reverse()
        return emitted

    @staticmethod
    def hamiltonian_path(tour: Sequence[int]) -> list[int]:
        seen: set[int] = set()
        path = []
        for v in tour:
            if v not in seen:
                seen.add(v)
                path.append(v)
        return path

    def preorder(self, tree: AdjacencyTree) -> list[int]:
        """Preorder walk from START; each slot's first edge is explored first."""
        root = self.matrix.start
        seen, path, stack = set(), [], [root]
        while stack:
            v = stack.pop()
            if v in seen:
                continue
            seen.add(v)
            path.append(v)
            stack.extend(e.b for e in reversed(tree[v]) if e.b not in seen)
        return path

    def total_weight(self) -> float:
        return math.fsum(e.weight for e in self.build())


def _drop_one(slot: list[Edge], target: int) -> None:
    # parallel edges must survive, so only the first mirror goes
    for i, e in enumerate(slot):
        if e.b == target:
            del slot[i]
            return
