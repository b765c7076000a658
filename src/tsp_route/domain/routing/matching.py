import math
from itertools import combinations

import networkx as nx

from tsp_route.app.protocols import MatchingSolver
from tsp_route.domain.entities.graph import Edge


class BlossomMatchingSolver(MatchingSolver):
    """Edmonds' blossom via networkx; pairs with infinite weight are never offered."""

    def solve(self, vertices, weight_of):
        G = nx.Graph()
        vs = sorted(set(vertices))
        G.add_nodes_from(vs)
        for u, v in combinations(vs, 2):
            w = weight_of(u, v)
            if math.isfinite(w):
                G.add_edge(u, v, weight=w)

        matches: dict[int, list[Edge]] = {}
        for u, v in nx.min_weight_matching(G, weight="weight"):
            a, b = min(u, v), max(u, v)
            matches.setdefault(a, []).append(Edge(a, b, weight_of(a, b)))
        return matches
