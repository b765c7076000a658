from collections import Counter

import numpy as np

from tsp_route.domain.entities.graph import CostMatrix, Edge, edge_count, empty_tree
from tsp_route.domain.heuristics.mst import MinimumSpanningTree
from tsp_route.runtime.types import EdgeSort

R2 = np.sqrt(2.0)

# unit square: 0=(0,0) 1=(0,1) 2=(1,1) 3=(1,0)
SQUARE = [
    [0, 1, R2, 1],
    [1, 0, 1, R2],
    [R2, 1, 0, 1],
    [1, R2, 1, 0],
]


def _mst(weights) -> MinimumSpanningTree:
    return MinimumSpanningTree(CostMatrix.from_weights(weights))


def _undirected(n, pairs):
    tree = empty_tree(n)
    for a, b in pairs:
        tree[a].append(Edge(a, b, 1.0))
        tree[b].append(Edge(b, a, 1.0))
    return tree


def test_prims_attachment_order_and_tie_break():
    edges = _mst(SQUARE).build()
    assert [(e.a, e.b) for e in edges] == [(0, 1), (0, 3), (1, 2)]
    assert all(e.weight == 1 for e in edges)


def test_mst_has_n_minus_one_edges_and_spans_all_vertices():
    rng = np.random.default_rng(7)
    pts = rng.uniform(0, 100, size=(15, 2))
    w = np.linalg.norm(pts[:, None, :] - pts[None, :, :], axis=-1)
    mst = _mst(w)
    edges = mst.build()
    assert len(edges) == 14
    touched = {e.a for e in edges} | {e.b for e in edges}
    assert touched == set(range(15))
    # every child is attached exactly once
    assert sorted(e.b for e in edges) == list(range(1, 15))


def test_undirected_tree_and_odd_degree_vertices():
    mst = _mst(SQUARE)
    tree = mst.to_adjacency_tree(mst.build(), undirected=True)
    assert [len(slot) for slot in tree] == [2, 2, 1, 1]
    assert mst.odd_degree_vertices(tree) == [2, 3]
    assert edge_count(tree) == 3


def test_weight_sort_puts_cheapest_edge_first():
    w = [
        [0, 5, 2, 9],
        [5, 0, 4, 1],
        [2, 4, 0, 3],
        [9, 1, 3, 0],
    ]
    mst = _mst(w)
    tree = mst.to_adjacency_tree(
        [Edge(0, 1, 5), Edge(0, 2, 2), Edge(0, 3, 9)], undirected=True, sort=EdgeSort.BY_WEIGHT
    )
    assert [e.b for e in tree[0]] == [2, 1, 3]


def test_leaf_first_ordering_finishes_short_branches_first():
    # 0 -> 1 (a leaf), 0 -> 2 -> {3, 4}; the bigger subtree is closer
    w = np.full((5, 5), 10.0)
    np.fill_diagonal(w, 0)
    edges = [Edge(0, 1, 5.0), Edge(0, 2, 1.0), Edge(2, 3, 1.0), Edge(2, 4, 2.0)]
    mst = _mst(w)

    by_weight = mst.to_adjacency_tree(edges, sort=EdgeSort.BY_WEIGHT)
    assert mst.preorder(by_weight) == [0, 2, 3, 4, 1]

    leaf_first = mst.to_adjacency_tree(edges, sort=EdgeSort.LEAF_FIRST)
    assert mst.descendants(leaf_first) == [4, 0, 2, 0, 0]
    assert mst.preorder(leaf_first) == [0, 1, 2, 3, 4]


def test_eulerian_tour_on_cycle_is_closed():
    mst = _mst(np.zeros((3, 3)))
    tour = mst.eulerian_tour(_undirected(3, [(0, 1), (1, 2), (2, 0)]))
    assert tour[0] == tour[-1] == 0
    assert len(tour) == 4


def test_eulerian_tour_keeps_parallel_edges():
    mst = _mst(np.zeros((4, 4)))
    pairs = [(0, 1), (0, 1), (1, 2), (2, 3), (3, 1)]
    tree = _undirected(4, pairs)
    tour = mst.eulerian_tour(tree)

    assert len(tour) == edge_count(tree) + 1
    walked = Counter(frozenset(p) for p in zip(tour, tour[1:]))
    assert walked == Counter(frozenset(p) for p in pairs)
    # input is untouched
    assert edge_count(tree) == len(pairs)


def test_eulerian_trail_between_the_two_odd_vertices():
    mst = _mst(np.zeros((4, 4)))
    tree = _undirected(4, [(0, 2), (2, 3), (3, 2), (2, 1)])
    trail = mst.eulerian_tour(tree, start=0)
    assert trail[0] == 0 and trail[-1] == 1
    assert len(trail) == 5


def test_hamiltonian_path_keeps_first_occurrences():
    mst = _mst(np.zeros((4, 4)))
    tour = [0, 1, 2, 1, 3, 0]
    path = mst.hamiltonian_path(tour)
    assert path == [0, 1, 2, 3]
    assert len(path) == len(set(tour))
