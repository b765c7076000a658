import math

import numpy as np
import pytest

from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.domain.errors import NoSplicePoint
from tsp_route.domain.heuristics.greedy import GreedyHeuristics

INF = math.inf
R2 = math.sqrt(2.0)
SQUARE = [
    [0, 1, R2, 1],
    [1, 0, 1, R2],
    [R2, 1, 0, 1],
    [1, R2, 1, 0],
]


@pytest.fixture
def random_closed() -> CostMatrix:
    rng = np.random.default_rng(21)
    pts = rng.uniform(0, 100, size=(18, 2))
    return CostMatrix.from_weights(np.abs(pts[:, None, :] - pts[None, :, :]).sum(-1))


@pytest.fixture
def random_path() -> CostMatrix:
    rng = np.random.default_rng(22)
    pts = rng.uniform(0, 100, size=(18, 2))
    w = np.abs(pts[:, None, :] - pts[None, :, :]).sum(-1)
    w[0, 1] = w[1, 0] = INF
    return CostMatrix.from_weights(w, fixed_end=True)


# ---------- Nearest neighbour


def test_nearest_neighbor_walks_the_square_perimeter():
    m = CostMatrix.from_weights(SQUARE)
    path = GreedyHeuristics(m).nearest_neighbor()
    assert path == [0, 1, 2, 3]
    assert m.path_cost(path + [0]) == pytest.approx(4.0)


def test_nearest_neighbor_visits_each_vertex_once(random_closed, random_path):
    closed = GreedyHeuristics(random_closed).nearest_neighbor()
    assert closed[0] == 0
    assert sorted(closed) == list(range(18))

    path = GreedyHeuristics(random_path).nearest_neighbor()
    assert path[0] == 0 and path[-1] == 1
    assert sorted(path) == list(range(18))


def test_nearest_neighbor_holds_back_the_end():
    # END (1) is nearest to START but must come last
    w = [
        [0, INF, 5, 6],
        [INF, 0, 7, 1],
        [5, 7, 0, 2],
        [6, 1, 2, 0],
    ]
    m = CostMatrix.from_weights(w, fixed_end=True)
    assert GreedyHeuristics(m).nearest_neighbor() == [0, 2, 3, 1]


# ---------- Insertion


def test_nearest_insertion_on_square():
    m = CostMatrix.from_weights(SQUARE)
    path = GreedyHeuristics(m).nearest_insertion()
    assert path == [0, 3, 2, 1]
    assert m.path_cost(path + [0]) == pytest.approx(4.0)


def test_farthest_insertion_on_square():
    m = CostMatrix.from_weights(SQUARE)
    path = GreedyHeuristics(m).farthest_insertion()
    assert path == [0, 1, 2, 3]
    assert m.path_cost(path + [0]) == pytest.approx(4.0)


@pytest.mark.parametrize("prefer_nearest", [True, False])
def test_insertion_is_a_permutation(random_closed, random_path, prefer_nearest):
    closed = GreedyHeuristics(random_closed).insertion(prefer_nearest)
    assert closed[0] == 0
    assert len(closed) == len(set(closed)) == 18

    path = GreedyHeuristics(random_path).insertion(prefer_nearest)
    assert path[0] == 0 and path[-1] == 1
    assert len(path) == len(set(path)) == 18
    assert math.isfinite(random_path.path_cost(path))


def test_insertion_path_with_single_middle_vertex():
    w = [
        [0, INF, 3],
        [INF, 0, 4],
        [3, 4, 0],
    ]
    m = CostMatrix.from_weights(w, fixed_end=True)
    assert GreedyHeuristics(m).nearest_insertion() == [0, 2, 1]
    assert GreedyHeuristics(m).farthest_insertion() == [0, 2, 1]


def test_insertion_raises_when_vertex_is_cut_off():
    w = [
        [0, 1, INF],
        [1, 0, INF],
        [INF, INF, 0],
    ]
    with pytest.raises(NoSplicePoint):
        GreedyHeuristics(CostMatrix.from_weights(w)).nearest_insertion()


def test_insertion_raises_when_no_edge_can_be_split():
    # vertex 2 is reachable from 0 only, so every split needs an infinite leg
    w = [
        [0, 1, 1],
        [1, 0, INF],
        [1, INF, 0],
    ]
    with pytest.raises(NoSplicePoint):
        GreedyHeuristics(CostMatrix.from_weights(w)).farthest_insertion()
