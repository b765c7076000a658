import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


class VertexRole(Enum):
    START = "start"
    END = "end"
    REGULAR = "regular"


@dataclass(frozen=True)
class Edge:
    a: int
    b: int
    weight: float

    def reversed(self) -> "Edge":
        return Edge(self.b, self.a, self.weight)


# One slot per vertex id, each holding that vertex's outgoing edges
AdjacencyTree = list[list[Edge]]


def empty_tree(n: int) -> AdjacencyTree:
    return [[] for _ in range(n)]


def clone_tree(tree: AdjacencyTree) -> AdjacencyTree:
    return [list(slot) for slot in tree]


def edge_count(tree: AdjacencyTree, *, undirected: bool = True) -> int:
    total = sum(len(slot) for slot in tree)
    return total // 2 if undirected else total


@dataclass(frozen=True, eq=False)
class CostMatrix:
    """
    Square table of pairwise costs plus the role of every index.

    Index 0 is always START. For a fixed-endpoint path index 1 is END and the
    START<->END cells hold +inf so no heuristic can use that pair internally;
    the real distance is kept in `endpoint_cost`.
    """

    weights: np.ndarray
    roles: tuple[VertexRole, ...]
    endpoint_cost: float = math.inf
    _rows: list[list[float]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        w = np.asarray(self.weights, dtype=float)
        if w.ndim != 2 or w.shape[0] != w.shape[1]:
            raise ValueError(f"cost matrix must be square, got shape {w.shape}")
        if len(self.roles) != w.shape[0]:
            raise ValueError("one role per matrix row is required")
        w = w.copy()
        w.setflags(write=False)
        object.__setattr__(self, "weights", w)
        # plain lists are much faster than numpy scalars in the inner loops
        object.__setattr__(self, "_rows", w.tolist())

    @classmethod
    def from_weights(
        cls, weights, *, fixed_end: bool = False, endpoint_cost: float = math.inf
    ) -> "CostMatrix":
        n = len(weights)
        roles = [VertexRole.REGULAR] * n
        roles[0] = VertexRole.START
        if fixed_end:
            roles[1] = VertexRole.END
        return cls(np.asarray(weights, dtype=float), tuple(roles), endpoint_cost)

    @property
    def n(self) -> int:
        return len(self.roles)

    @property
    def start(self) -> int:
        return self.roles.index(VertexRole.START)

    @property
    def end(self) -> int | None:
        return self.roles.index(VertexRole.END) if VertexRole.END in self.roles else None

    @property
    def is_path(self) -> bool:
        return self.end is not None

    @property
    def regular(self) -> list[int]:
        return [i for i, r in enumerate(self.roles) if r is VertexRole.REGULAR]

    @property
    def rows(self) -> list[list[float]]:
        return self._rows

    def weight(self, a: int, b: int) -> float:
        return self._rows[a][b]

    def path_cost(self, path: Sequence[int]) -> float:
        if len(path) < 2:
            return 0.0
        if self.is_path and list(path) == [self.start, self.end]:
            return self.endpoint_cost
        rows = self._rows
        return sum(rows[a][b] for a, b in zip(path, path[1:]))
