from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from tsp_route.domain.entities.geography import Node, RouteQuery
from tsp_route.domain.entities.graph import Edge


# ------------- Collaborators --------------------
@runtime_checkable
class RoutePlanner(Protocol):
    """
    Responsibilities:
      • Compute the minimum cost of travelling between two nodes.
      • Optionally reconstruct the walked route.
    A cost of +inf means b cannot be reached from a.
    """

    def query(self, a: Node, b: Node, *, want_route: bool = False) -> RouteQuery: ...


@runtime_checkable
class MatchingSolver(Protocol):
    """
    Minimum-weight perfect matching restricted to `vertices`.
    Each matched pair is reported once, keyed by one of its endpoints.
    """

    def solve(
        self, vertices: Iterable[int], weight_of: Callable[[int, int], float]
    ) -> dict[int, list[Edge]]: ...
