from dataclasses import dataclass, field


# Core location types shared by planners and heuristics
@dataclass(frozen=True, order=True)
class Node:
    """A location on the floorplan. Equality and ordering go through `id` only."""

    x: float = field(compare=False)
    y: float = field(compare=False)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", f"{_fmt(self.x)},{_fmt(self.y)}")


def _fmt(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


@dataclass(frozen=True)
class RouteQuery:
    cost: float
    route: list[Node] | None = None  # cells walked from a to b, inclusive


@dataclass
class PathResult:
    path: list[Node]
    estimated_cost: float
    route: list[Node] | None = None
    execution_time_ms: float = 0.0
    heuristic: str = ""
