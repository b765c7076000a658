from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tsp_route.domain.entities.geography import Node
from tsp_route.io.locations import LocationFormat, parse_location

MetricName = Literal["euclidean", "manhattan"]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    x: float
    y: float
    id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, v):
        # "x,y" shorthand
        if isinstance(v, str):
            node = parse_location(v, LocationFormat.COORDINATE)
            return {"x": node.x, "y": node.y, "id": node.id}
        return v

    def to_node(self) -> Node:
        return Node(self.x, self.y, self.id or "")


def _check_grid(grid: list[list[int]]) -> list[list[int]]:
    if not grid or not grid[0]:
        raise ValueError("grid must have at least one row and one column")
    width = len(grid[0])
    if any(len(row) != width for row in grid):
        raise ValueError(f"grid rows must all have length {width}")
    return grid


# ----------------- ROUTE PLANNERS ---------------------


class RoutePlannerEuclideanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["euclidean"] = "euclidean"


class RoutePlannerManhattanModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["manhattan"] = "manhattan"


class RoutePlannerGridModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["grid"] = "grid"
    grid: list[list[int]]
    metric: MetricName = "manhattan"

    @field_validator("grid")
    @classmethod
    def _rectangular(cls, v):
        return _check_grid(v)


RoutePlannerUnion = Annotated[
    RoutePlannerEuclideanModel | RoutePlannerManhattanModel | RoutePlannerGridModel,
    Field(discriminator="kind"),
]

# ----------------- MATCHING ---------------------


class MatchingBlossomModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["blossom"] = "blossom"


MatchingUnion = Annotated[MatchingBlossomModel, Field(discriminator="kind")]

# ----------------- HEURISTICS ---------------------


class AnnealingModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    initial_temp: float = Field(1.0, gt=0)
    min_temp: float = Field(1e-4, gt=0)
    cooling_rate: float = Field(0.99, gt=0, lt=1)
    successes_per_temp: int | None = Field(None, ge=1)  # None => 10 * path length
    max_attempts_per_temp: int = Field(1500, ge=1)
    max_iterations: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_temps(self):
        if self.min_temp >= self.initial_temp:
            raise ValueError(
                f"min_temp ({self.min_temp}) must be below initial_temp ({self.initial_temp})"
            )
        return self


# ------------------------------------------------------------------


class ProblemModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "problem"  # tags the random streams together with `seed`
    nodes: list[NodeModel]
    start: NodeModel
    end: NodeModel | None = None
    grid: list[list[int]] | None = None
    metric: MetricName = "manhattan"
    reconstruct_route: bool = False
    seed: int = 0
    workers: int = Field(1, ge=1)
    matching: MatchingUnion = Field(default_factory=MatchingBlossomModel)
    annealing: AnnealingModel = Field(default_factory=AnnealingModel)
    log: LogModel = LogModel()

    @field_validator("grid")
    @classmethod
    def _rectangular(cls, v):
        return None if v is None else _check_grid(v)

    @model_validator(mode="after")
    def _reconstruction_needs_grid(self):
        if self.reconstruct_route and self.grid is None:
            raise ValueError("reconstruct_route requires a grid")
        return self

    def route_planner(self) -> RoutePlannerUnion:
        return route_planner_model(self.grid, self.metric)


def route_planner_model(grid: list[list[int]] | None, metric: str = "manhattan"):
    if grid is not None:
        return RoutePlannerGridModel(grid=grid, metric=metric)
    if metric == "euclidean":
        return RoutePlannerEuclideanModel()
    return RoutePlannerManhattanModel()
