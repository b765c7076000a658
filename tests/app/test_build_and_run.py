# tests/app/test_build_and_run.py
import pytest

from tsp_route.app.build import build
from tsp_route.app.planner import TourPlanner
from tsp_route.domain.errors import UnreachableLocation


def test_build_runs():
    cfg = {
        "nodes": ["3,0", "3,3", {"x": 0, "y": 3, "id": "dock"}],
        "start": "0,0",
        "metric": "euclidean",
        "seed": 1,
        "annealing": {"min_temp": 0.01, "cooling_rate": 0.9, "max_attempts_per_temp": 100},
    }
    planner = build(cfg, use_logging=False)
    assert planner.initialized
    for name in ("nearest_neighbor", "christofides", "simulated_annealing"):
        res = planner.solve(name)
        assert res.path[0].id == res.path[-1].id == "0,0"
        assert res.estimated_cost == pytest.approx(12.0)


def test_build_on_a_grid_with_route():
    cfg = {
        "nodes": ["4,0"],
        "start": "0,0",
        "end": "4,2",
        "grid": [
            [0, 0, 1, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 0, 0],
        ],
        "reconstruct_route": True,
        "workers": 2,
    }
    planner = build(cfg, use_logging=False)
    res = planner.farthest_insertion()
    assert [n.id for n in res.path] == ["0,0", "4,0", "4,2"]
    # around the wall and back down
    assert res.estimated_cost == 10
    assert res.route[0].id == "0,0" and res.route[-1].id == "4,2"


def test_from_config_matches_build():
    cfg = {"nodes": ["1,1", "2,0"], "start": "0,0"}
    a = TourPlanner.from_config(cfg)
    b = build(cfg, use_logging=False)
    assert a.nearest_insertion().estimated_cost == b.nearest_insertion().estimated_cost


def test_build_keeps_the_unreachable_error():
    cfg = {"nodes": ["2,0"], "start": "0,0", "grid": [[0, 1, 0]]}
    planner = build(cfg, use_logging=False)
    assert isinstance(planner.error, UnreachableLocation)
    with pytest.raises(UnreachableLocation):
        planner.christofides()
