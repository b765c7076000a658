import logging

from tsp_route.app.planner import TourPlanner
from tsp_route.config.models import AnnealingModel
from tsp_route.domain.entities.geography import Node
from tsp_route.io.solver_logging import SolverLogging


def _records(caplog, msg):
    return [r for r in caplog.records if r.getMessage() == msg]


def test_matrix_and_heuristic_events(caplog):
    caplog.set_level(logging.DEBUG, logger="tsp_route_test")
    hooks = SolverLogging(run_id="r-1", logger=logging.getLogger("tsp_route_test"))
    planner = TourPlanner([Node(1, 0), Node(1, 1)], Node(0, 0), hooks=hooks).init()
    planner.nearest_neighbor()

    (start,) = _records(caplog, "matrix_start")
    assert start.extra == {"run_id": "r-1", "size": 3, "fixed_end": False, "workers": 1}
    (end,) = _records(caplog, "matrix_end")
    assert end.extra["queries"] == 6
    (done,) = _records(caplog, "heuristic_end")
    assert done.extra["heuristic"] == "nearest_neighbor"
    assert done.extra["cost"] == 4
    # debug-only events stay quiet
    assert not _records(caplog, "heuristic_start")


def test_debug_mode_reports_cooling(caplog):
    caplog.set_level(logging.DEBUG, logger="tsp_route_test")
    hooks = SolverLogging(debug=True, logger=logging.getLogger("tsp_route_test"))
    fast = AnnealingModel(min_temp=0.5, cooling_rate=0.5, max_attempts_per_temp=10)
    nodes = [Node(3, 1), Node(1, 3), Node(2, 2)]
    TourPlanner(nodes, Node(0, 0), hooks=hooks, annealing=fast).init().simulated_annealing()

    assert _records(caplog, "heuristic_start")
    cooling = _records(caplog, "cooling")
    assert [r.extra["temp"] for r in cooling] == [0.5]
    assert all(r.levelno == logging.DEBUG for r in cooling)


def test_unreachable_is_an_error(caplog):
    caplog.set_level(logging.INFO, logger="tsp_route_test")
    hooks = SolverLogging(logger=logging.getLogger("tsp_route_test"))
    TourPlanner([Node(2, 0)], Node(0, 0), grid=[[0, 1, 0]], hooks=hooks).init()

    (rec,) = _records(caplog, "unreachable_location")
    assert rec.levelno == logging.ERROR
    assert rec.extra["a"] == "0,0" and rec.extra["b"] == "2,0"
