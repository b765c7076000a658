# tsp_route/app/build.py
from collections.abc import Mapping

from tsp_route.app.planner import TourPlanner
from tsp_route.config.models import ProblemModel
from tsp_route.io.solver_logging import SolverLogging  # JSON logs
from tsp_route.runtime.hooks import NoopHooks


def build(
    cfg: ProblemModel | Mapping, *, run_id: str = "local", use_logging: bool = True
) -> TourPlanner:
    # 0) Validate config
    model = cfg if isinstance(cfg, ProblemModel) else ProblemModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SolverLogging(run_id=run_id, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Collaborators, planner and the one-off matrix construction
    return TourPlanner.from_config(model, hooks=hooks)
