# io/solver_logging.py
import json
import logging
import sys

from tsp_route.runtime.hooks import NoopHooks


def _default_json_logger(name="tsp_route", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SolverLogging(NoopHooks):
    """
    One place to shape and emit structured logs for matrix construction and heuristic runs.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    # --------------- matrix -----------------------------

    def matrix_start(self, *, size: int, fixed_end: bool, workers: int):
        self._emit("INFO", "matrix_start", size=size, fixed_end=fixed_end, workers=workers)

    def matrix_end(self, *, size: int, queries: int, wall_ms: float):
        self._emit("INFO", "matrix_end", size=size, queries=queries, wall_ms=round(wall_ms, 3))

    def unreachable(self, *, a: str, b: str):
        self._emit("ERROR", "unreachable_location", a=a, b=b)

    # --------------- heuristics -----------------------------

    def heuristic_start(self, name: str, *, size: int):
        if self.debug:
            self._emit("DEBUG", "heuristic_start", heuristic=name, size=size)

    def heuristic_end(self, name: str, *, cost: float, wall_ms: float):
        self._emit("INFO", "heuristic_end", heuristic=name, cost=cost, wall_ms=round(wall_ms, 3))

    def cooling(self, *, temp: float, best: float, current: float):
        if self.debug:
            self._emit("DEBUG", "cooling", temp=temp, best=best, current=current)
