# runtime/hooks.py
from typing import Protocol


class SolverHooks(Protocol):
    def matrix_start(self, *, size: int, fixed_end: bool, workers: int): ...
    def matrix_end(self, *, size: int, queries: int, wall_ms: float): ...
    def unreachable(self, *, a: str, b: str): ...
    def heuristic_start(self, name: str, *, size: int): ...
    def heuristic_end(self, name: str, *, cost: float, wall_ms: float): ...
    def cooling(self, *, temp: float, best: float, current: float): ...


class NoopHooks:
    def matrix_start(self, **_):
        pass

    def matrix_end(self, **_):
        pass

    def unreachable(self, **_):
        pass

    def heuristic_start(self, *_, **__):
        pass

    def heuristic_end(self, *_, **__):
        pass

    def cooling(self, **_):
        pass
