# domain/heuristics/annealing.py
import math
from dataclasses import dataclass, field

import numpy as np

from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.runtime.hooks import NoopHooks, SolverHooks


@dataclass
class AnnealingResult:
    path: list[int]
    cost: float
    history: list[float] = field(default_factory=list)  # best cost after each cooling step
    iterations: int = 0


class SimulatedAnnealing:
    """
    Local search over full tours. Moves either reverse a segment or carry it to
    another interior position; the first and last positions never move.
    """

    def __init__(
        self,
        matrix: CostMatrix,
        rng: np.random.Generator,
        hooks: SolverHooks | None = None,
    ):
        self.matrix = matrix
        self.rng = rng
        self.hooks = hooks or NoopHooks()

    def initial_path(self) -> list[int]:
        m = self.matrix
        if m.is_path:
            return [m.start, *m.regular, m.end]
        return [m.start, *m.regular, m.start]

    # ---------------- Moves ----------------------

    def _segment(self, length: int) -> tuple[int, int]:
        lo, hi = 1, length - 2
        i = int(self.rng.integers(lo, hi + 1))
        j = int(self.rng.integers(lo, hi + 1))
        if i == j:
            j = i + 1 if i < hi else i - 1
        return min(i, j), max(i, j)

    @staticmethod
    def reverse_segment(path: list[int], i: int, j: int) -> None:
        path[i : j + 1] = path[i : j + 1][::-1]

    def transport_segment(self, path: list[int], i: int, j: int) -> None:
        segment = path[i:j]
        del path[i:j]
        last = len(path) - 1
        at = int(self.rng.integers(1, last + 1))
        if at == i and last > 1:
            at = i + 1 if i < last else i - 1
        path[at:at] = segment

    def neighbor(self, path: list[int]) -> list[int]:
        i, j = self._segment(len(path))
        out = list(path)
        if self.rng.random() < 0.5:
            self.reverse_segment(out, i, j)
        else:
            self.transport_segment(out, i, j)
        return out

    # ---------------- Search ----------------------

    def run(
        self,
        *,
        initial_temp: float = 1.0,
        min_temp: float = 1e-4,
        cooling_rate: float = 0.99,
        successes_per_temp: int | None = None,
        max_attempts_per_temp: int = 1500,
        max_iterations: int | None = None,
    ) -> AnnealingResult:
        cost_of = self.matrix.path_cost
        current = self.initial_path()
        current_cost = cost_of(current)
        best, best_cost = current, current_cost
        history = [best_cost]
        if len(current) < 4:
            # fewer than two interior positions: nothing can move
            return AnnealingResult(best, best_cost, history, 0)

        target = successes_per_temp or 10 * len(current)
        temp = initial_temp
        successes = attempts = iterations = 0

        while temp > min_temp:
            if max_iterations is not None and iterations >= max_iterations:
                break
            candidate = self.neighbor(current)
            cost = cost_of(candidate)
            delta = cost - current_cost
            if delta < 0 or self.rng.random() <= math.exp(-delta / temp):
                current, current_cost = candidate, cost

            if current_cost < best_cost:
                best, best_cost = current, current_cost
                successes += 1
            attempts += 1
            iterations += 1

            if successes >= target or attempts >= max_attempts_per_temp:
                temp *= cooling_rate
                successes = attempts = 0
                history.append(best_cost)
                self.hooks.cooling(temp=temp, best=best_cost, current=current_cost)

        return AnnealingResult(best, best_cost, history, iterations)
