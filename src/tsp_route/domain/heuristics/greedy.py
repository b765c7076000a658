# domain/heuristics/greedy.py
import math

from tsp_route.domain.entities.graph import CostMatrix
from tsp_route.domain.errors import NoSplicePoint


class GreedyHeuristics:
    """Construction heuristics that read the cost matrix directly."""

    def __init__(self, matrix: CostMatrix):
        self.matrix = matrix

    def _best_unvisited(self, v: int, visited: list[bool], nearest: bool = True) -> int | None:
        row = self.matrix.rows[v]
        best, best_w = None, None
        for u, w in enumerate(row):
            if visited[u] or not math.isfinite(w):
                continue
            if best is None or (w < best_w if nearest else w > best_w):
                best, best_w = u, w
        return best

    def _fresh_visited(self) -> list[bool]:
        m = self.matrix
        visited = [False] * m.n
        visited[m.start] = True
        if m.is_path:
            # END is held back until every regular vertex is placed
            visited[m.end] = True
        return visited

    # ------------------- Nearest neighbour -------------------

    def nearest_neighbor(self) -> list[int]:
        """
        Greedy walk from START. For a fixed-endpoint path the walk still runs
        forward from START with END held back and appended last; it is not grown
        from the END side and reversed, so the greedy sequence can differ from one.
        """
        m = self.matrix
        visited = self._fresh_visited()
        path: list[int] = []
        stack = [m.start]
        while stack:
            current = stack.pop()
            path.append(current)
            nxt = self._best_unvisited(current, visited)
            if nxt is None:
                break
            visited[nxt] = True
            stack.append(nxt)
        if m.is_path:
            path.append(m.end)
        return path

    # ------------------- Insertion -------------------

    def _splice_position(self, path: list[int], new: int) -> int:
        rows = self.matrix.rows
        best_pos, best_inc = None, math.inf
        for i in range(len(path) - 1):
            a, b = path[i], path[i + 1]
            # the forbidden START<->END link is not a real edge; splitting it frees nothing
            removed = rows[a][b] if math.isfinite(rows[a][b]) else 0.0
            inc = rows[a][new] + rows[new][b] - removed
            if inc < best_inc:
                best_pos, best_inc = i + 1, inc
        if best_pos is None:
            raise NoSplicePoint(f"no edge of the current path can take vertex {new}")
        return best_pos

    def insertion(self, prefer_nearest: bool = True) -> list[int]:
        """
        Grow a path by repeatedly choosing the nearest (or farthest) outside
        vertex and splicing it where it adds the least cost.
        Closed tours are grown as a cycle and returned without the repeated start.
        """
        m = self.matrix
        rows = m.rows
        visited = self._fresh_visited()
        if m.is_path:
            path = [m.start, m.end]
        else:
            first = self._best_unvisited(m.start, visited, prefer_nearest)
            if first is None:
                return [m.start]
            visited[first] = True
            path = [m.start, first, m.start]

        while not all(visited):
            chosen, chosen_w = None, None
            for v in path:
                u = self._best_unvisited(v, visited, prefer_nearest)
                if u is None:
                    continue
                w = rows[v][u]
                if chosen is None or (w < chosen_w if prefer_nearest else w > chosen_w):
                    chosen, chosen_w = u, w
            if chosen is None:
                raise NoSplicePoint("no outside vertex is reachable from the current path")
            path.insert(self._splice_position(path, chosen), chosen)
            visited[chosen] = True

        return path if m.is_path else path[:-1]

    def nearest_insertion(self) -> list[int]:
        return self.insertion(prefer_nearest=True)

    def farthest_insertion(self) -> list[int]:
        return self.insertion(prefer_nearest=False)
