# domain/errors.py


class TspRouteError(Exception):
    """Base class for solver failures."""


class UnreachableLocation(TspRouteError):
    def __init__(self, a=None, b=None):
        self.a, self.b = a, b
        where = f": {a.id} -> {b.id}" if a is not None and b is not None else ""
        super().__init__(f"Unreachable location encountered{where}")


class NotInitialized(TspRouteError):
    def __init__(self, msg: str = "Engine not initialized. Call init() before computing a path."):
        super().__init__(msg)


class NoSplicePoint(TspRouteError, ValueError):
    """Insertion ran out of finite edges to split; the input holds an unreachable location."""


class ReconstructionUnavailable(TspRouteError):
    pass


class UnsupportedTopology(TspRouteError):
    pass
