from __future__ import annotations


class ACOError(Exception):
    """Base class for errors raised by the solver core."""


class PreconditionError(ACOError):
    """A core invariant was violated; the current run cannot continue."""


class EmptyInstanceError(PreconditionError):
    def __init__(self):
        super().__init__("instance has no nodes")


class EmptyTourError(PreconditionError):
    def __init__(self):
        super().__init__("tour length requested for an empty tour")


class NotInitializedError(PreconditionError):
    def __init__(self):
        super().__init__("environment must be initialized before solving")


class AntStateError(PreconditionError):
    def __init__(self, ant_id: int, message: str):
        super().__init__(f"ant {ant_id}: {message}")
        self.ant_id = ant_id


class ZeroAttractivenessError(PreconditionError):
    """Roulette wheel has no usable total (all weights underflowed, or overflowed)."""

    def __init__(self, node_id: int, total: float, n_candidates: int):
        super().__init__(
            f"attractiveness sum from node {node_id} over {n_candidates} candidates is {total!r}"
        )
        self.node_id = node_id
        self.total = total


class InstanceFormatError(ValueError):
    def __init__(self, path, line_no: int, line: str):
        super().__init__(f"{path}:{line_no}: expected 'x y', got {line.strip()!r}")
        self.path = path
        self.line_no = line_no
