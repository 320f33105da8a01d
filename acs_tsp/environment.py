from __future__ import annotations
import logging
import random
from typing import List, Optional, Sequence, Tuple

from .aco_base import ACOConfig
from .errors import EmptyInstanceError, EmptyTourError
from .tsp import Node, distance, make_nodes

logger = logging.getLogger(__name__)

# Duplicate coordinates give a zero distance; attractiveness uses this instead
# so 1/d stays finite. Stored distances and tour lengths keep the true value.
MIN_DISTANCE = 1e-10

class Environment:
    """Distance and pheromone model shared by every ant of a run.

    Matrices are plain nested lists indexed by `Node.id`. Both are kept
    symmetric: every write goes to (i, j) and (j, i).
    """

    def __init__(self, nodes: Sequence[Node], cfg: ACOConfig):
        self.nodes: List[Node] = list(nodes)
        self.n = len(self.nodes)
        self.cfg = cfg
        self.D: List[List[float]] = []
        self.tau: List[List[float]] = []
        self.Q = 0.0
        self.rng: Optional[random.Random] = None
        # ants finished in the current lock-step iteration
        self.done_ants = 0
        self.initialized = False

    def initialize(self) -> None:
        """Derive distances, reset pheromones to 1/N, set Q and reseed.

        Calling it again restores the exact starting state of a run.
        """
        n = self.n
        if n == 0:
            raise EmptyInstanceError()
        tau0 = 1.0 / n
        self.D = [[0.0] * n for _ in range(n)]
        self.tau = [[0.0] * n for _ in range(n)]
        min_dist = None
        for i in range(n):
            for j in range(i + 1, n):
                d = distance(self.nodes[i], self.nodes[j])
                self.D[i][j] = self.D[j][i] = d
                self.tau[i][j] = self.tau[j][i] = tau0
                if d > 0 and (min_dist is None or d < min_dist):
                    min_dist = d
        self.Q = min_dist if min_dist is not None else 0.0
        self.rng = random.Random(self.cfg.seed)
        self.done_ants = 0
        self.initialized = True
        logger.debug("initialized %d nodes, tau0=%g, Q=%g", n, tau0, self.Q)

    def distance(self, i: int, j: int) -> float:
        return self.D[i][j]

    def pheromone(self, i: int, j: int) -> float:
        return self.tau[i][j]

    def attractiveness(self, i: int, j: int) -> float:
        d = self.D[i][j]
        if d < MIN_DISTANCE:
            d = MIN_DISTANCE
        return (self.tau[i][j] ** self.cfg.alpha) * ((1.0 / d) ** self.cfg.beta)

    def set_pheromone(self, i: int, j: int, value: float) -> None:
        self.tau[i][j] = value
        self.tau[j][i] = value

    def reinforce(self, i: int, j: int, delta: float) -> None:
        self.set_pheromone(i, j, self.tau[i][j] + delta)

    def evaporate(self) -> None:
        keep = 1.0 - self.cfg.rho
        for i in range(self.n):
            for j in range(i + 1, self.n):
                self.set_pheromone(i, j, self.tau[i][j] * keep)

    def tour_length(self, tour: Sequence[Node]) -> float:
        """Closed length: consecutive edges plus the edge back to the start."""
        if not tour:
            raise EmptyTourError()
        total = 0.0
        prev = tour[-1]
        for node in tour:
            total += self.D[prev.id][node.id]
            prev = node
        return total

    def is_symmetric(self) -> bool:
        return all(self.tau[i][j] == self.tau[j][i]
                   for i in range(self.n) for j in range(i + 1, self.n))

def load_instance(points: Sequence[Tuple[float, float]], cfg: Optional[ACOConfig] = None) -> Environment:
    """Build an (uninitialized) environment, numbering nodes in input order."""
    return Environment(make_nodes(points), cfg or ACOConfig())
