from __future__ import annotations
import logging
import math
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import NotInitializedError
from .tsp import Node

logger = logging.getLogger(__name__)

@dataclass
class ACOConfig:
    alpha: float = 1.0          # pheromone influence
    beta: float = 2.0           # heuristic influence
    rho: float = 0.1            # evaporation rate
    n_ants: int = 10
    n_iterations: int = 50
    seed: Optional[int] = None

    def validate(self) -> "ACOConfig":
        if not (math.isfinite(self.alpha) and math.isfinite(self.beta)):
            raise ValueError("alpha and beta must be finite.")
        if not 0.0 <= self.rho <= 1.0:
            raise ValueError(f"rho must be in [0, 1], got {self.rho}.")
        if self.n_ants < 1:
            raise ValueError(f"n_ants must be >= 1, got {self.n_ants}.")
        if self.n_iterations < 1:
            raise ValueError(f"n_iterations must be >= 1, got {self.n_iterations}.")
        return self

@dataclass
class ACOResult:
    best_tour: List[Node]
    best_length: float
    history_best_lengths: List[float]
    history_best_tours: List[List[Node]]
    config: ACOConfig
    elapsed_sec: float

class ACOBase:
    """Bookkeeping shared by the sequential and parallel colonies.

    Subclasses build the population in `_make_ants` and run one full
    iteration in `_iteration`: construction, then `_update_pheromones`, with
    every finished tour passed through `_consider`.
    """
    name = "base"

    def __init__(self, env):
        self.env = env
        self.cfg = env.cfg
        self.best_tour: Optional[List[Node]] = None
        self.best_length = math.inf
        self.history_best_lengths: List[float] = []
        self.history_best_tours: List[List[Node]] = []

    def _make_ants(self) -> list:
        raise NotImplementedError

    def _iteration(self, ants: list, iteration: int) -> None:
        raise NotImplementedError

    def _consider(self, length: float, tour: Sequence[Node]) -> None:
        if length < self.best_length:
            self.best_length = length
            self.best_tour = list(tour)

    def _update_pheromones(self, ants: list) -> None:
        # every deposit lands before evaporation scales the matrix
        for ant in ants:
            ant.deposit()
        self.env.evaporate()

    def solve(self) -> Tuple[float, List[Node]]:
        if not self.env.initialized:
            raise NotInitializedError()
        self.best_tour = None
        self.best_length = math.inf
        self.history_best_lengths = []
        self.history_best_tours = []

        logger.info("%s: %d nodes, %d ants, %d iterations", self.name,
                    self.env.n, self.cfg.n_ants, self.cfg.n_iterations)
        ants = self._make_ants()
        for it in range(self.cfg.n_iterations):
            self._iteration(ants, it)
            self.history_best_lengths.append(self.best_length)
            self.history_best_tours.append(list(self.best_tour))
            logger.debug("%s: iteration %d best=%.6f", self.name, it, self.best_length)

        logger.info("%s: best length %.6f", self.name, self.best_length)
        return self.best_length, list(self.best_tour)

    def run(self) -> ACOResult:
        start = time.time()
        self.solve()
        elapsed = time.time() - start
        return ACOResult(best_tour=list(self.best_tour), best_length=self.best_length,
                         history_best_lengths=self.history_best_lengths,
                         history_best_tours=self.history_best_tours,
                         config=self.cfg, elapsed_sec=elapsed)
