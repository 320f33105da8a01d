from __future__ import annotations
import logging
from typing import List

from .aco_base import ACOBase
from .ant import Ant

logger = logging.getLogger(__name__)

class SequentialACS(ACOBase):
    """ACS with all ants advanced one node at a time, round-robin, on one thread."""
    name = "sequential"

    def _make_ants(self) -> List[Ant]:
        return [Ant(i, self.env) for i in range(self.cfg.n_ants)]

    def _iteration(self, ants: List[Ant], iteration: int) -> None:
        env = self.env
        env.done_ants = 0
        for ant in ants:
            ant.reset()
        while env.done_ants < len(ants):
            for ant in ants:
                ant.step()

        self._update_pheromones(ants)
        for ant in ants:
            logger.debug("iteration %d ant %d length=%.6f", iteration, ant.id, ant.length)
            self._consider(ant.length, ant.path)
