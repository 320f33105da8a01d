from __future__ import annotations
import logging
import queue
import random
import threading
from typing import List

from .aco_base import ACOBase
from .ant import Ant

logger = logging.getLogger(__name__)

# upper bound for per-ant sub-seeds drawn from the root source
SUBSEED_RANGE = 999_999_999

class ParallelACS(ACOBase):
    """ACS with one worker thread per ant for tour construction.

    Workers only read the matrices. Each posts exactly one message on a
    bounded queue, either `(ant_id, tour, length)` or the exception it hit.
    The controller drains one message per ant before touching pheromones, so
    writes never overlap with construction and iteration k+1 never starts
    before iteration k has evaporated.
    """
    name = "parallel"

    def _make_ants(self) -> List[Ant]:
        # sub-seeds are drawn up front, in population order
        root = self.env.rng
        return [Ant(i, self.env, rng=random.Random(root.randrange(SUBSEED_RANGE)))
                for i in range(self.cfg.n_ants)]

    @staticmethod
    def _worker(ant: Ant, results: queue.Queue) -> None:
        try:
            tour = ant.construct()
        except Exception as exc:  # reported to the controller, re-raised there
            results.put(exc)
        else:
            results.put((ant.id, list(tour), ant.length))

    def _iteration(self, ants: List[Ant], iteration: int) -> None:
        results: queue.Queue = queue.Queue(maxsize=len(ants))
        for ant in ants:
            ant.reset()
        workers = [threading.Thread(target=self._worker, args=(ant, results),
                                    name=f"ant-{ant.id}", daemon=True)
                   for ant in ants]
        for w in workers:
            w.start()

        failure = None
        for _ in range(len(ants)):
            msg = results.get()
            if isinstance(msg, BaseException):
                if failure is None:
                    failure = msg
                continue
            ant_id, tour, length = msg
            logger.debug("iteration %d ant %d length=%.6f", iteration, ant_id, length)
            self._consider(length, tour)
        for w in workers:
            w.join()
        if failure is not None:
            raise failure

        self._update_pheromones(ants)
