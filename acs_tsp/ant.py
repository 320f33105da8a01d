from __future__ import annotations
import enum
import logging
import math
import random
from typing import Dict, List, Optional

from .errors import AntStateError, ZeroAttractivenessError
from .tsp import Node

logger = logging.getLogger(__name__)

class AntState(enum.Enum):
    FRESH = "fresh"
    CONSTRUCTING = "constructing"
    COMPLETE = "complete"

class Ant:
    """Builds one closed tour per iteration by roulette-wheel node selection.

    An ant created without its own `rng` draws from the environment's source
    and reports completion on `env.done_ants`; that is the lock-step mode.
    An ant with its own source touches no shared mutable state while
    constructing, so it can run on a worker thread.
    """

    def __init__(self, ant_id: int, env, rng: Optional[random.Random] = None):
        self.id = ant_id
        self.env = env
        self.rng = rng
        self.state = AntState.FRESH
        self.path: List[Node] = []
        # insertion-ordered, so the roulette walk is reproducible for a seed
        self.unvisited: Dict[int, Node] = {}
        self.current: Optional[Node] = None
        self.length = 0.0

    @property
    def done(self) -> bool:
        return self.state is AntState.COMPLETE

    def _random(self) -> random.Random:
        return self.rng if self.rng is not None else self.env.rng

    def reset(self) -> None:
        nodes = self.env.nodes
        start = nodes[self._random().randrange(len(nodes))]
        self.unvisited = {node.id: node for node in nodes}
        self.path = []
        self.length = 0.0
        self.state = AntState.CONSTRUCTING
        self._visit(start)
        if not self.unvisited:
            self._complete()

    def _visit(self, node: Node) -> None:
        self.path.append(node)
        self.current = node
        del self.unvisited[node.id]

    def _complete(self) -> None:
        self.state = AntState.COMPLETE
        self.length = self.env.tour_length(self.path)
        if self.rng is None:
            self.env.done_ants += 1

    def _choose_next(self) -> Node:
        env = self.env
        cur = self.current.id
        candidates = list(self.unvisited.values())
        weights = [env.attractiveness(cur, node.id) for node in candidates]
        total = sum(weights)
        if not (total > 0.0 and math.isfinite(total)):
            raise ZeroAttractivenessError(cur, total, len(candidates))

        r = self._random().random()
        acc = 0.0
        for node, w in zip(candidates, weights):
            acc += w / total
            if acc >= r:
                return node
        # cumulative sum fell short of r through rounding
        return candidates[-1]

    def step(self) -> None:
        if self.state is AntState.COMPLETE:
            return
        if self.state is AntState.FRESH:
            raise AntStateError(self.id, "step() before reset()")
        self._visit(self._choose_next())
        if not self.unvisited:
            self._complete()

    def construct(self) -> List[Node]:
        while not self.done:
            self.step()
        return self.path

    def deposit(self) -> None:
        """Add Q / length on every edge of the tour, closing edge included."""
        if not self.done:
            raise AntStateError(self.id, "deposit() on an unfinished tour")
        if self.length <= 0.0:
            return
        env = self.env
        delta = env.Q / self.length
        prev = self.path[-1]
        for node in self.path:
            if node.id != prev.id:
                env.reinforce(prev.id, node.id, delta)
            prev = node
        logger.debug("ant %d deposited %g on %d edges", self.id, delta, len(self.path))
