from __future__ import annotations
import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional, Sequence

from .errors import InstanceFormatError

@dataclass(frozen=True)
class Node:
    id: int
    x: float
    y: float

def distance(a: Node, b: Node) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)

def make_nodes(points: Sequence[Tuple[float, float]]) -> List[Node]:
    return [Node(i, float(x), float(y)) for i, (x, y) in enumerate(points)]

@dataclass
class TSPInstance:
    coords: List[Tuple[float, float]]
    name: str = "euclidean_tsp"

    @staticmethod
    def random_euclidean(n: int, seed: Optional[int] = None, square_size: float = 100.0, name: str = "random_euclidean"):
        rng = random.Random(seed)
        coords = [(rng.uniform(0, square_size), rng.uniform(0, square_size)) for _ in range(n)]
        return TSPInstance(coords=coords, name=name)

    @staticmethod
    def from_file(path, name: Optional[str] = None) -> "TSPInstance":
        """Read a node list: one header line, then one 'x y' pair per line.

        Extra columns after the first two are ignored, blank lines are skipped.
        """
        path = Path(path)
        coords = []
        with open(path, encoding="utf-8") as f:
            next(f, None)  # header
            for line_no, line in enumerate(f, start=2):
                fields = line.split()
                if not fields:
                    continue
                if len(fields) < 2:
                    raise InstanceFormatError(path, line_no, line)
                try:
                    x, y = float(fields[0]), float(fields[1])
                except ValueError:
                    raise InstanceFormatError(path, line_no, line) from None
                if not (math.isfinite(x) and math.isfinite(y)):
                    raise InstanceFormatError(path, line_no, line)
                coords.append((x, y))
        return TSPInstance(coords=coords, name=name or path.stem)

    def n_cities(self) -> int:
        return len(self.coords)

    def nodes(self) -> List[Node]:
        return make_nodes(self.coords)

    def environment(self, cfg):
        from .environment import load_instance
        return load_instance(self.coords, cfg)

