from .tsp import Node, TSPInstance
from .aco_base import ACOConfig, ACOResult
from .environment import Environment, load_instance
from .ant import Ant
from .sequential import SequentialACS
from .parallel import ParallelACS
from .experiments import run_repeated_trials, compare_strategies
