from __future__ import annotations
import statistics
from dataclasses import asdict
from typing import Dict, Any, List, Tuple
from .tsp import TSPInstance
from .aco_base import ACOConfig
from .sequential import SequentialACS
from .parallel import ParallelACS

STRATEGIES = {"seq": SequentialACS, "par": ParallelACS}

def _strategy_constructor(name: str):
    try:
        return STRATEGIES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown strategy {name}") from None

def solve_instance(instance: TSPInstance, strategy: str, cfg: ACOConfig):
    env = instance.environment(cfg)
    env.initialize()
    return _strategy_constructor(strategy)(env).run()

def run_repeated_trials(instance: TSPInstance, strategy: str, cfg: ACOConfig, n_runs: int = 10, base_seed: int = 42):
    lengths = []
    times = []
    best_tours = []
    for r in range(n_runs):
        cfg_r = ACOConfig(**{**asdict(cfg), "seed": base_seed + r})
        res = solve_instance(instance, strategy, cfg_r)
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        best_tours.append([node.id for node in res.best_tour])
    stats = {
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "median_length": statistics.median(lengths),
        "mean_time": statistics.mean(times),
        "strategy": strategy,
        "n_runs": n_runs,
    }
    return stats, list(zip(lengths, times, best_tours))

def compare_strategies(instance: TSPInstance, cfg: ACOConfig, n_runs: int = 5,
                       base_seed: int = 42) -> Dict[str, Tuple[Dict[str, Any], List]]:
    """Run both strategies on the same seeds; returns {strategy: (stats, details)}."""
    return {name: run_repeated_trials(instance, name, cfg, n_runs=n_runs, base_seed=base_seed)
            for name in STRATEGIES}
