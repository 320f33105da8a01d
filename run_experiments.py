# run_experiments.py
# Solve one instance with the sequential and then the parallel colony, report
# length and wall time of each; optionally repeat over seeds and save plots.
import os, sys, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from acs_tsp import TSPInstance, ACOConfig, SequentialACS, ParallelACS
from acs_tsp.errors import ACOError
from acs_tsp.experiments import compare_strategies

STRATEGY_LABELS = {"seq": "Sequential", "par": "Parallel"}


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def build_argparser():
    ap = argparse.ArgumentParser(prog="acs-tsp",
                                 description="Ant Colony System for Euclidean TSP, sequential vs parallel.")
    ap.add_argument("instance", nargs="?", default=None,
                    help="node file: header line, then 'x y' per line (random instance if omitted)")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--alpha", type=float, default=1.0, help="pheromone weight")
    ap.add_argument("--beta", type=float, default=2.0, help="distance weight")
    ap.add_argument("--rho", type=float, default=0.1, help="evaporation rate in [0, 1]")
    ap.add_argument("--ants", type=int, default=10)
    ap.add_argument("--iters", type=int, default=50)
    ap.add_argument("--n", type=int, default=30, help="cities for a random instance")
    ap.add_argument("--square", type=float, default=100.0)
    ap.add_argument("--inst-seed", type=int, default=123)
    ap.add_argument("--runs", type=int, default=0, help="extra repeated trials per strategy (0 = skip)")
    ap.add_argument("--summary-csv", default=None, help="write per-strategy statistics here")
    ap.add_argument("--plot-dir", default=None, help="save convergence/scatter plots here")
    ap.add_argument("--log-level", default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def plot_convergence(results, save_path):
    plt.figure()
    for name, res in results.items():
        plt.plot(res.history_best_lengths, label=STRATEGY_LABELS[name])
    plt.xlabel("Iteration")
    plt.ylabel("Best-so-far tour length")
    plt.title("ACS convergence")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_scatter(details_by_strategy, save_path):
    plt.figure()
    names = list(details_by_strategy.keys())
    for i, name in enumerate(names, start=1):
        lengths = [L for (L, t, tour) in details_by_strategy[name]]
        x = np.random.normal(loc=i, scale=0.03, size=len(lengths))
        plt.plot(x, lengths, "o")
    plt.xticks(range(1, len(names) + 1), [STRATEGY_LABELS[n] for n in names])
    plt.ylabel("Best tour length")
    plt.title("Best lengths across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def solve_both(inst, cfg):
    """Run both colonies on one environment, re-initialized in between."""
    env = inst.environment(cfg)
    results = {}
    for name, solver_cls in (("seq", SequentialACS), ("par", ParallelACS)):
        label = STRATEGY_LABELS[name]
        print(f"* Solving TSP ({label.lower()})...")
        env.initialize()
        res = solver_cls(env).run()
        print(f"* {label} solution done.")
        print(f"Result: {res.best_length}")
        print(f"{label} solution execution time: {res.elapsed_sec:.4f}s")
        results[name] = res
    return results


def main(argv=None):
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = ACOConfig(alpha=args.alpha, beta=args.beta, rho=args.rho,
                    n_ants=args.ants, n_iterations=args.iters, seed=args.seed)
    try:
        cfg.validate()
    except ValueError as e:
        ap.error(str(e))
    if args.runs < 0:
        ap.error("--runs must be >= 0")

    try:
        if args.instance:
            print(f"* Reading file {args.instance}...")
            inst = TSPInstance.from_file(args.instance)
            print("* Successfully read file.")
        else:
            inst = TSPInstance.random_euclidean(n=args.n, seed=args.inst_seed,
                                                square_size=args.square, name=f"demo{args.n}")
        results = solve_both(inst, cfg)
        comparison = compare_strategies(inst, cfg, n_runs=args.runs, base_seed=args.seed) if args.runs else {}
    except (OSError, ValueError, ACOError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for name, (stats, _) in comparison.items():
        print(STRATEGY_LABELS[name], json.dumps(stats, indent=2))

    if args.summary_csv:
        records = [{"strategy": name, "best_length": res.best_length, "elapsed_sec": res.elapsed_sec}
                   for name, res in results.items()]
        for name, (stats, _) in comparison.items():
            records.append({**stats, "strategy": f"{name}_trials"})
        pd.DataFrame.from_records(records).to_csv(ensure(args.summary_csv), index=False)
        print("Saved:", args.summary_csv)

    if args.plot_dir:
        plot_convergence(results, os.path.join(args.plot_dir, "convergence.png"))
        if comparison:
            plot_scatter({name: details for name, (_, details) in comparison.items()},
                         os.path.join(args.plot_dir, "results_distribution.png"))
        print("Plots saved in:", args.plot_dir)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
