import os, argparse
import matplotlib.pyplot as plt
import imageio

from acs_tsp import TSPInstance, ACOConfig
from acs_tsp.experiments import STRATEGIES, solve_instance

LABELS = {"seq": "Sequential ACS", "par": "Parallel ACS"}

def visualize(inst, strategy, cfg, outdir, step=5):
    os.makedirs(outdir, exist_ok=True)
    res = solve_instance(inst, strategy, cfg)

    coords = inst.coords
    frames = []
    iters = list(range(0, len(res.history_best_tours), step))
    for it in iters:
        tour = [node.id for node in res.history_best_tours[it]]
        L = res.history_best_lengths[it]
        xs = [coords[i][0] for i in tour] + [coords[tour[0]][0]]
        ys = [coords[i][1] for i in tour] + [coords[tour[0]][1]]
        cx = [c[0] for c in coords]
        cy = [c[1] for c in coords]

        plt.figure(figsize=(5,5))
        plt.plot(cx, cy, "o")
        plt.plot(xs, ys, "-")
        plt.title(f"{LABELS[strategy]} best-so-far\niter={it+1}  length={L:.2f}")
        plt.axis("equal")
        plt.tight_layout()
        frame_path = os.path.join(outdir, f"{strategy}_frame_{it:03d}.png")
        plt.savefig(frame_path, dpi=120, bbox_inches="tight")
        plt.close()
        frames.append(frame_path)

    gif_path = os.path.join(outdir, f"{strategy}_convergence.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))

    print("Saved:", gif_path)
    return gif_path

def main():
    p = argparse.ArgumentParser()
    p.add_argument("instance", nargs="?", default=None, help="node file (random instance if omitted)")
    p.add_argument("--strategy", choices=sorted(STRATEGIES), default="par")
    p.add_argument("--n", type=int, default=50, help="number of cities")
    p.add_argument("--iters", type=int, default=120)
    p.add_argument("--ants", type=int, default=25)
    p.add_argument("--alpha", type=float, default=1.0)
    p.add_argument("--beta", type=float, default=2.0)
    p.add_argument("--rho", type=float, default=0.1)
    p.add_argument("--square", type=float, default=100.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--outdir", default="viz")
    p.add_argument("--step", type=int, default=5, help="frame every k iterations")
    args = p.parse_args()

    if args.instance:
        inst = TSPInstance.from_file(args.instance)
    else:
        inst = TSPInstance.random_euclidean(n=args.n, seed=args.seed, square_size=args.square, name=f"viz{args.n}")
    cfg = ACOConfig(alpha=args.alpha, beta=args.beta, rho=args.rho,
                    n_ants=args.ants, n_iterations=args.iters, seed=args.seed)
    try:
        cfg.validate()
    except ValueError as e:
        p.error(str(e))
    visualize(inst, args.strategy, cfg, args.outdir, step=args.step)

if __name__ == "__main__":
    main()
