import math
import threading

import pytest

from acs_tsp import ACOConfig, ParallelACS, SequentialACS, TSPInstance, load_instance
from acs_tsp.errors import NotInitializedError, ZeroAttractivenessError

SOLVERS = [SequentialACS, ParallelACS]


def _is_perimeter(env, tour):
    ids = [n.id for n in tour]
    return all(env.distance(ids[k], ids[(k + 1) % len(ids)]) == pytest.approx(1.0)
               for k in range(len(ids)))


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_unit_square_converges_to_perimeter(square_env, solver_cls):
    length, tour = solver_cls(square_env).solve()
    assert length == pytest.approx(4.0)
    assert sorted(n.id for n in tour) == [0, 1, 2, 3]
    assert _is_perimeter(square_env, tour)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_best_length_never_increases(solver_cls):
    inst = TSPInstance.random_euclidean(15, seed=7)
    env = inst.environment(ACOConfig(n_ants=8, n_iterations=30, seed=3))
    env.initialize()
    res = solver_cls(env).run()
    hist = res.history_best_lengths
    assert len(hist) == 30
    assert all(b <= a for a, b in zip(hist, hist[1:]))
    assert res.best_length == hist[-1]
    assert sorted(n.id for n in res.best_tour) == list(range(15))
    assert res.best_length == pytest.approx(env.tour_length(res.best_tour))
    assert res.elapsed_sec >= 0.0


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_pheromones_stay_symmetric_every_iteration(square_env, solver_cls, monkeypatch):
    env = square_env
    calls = []
    evaporate = env.evaporate

    def checked():
        assert env.is_symmetric()
        evaporate()
        assert env.is_symmetric()
        assert all(v >= 0.0 for row in env.tau for v in row)
        calls.append(1)

    monkeypatch.setattr(env, "evaporate", checked)
    solver_cls(env).solve()
    assert len(calls) == env.cfg.n_iterations


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_full_evaporation_leaves_no_pheromone(solver_cls):
    # alpha=0 keeps later iterations constructible once the matrix is empty
    env = load_instance([(0, 0), (3, 1), (5, 5), (1, 4), (2, 2)],
                        ACOConfig(alpha=0.0, rho=1.0, n_ants=4, n_iterations=3, seed=11))
    env.initialize()
    solver_cls(env).solve()
    assert all(v == 0.0 for row in env.tau for v in row)


def test_deposits_land_before_evaporation():
    cfg = ACOConfig(rho=0.5, n_ants=1, n_iterations=1, seed=2)
    env = load_instance([(0, 0), (0, 1), (1, 1), (1, 0)], cfg)
    env.initialize()
    length, tour = SequentialACS(env).solve()
    ids = [n.id for n in tour]
    edges = {frozenset((ids[k], ids[(k + 1) % 4])) for k in range(4)}
    delta = env.Q / length
    for i in range(4):
        for j in range(i + 1, 4):
            base = 0.25 + (delta if frozenset((i, j)) in edges else 0.0)
            assert env.pheromone(i, j) == pytest.approx(base * 0.5)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_uninitialized_environment_is_rejected(solver_cls):
    env = load_instance([(0, 0), (1, 1)])
    with pytest.raises(NotInitializedError):
        solver_cls(env).solve()


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_single_node_tour_has_zero_length(solver_cls):
    env = load_instance([(4.0, -1.0)], ACOConfig(n_ants=3, n_iterations=5, seed=0))
    env.initialize()
    length, tour = solver_cls(env).solve()
    assert length == 0.0
    assert [n.id for n in tour] == [0]


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_two_node_tour_is_there_and_back(solver_cls):
    env = load_instance([(1.0, 1.0), (4.0, 5.0)], ACOConfig(n_ants=3, n_iterations=5, seed=0))
    env.initialize()
    length, tour = solver_cls(env).solve()
    assert length == pytest.approx(10.0)
    assert sorted(n.id for n in tour) == [0, 1]


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_same_seed_same_history(solver_cls):
    inst = TSPInstance.random_euclidean(12, seed=5)
    cfg = ACOConfig(n_ants=6, n_iterations=15, seed=9)
    env = inst.environment(cfg)
    env.initialize()
    first = solver_cls(env).run().history_best_lengths
    env.initialize()
    second = solver_cls(env).run().history_best_lengths
    assert first == second


def test_strategies_agree_on_small_instance():
    inst = TSPInstance.random_euclidean(12, seed=21)
    cfg = ACOConfig(alpha=1.0, beta=3.0, rho=0.1, n_ants=20, n_iterations=60, seed=4)
    env = inst.environment(cfg)
    env.initialize()
    seq_len, _ = SequentialACS(env).solve()
    env.initialize()
    par_len, _ = ParallelACS(env).solve()
    assert math.isclose(seq_len, par_len, rel_tol=0.1)


@pytest.mark.parametrize("solver_cls", SOLVERS)
def test_construction_failure_surfaces(square_env, solver_cls):
    env = square_env
    for i in range(env.n):
        for j in range(i + 1, env.n):
            env.set_pheromone(i, j, 0.0)
    with pytest.raises(ZeroAttractivenessError):
        solver_cls(env).solve()


def test_parallel_workers_are_joined(square_env):
    ParallelACS(square_env).solve()
    assert not [t for t in threading.enumerate() if t.name.startswith("ant-")]
