import pytest

from acs_tsp import ACOConfig, load_instance

UNIT_SQUARE = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


@pytest.fixture
def square_cfg():
    return ACOConfig(alpha=1.0, beta=2.0, rho=0.1, n_ants=10, n_iterations=50, seed=1)


@pytest.fixture
def square_env(square_cfg):
    env = load_instance(UNIT_SQUARE, square_cfg)
    env.initialize()
    return env
