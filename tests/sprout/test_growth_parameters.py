import numpy as np

from sprout.growth_parameters import Parameters


def test_parameters_defaults():
    """Parameters start from the documented growth constants."""
    params = Parameters()

    assert params.growth_rate == 1.0001
    assert params.branch_probability == 0.0005
    assert params.branch_length == 0.1
    assert params.branch_fraction == 0.5
    assert params.branch_angle_spread == 1.0
    assert params.seed_length == 0.4
    assert params.seed_angle == np.pi


def test_parameters_mutability():
    params = Parameters()

    params.branch_probability = 0.0
    params.growth_rate = 1.5

    assert params.branch_probability == 0.0
    assert params.growth_rate == 1.5
