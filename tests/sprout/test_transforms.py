import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from sprout.transforms import (
    GROWTH_AXIS,
    from_rotation,
    identity,
    is_rigid,
    random_rotation_z,
    rotation_z,
    transform_vector,
)


def test_identity_is_fresh():
    a = identity()
    a[0, 0] = 5.0
    assert identity()[0, 0] == 1.0


def test_rotation_z_quarter_turn_maps_growth_axis():
    """A quarter turn about Z maps +Y onto -X."""
    m = rotation_z(np.pi / 2)
    assert_allclose(transform_vector(m, GROWTH_AXIS), [-1.0, 0.0, 0.0], atol=1e-12)
    assert is_rigid(m)


def test_translation_does_not_move_directions():
    """Direction vectors ignore the translation part."""
    m = from_rotation(Rotation.identity(), translation=[5.0, 6.0, 7.0])

    assert_allclose(m[:3, 3], [5.0, 6.0, 7.0])
    assert_allclose(transform_vector(m, [0.0, 2.0, 0.0]), [0.0, 2.0, 0.0])
    assert is_rigid(m)


def test_bad_translation_shape():
    with pytest.raises(ValueError):
        from_rotation(Rotation.identity(), translation=[1.0, 2.0])


def test_random_rotation_z_within_spread():
    """Random Z rotations stay within half the spread and leave Z fixed."""
    gen = np.random.Generator(np.random.PCG64(7))
    for _ in range(50):
        m = random_rotation_z(gen, spread=1.0)
        angle = np.arctan2(m[1, 0], m[0, 0])
        assert -0.5 <= angle < 0.5
        assert_allclose(m[2], [0.0, 0.0, 1.0, 0.0])


def test_is_rigid_rejects_scaling():
    """Scaling and non-4x4 matrices are not rigid transforms."""
    m = identity()
    m[1, 1] = 2.0
    assert not is_rigid(m)
    assert not is_rigid(np.eye(3))
