"""Homogeneous 4x4 transforms used to orient plant segments.

A node's transformation is a rigid transform expressed relative to the end
point of its parent. Rotations are built with
:class:`scipy.spatial.transform.Rotation` and embedded in a homogeneous
matrix; direction vectors are transformed by the linear part only.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray
from scipy.spatial.transform import Rotation

# Segments extend along +Y in their local frame.
GROWTH_AXIS: NDArray[np.float64] = np.array([0.0, 1.0, 0.0])


def identity() -> NDArray[np.float64]:
    """Return a fresh 4x4 identity transform."""
    return np.eye(4, dtype=float)


def from_rotation(
    rotation: Rotation,
    translation: Optional[Union[NDArray[Any], Sequence[float]]] = None,
) -> NDArray[np.float64]:
    """Embed a scipy rotation (and optional translation) in a 4x4 matrix.

    Args:
        rotation: The rotation to embed.
        translation: Optional (x, y, z) offset stored in the last column.

    Returns:
        A 4x4 homogeneous transform.
    """
    m = identity()
    m[:3, :3] = rotation.as_matrix()
    if translation is not None:
        t = np.asarray(translation, dtype=float)
        if t.shape != (3,):
            raise ValueError(f"translation must have shape (3,), got {t.shape}")
        m[:3, 3] = t
    return m


def rotation_z(angle: float) -> NDArray[np.float64]:
    """Return a transform rotating by `angle` radians about the Z axis."""
    return from_rotation(Rotation.from_euler("z", float(angle)))


def random_rotation_z(rng: np.random.Generator, spread: float = 1.0) -> NDArray[np.float64]:
    """Return a Z rotation by a uniform angle in ``[-spread/2, spread/2)``."""
    angle = (float(rng.random()) - 0.5) * spread
    return rotation_z(angle)


def transform_vector(
    matrix: NDArray[Any], vector: Union[NDArray[Any], Sequence[float]]
) -> NDArray[np.float64]:
    """Apply the linear part of `matrix` to a direction vector.

    Translation is ignored: directions have a zero homogeneous coordinate.
    """
    v = np.asarray(vector, dtype=float)
    return np.asarray(matrix, dtype=float)[:3, :3] @ v


def is_rigid(matrix: NDArray[Any], atol: float = 1e-9) -> bool:
    """Return True if the linear part of `matrix` is a proper rotation."""
    m = np.asarray(matrix, dtype=float)
    if m.shape != (4, 4):
        return False
    r = m[:3, :3]
    return bool(
        np.allclose(r @ r.T, np.eye(3), atol=atol)
        and np.isclose(np.linalg.det(r), 1.0, atol=atol)
        and np.allclose(m[3], [0.0, 0.0, 0.0, 1.0], atol=atol)
    )
