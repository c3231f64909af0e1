"""
Transforms

Affine matrix and quaternion helpers for bone poses.

Matrices follow pyrr's row-vector convention: a point is transformed as
``p @ M`` and transforms chain left to right, so ``A @ B`` applies A first.
Quaternions are stored as (x, y, z, w).
"""

from functools import reduce

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3

from ..config import settings


def affine_transformation(scale, rotation, translation) -> Matrix44:
    """
    Build a scale -> rotate -> translate matrix.

    The rotation pivot is the coordinate origin, not the translated position.

    Args:
        scale: Per-axis scale (3 floats)
        rotation: Unit quaternion (x, y, z, w)
        translation: Translation (3 floats)

    Returns:
        Matrix44 equal to ``S @ R @ T``
    """
    s = Matrix44.from_scale(Vector3(scale, dtype='f4'))
    # from_quaternion is laid out for column vectors
    r = Matrix44.from_quaternion(Quaternion(rotation, dtype='f4')).T
    t = Matrix44.from_translation(Vector3(translation, dtype='f4'))
    return compose(s, r, t)


def compose(*matrices) -> Matrix44:
    """Multiply matrices left to right (first argument is applied first)."""
    return Matrix44(reduce(np.dot, matrices))


def lerp(v0, v1, t: float) -> Vector3:
    """Component-wise linear interpolation."""
    v0 = np.asarray(v0, dtype='f4')
    v1 = np.asarray(v1, dtype='f4')
    return Vector3(v0 + (v1 - v0) * t)


def slerp(q0, q1, t: float) -> Quaternion:
    """
    Spherical linear interpolation along the shortest arc.

    Nearly parallel quaternions fall back to a normalized lerp.
    """
    q0 = np.asarray(q0, dtype='f8')
    q1 = np.asarray(q1, dtype='f8')

    cos_omega = float(np.dot(q0, q1))
    if cos_omega < 0.0:
        q1 = -q1
        cos_omega = -cos_omega

    if cos_omega > settings.SLERP_LERP_THRESHOLD:
        result = q0 + (q1 - q0) * t
        result /= np.linalg.norm(result)
    else:
        omega = np.arccos(min(cos_omega, 1.0))
        sin_omega = np.sin(omega)
        result = (np.sin((1.0 - t) * omega) * q0 + np.sin(t * omega) * q1) / sin_omega

    return Quaternion(result.astype('f4'))


def transform_point(matrix, point) -> np.ndarray:
    """Transform a 3D point by a row-vector affine matrix."""
    p = np.append(np.asarray(point, dtype='f8'), 1.0)
    return np.dot(p, np.asarray(matrix, dtype='f8'))[:3]
