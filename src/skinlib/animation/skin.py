"""
Skin

Packs skinning data for the renderer.
"""

from typing import Sequence

import numpy as np

from ..config import settings


def pack_bone_transforms(
    transforms: Sequence,
    max_bones: int = None,
    transpose: bool = True,
) -> np.ndarray:
    """
    Pack final bone transforms into a fixed-size array for shader upload.

    Mirrors the skinning constant buffer: ``max_bones`` matrices, unused
    slots set to identity.

    Args:
        transforms: Final bone transforms (4x4 each)
        max_bones: Number of matrix slots in the buffer
        transpose: Transpose each matrix (row-vector host math, column-major shader)

    Returns:
        Numpy array of shape (max_bones, 4, 4) with dtype float32

    Raises:
        ValueError: If there are more transforms than slots
    """
    if max_bones is None:
        max_bones = settings.MAX_BONES
    if len(transforms) > max_bones:
        raise ValueError(f"{len(transforms)} bone transforms exceed the limit of {max_bones}")

    packed = np.tile(np.identity(4, dtype='f4'), (max_bones, 1, 1))
    if len(transforms):
        matrices = np.array([np.asarray(m, dtype='f4') for m in transforms], dtype='f4')
        if transpose:
            matrices = matrices.transpose(0, 2, 1)
        packed[:len(transforms)] = matrices
    return packed


def implied_fourth_weight(weights) -> float:
    """
    Weight of the fourth bone influence, as the skinning shader derives it.

    Skinned vertices store only three weights; the fourth is ``1 - sum``.
    """
    return 1.0 - float(np.sum(np.asarray(weights, dtype='f4')[:3]))
