"""Tests for bone transform packing"""

import numpy as np
import pytest
from pyrr import Matrix44

from skinlib.animation import implied_fourth_weight, pack_bone_transforms

from conftest import allclose


def test_pack_pads_with_identity():
    """Test unused slots are identity matrices"""
    transforms = [Matrix44.from_translation([1.0, 2.0, 3.0])]

    packed = pack_bone_transforms(transforms, max_bones=3, transpose=False)

    assert packed.shape == (3, 4, 4)
    assert packed.dtype == np.float32
    assert allclose(packed[0][3], [1.0, 2.0, 3.0, 1.0])
    assert allclose(packed[1], np.identity(4))
    assert allclose(packed[2], np.identity(4))


def test_pack_transposes_for_shader():
    """Test transposed packing moves the translation into the last column"""
    transforms = [Matrix44.from_translation([1.0, 2.0, 3.0])]

    packed = pack_bone_transforms(transforms, max_bones=1)

    assert allclose(packed[0][:, 3], [1.0, 2.0, 3.0, 1.0])


def test_pack_defaults_to_constant_buffer_size():
    """Test the default slot count matches the skinned constant buffer"""
    packed = pack_bone_transforms([])

    assert packed.shape == (96, 4, 4)


def test_pack_rejects_too_many_bones():
    """Test more bones than slots is an error"""
    transforms = [Matrix44.identity() for _ in range(5)]

    with pytest.raises(ValueError):
        pack_bone_transforms(transforms, max_bones=4)


def test_implied_fourth_weight():
    """Test the fourth weight completes the sum to one"""
    assert implied_fourth_weight([0.5, 0.25, 0.125]) == pytest.approx(0.125)
    assert implied_fourth_weight([1.0, 0.0, 0.0]) == pytest.approx(0.0)
