"""
Animation Controller

Per-instance playback state for a skinned model.
"""

import logging
from typing import List

import numpy as np
from pyrr import Matrix44

from ..config import settings
from .skeleton import SkinnedSkeleton
from .skin import pack_bone_transforms

logger = logging.getLogger(__name__)


class SkeletalModelInstance:
    """
    Plays one animation clip of a shared skeleton.

    Manages:
    - The clip being played (fixed for the instance's lifetime)
    - The playback time, looping back to 0 past the clip end
    - The final bone transforms handed to the renderer

    The skeleton is shared and read-only; ``final_transforms`` belongs to
    this instance alone and is rewritten in place on every advance.
    """

    def __init__(self, skeleton: SkinnedSkeleton, clip_name: str, time: float = 0.0):
        """
        Initialize model instance.

        Args:
            skeleton: Shared skinning data
            clip_name: Clip to play

        Raises:
            ClipNotFoundError: If the skeleton has no such clip
        """
        # Fail early on a bad clip name
        skeleton.get_clip(clip_name)

        self.skeleton = skeleton
        self.clip_name = clip_name
        self.time = float(time)
        self.final_transforms: List[Matrix44] = [Matrix44.identity() for _ in range(skeleton.bone_count)]

    def advance(self, delta_time: float):
        """
        Advance playback and recompute the final transforms.

        Call at most once per simulation tick.

        Args:
            delta_time: Time elapsed since last tick (seconds)
        """
        self.time += delta_time

        # Loop animation
        if self.time > self.skeleton.get_clip_end_time(self.clip_name):
            logger.debug("Clip '%s' wrapped at t=%.3f", self.clip_name, self.time)
            self.time = 0.0

        self.skeleton.get_final_transforms(self.clip_name, self.time, out=self.final_transforms)

    def bone_matrices(self, max_bones: int = None, transpose: bool = True) -> np.ndarray:
        """
        Get final transforms as a float32 array for shader upload.

        Args:
            max_bones: Size of the bone array in the constant buffer
            transpose: Transpose each matrix for column-major shaders

        Returns:
            Numpy array of shape (max_bones, 4, 4)
        """
        if max_bones is None:
            max_bones = settings.MAX_BONES
        return pack_bone_transforms(self.final_transforms, max_bones=max_bones, transpose=transpose)

    def __repr__(self):
        return (
            f"SkeletalModelInstance(clip='{self.clip_name}', time={self.time:.2f}s, "
            f"bones={len(self.final_transforms)})"
        )
