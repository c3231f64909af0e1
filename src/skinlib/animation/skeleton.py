"""
Skeleton

Bone hierarchy, bind-pose offsets and animation clips of a skinned model.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
from pyrr import Matrix44

from ..config import settings
from .animation import AnimationClip
from .transforms import compose


class SkeletonError(ValueError):
    """Raised when skeleton data is inconsistent."""


class ClipNotFoundError(KeyError):
    """Raised when an animation clip name is not known to a skeleton."""

    def __init__(self, clip_name: str, available: Sequence[str] = ()):
        self.clip_name = clip_name
        self.available = tuple(available)
        super().__init__(clip_name)

    def __str__(self):
        known = ", ".join(sorted(self.available)) or "none"
        return f"Animation clip '{self.clip_name}' not found (known clips: {known})"


class SkinnedSkeleton:
    """
    Skinning data shared by every instance of a skinned model.

    Holds:
    - Parent index of each bone (parents always precede their children)
    - Bind-space offset matrix of each bone
    - Animation clips keyed by name

    The skeleton is read-only after construction and can be shared by any
    number of SkeletalModelInstance objects.
    """

    def __init__(
        self,
        bone_hierarchy: Sequence[int],
        bone_offsets: Sequence,
        animations: Dict[str, AnimationClip],
        bone_names: Optional[Sequence[str]] = None,
    ):
        """
        Initialize and validate skeleton data.

        Args:
            bone_hierarchy: Parent index per bone; the root (bone 0) stores ROOT_BONE_PARENT
            bone_offsets: 4x4 bind-pose offset matrix per bone
            animations: Clips keyed by name, one BoneAnimation per bone each.
                Read-only copies are stored; later edits to the given clips
                do not reach the skeleton.
            bone_names: Optional bone names for debugging

        Raises:
            SkeletonError: If the data violates the hierarchy or clip layout
        """
        self._bone_hierarchy = tuple(int(p) for p in bone_hierarchy)
        self._bone_offsets = tuple(self._freeze(Matrix44(np.array(m, dtype='f4').reshape(4, 4)))
                                   for m in bone_offsets)
        self._animations = {name: clip.frozen() for name, clip in animations.items()}
        if bone_names is None:
            bone_names = [f"Bone{i}" for i in range(len(self._bone_hierarchy))]
        self._bone_names = tuple(bone_names)

        self._validate()

    @staticmethod
    def _freeze(matrix: Matrix44) -> Matrix44:
        matrix.flags.writeable = False
        return matrix

    def _validate(self):
        bone_count = len(self._bone_hierarchy)

        if len(self._bone_offsets) != bone_count:
            raise SkeletonError(
                f"Bone offset count ({len(self._bone_offsets)}) does not match "
                f"bone hierarchy size ({bone_count})"
            )
        if len(self._bone_names) != bone_count:
            raise SkeletonError(f"Expected {bone_count} bone names, got {len(self._bone_names)}")

        if bone_count and self._bone_hierarchy[0] != settings.ROOT_BONE_PARENT:
            raise SkeletonError(
                f"Root bone must store parent index {settings.ROOT_BONE_PARENT} "
                f"(got {self._bone_hierarchy[0]})"
            )
        for i in range(1, bone_count):
            parent = self._bone_hierarchy[i]
            if not 0 <= parent < i:
                raise SkeletonError(
                    f"Bone {i} has parent index {parent}; parents must precede their children"
                )

        for name, clip in self._animations.items():
            if clip.bone_count != bone_count:
                raise SkeletonError(
                    f"Clip '{name}' animates {clip.bone_count} bones, skeleton has {bone_count}"
                )
            for bone_index, bone_animation in enumerate(clip.bone_animations):
                try:
                    bone_animation.validate()
                except ValueError as e:
                    raise SkeletonError(f"Clip '{name}', bone {bone_index}: {e}") from e

    @property
    def bone_count(self) -> int:
        return len(self._bone_hierarchy)

    @property
    def bone_hierarchy(self) -> tuple:
        return self._bone_hierarchy

    @property
    def bone_offsets(self) -> tuple:
        return self._bone_offsets

    @property
    def bone_names(self) -> tuple:
        return self._bone_names

    @property
    def clip_names(self) -> List[str]:
        return list(self._animations.keys())

    def has_clip(self, clip_name: str) -> bool:
        return clip_name in self._animations

    def get_clip(self, clip_name: str) -> AnimationClip:
        """
        Find a clip by name.

        Raises:
            ClipNotFoundError: If no clip has this name
        """
        try:
            return self._animations[clip_name]
        except KeyError:
            raise ClipNotFoundError(clip_name, self._animations.keys()) from None

    def get_clip_start_time(self, clip_name: str) -> float:
        return self.get_clip(clip_name).start_time

    def get_clip_end_time(self, clip_name: str) -> float:
        return self.get_clip(clip_name).end_time

    def get_final_transforms(
        self,
        clip_name: str,
        time: float,
        out: Optional[List[Matrix44]] = None,
    ) -> List[Matrix44]:
        """
        Compute the skinning matrix of every bone for a clip at a given time.

        Each final transform maps a bind-space vertex into the bone's animated
        model space: ``final = offset @ to_root`` (offset applied first).

        Args:
            clip_name: Name of the clip to sample
            time: Time in seconds
            out: Optional list of bone_count slots overwritten in place

        Returns:
            List of Matrix44, one per bone (``out`` when supplied)

        Raises:
            ClipNotFoundError: If the clip does not exist (``out`` is left untouched)
        """
        clip = self.get_clip(clip_name)
        bone_count = self.bone_count

        if out is not None and len(out) != bone_count:
            raise ValueError(f"Output holds {len(out)} transforms, skeleton has {bone_count} bones")

        # Interpolate all the bones of this clip at the given time
        to_parent = clip.interpolate(time)

        # Parents precede children, so one forward pass reaches the root space
        to_root: List[Matrix44] = [None] * bone_count
        if bone_count:
            to_root[0] = to_parent[0]
        for i in range(1, bone_count):
            to_root[i] = compose(to_parent[i], to_root[self._bone_hierarchy[i]])

        final = [compose(self._bone_offsets[i], to_root[i]) for i in range(bone_count)]

        if out is None:
            return final
        out[:] = final
        return out

    def __repr__(self):
        return (
            f"SkinnedSkeleton(bones={self.bone_count}, "
            f"clips={sorted(self._animations.keys())})"
        )
