"""
Animation

Keyframe animation data and per-bone interpolation.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np
from pyrr import Matrix44, Quaternion, Vector3

from .transforms import affine_transformation, lerp, slerp


def _identity_rotation() -> Quaternion:
    return Quaternion([0.0, 0.0, 0.0, 1.0], dtype='f4')


@dataclass(eq=False)
class Keyframe:
    """
    Single pose sample for one bone.

    Stores time, translation, scale and rotation (x, y, z, w quaternion).
    The default keyframe is the identity pose at time 0.
    """

    time: float = 0.0
    translation: Vector3 = field(default_factory=lambda: Vector3([0.0, 0.0, 0.0], dtype='f4'))
    scale: Vector3 = field(default_factory=lambda: Vector3([1.0, 1.0, 1.0], dtype='f4'))
    rotation: Quaternion = field(default_factory=_identity_rotation)

    def __post_init__(self):
        self.time = float(self.time)
        self.translation = Vector3(self.translation, dtype='f4')
        self.scale = Vector3(self.scale, dtype='f4')
        self.rotation = Quaternion(self.rotation, dtype='f4')

    def to_matrix(self) -> Matrix44:
        """Local transform for this pose (scale, rotate about origin, translate)."""
        return affine_transformation(self.scale, self.rotation, self.translation)

    def __repr__(self):
        return (
            f"Keyframe(t={self.time:.3f}, T={list(np.round(self.translation, 3))}, "
            f"S={list(np.round(self.scale, 3))}, R={list(np.round(self.rotation, 3))})"
        )


def _frozen_keyframe(keyframe: Keyframe) -> Keyframe:
    copy = Keyframe(
        keyframe.time,
        np.array(keyframe.translation, dtype='f4'),
        np.array(keyframe.scale, dtype='f4'),
        np.array(keyframe.rotation, dtype='f4'),
    )
    for value in (copy.translation, copy.scale, copy.rotation):
        value.flags.writeable = False
    return copy


class BoneAnimation:
    """
    Ordered list of keyframes for one bone.

    Keyframes must be sorted by time. Two adjacent keyframes may share a
    time; the pose then jumps from the first to the second at that instant.
    """

    def __init__(self, keyframes: List[Keyframe] = None):
        """
        Initialize bone animation.

        Args:
            keyframes: Keyframes sorted by non-decreasing time
        """
        self.keyframes: List[Keyframe] = list(keyframes) if keyframes else []

    def add_keyframe(self, keyframe: Keyframe):
        """Append a keyframe to this animation."""
        if isinstance(self.keyframes, tuple):
            raise TypeError("Cannot add keyframes to a frozen bone animation")
        self.keyframes.append(keyframe)

    def frozen(self) -> 'BoneAnimation':
        """
        Read-only copy of this animation.

        Keyframes are copied into a tuple and their vectors are marked
        non-writeable, so the copy cannot be changed through the original.
        """
        copy = BoneAnimation()
        copy.keyframes = tuple(_frozen_keyframe(k) for k in self.keyframes)
        return copy

    def validate(self):
        """
        Check that the animation can be sampled.

        Raises:
            ValueError: If there are no keyframes or times decrease
        """
        if not self.keyframes:
            raise ValueError("Bone animation has no keyframes")
        for i in range(len(self.keyframes) - 1):
            if self.keyframes[i + 1].time < self.keyframes[i].time:
                raise ValueError(
                    f"Keyframe times must not decrease "
                    f"(keyframe {i + 1} at {self.keyframes[i + 1].time} "
                    f"follows {self.keyframes[i].time})"
                )

    @property
    def start_time(self) -> float:
        return self.keyframes[0].time

    @property
    def end_time(self) -> float:
        return self.keyframes[-1].time

    def sample(self, time: float) -> Keyframe:
        """
        Sample the pose at a given time.

        Times outside the keyframe range clamp to the first/last keyframe.

        Args:
            time: Time in seconds

        Returns:
            Keyframe holding the interpolated translation, scale and rotation
        """
        first = self.keyframes[0]
        last = self.keyframes[-1]

        if time <= first.time:
            return first
        if time >= last.time:
            return last

        # Find surrounding keyframes
        for i in range(len(self.keyframes) - 1):
            k0 = self.keyframes[i]
            k1 = self.keyframes[i + 1]

            if k0.time <= time <= k1.time:
                # Zero-width pair: jump to the later pose
                t = (time - k0.time) / (k1.time - k0.time) if k1.time > k0.time else 1.0
                return Keyframe(
                    time=time,
                    translation=lerp(k0.translation, k1.translation, t),
                    scale=lerp(k0.scale, k1.scale, t),
                    rotation=slerp(k0.rotation, k1.rotation, t),
                )

        return last

    def interpolate(self, time: float) -> Matrix44:
        """
        Local (to-parent) transform of the bone at a given time.

        Args:
            time: Time in seconds

        Returns:
            Matrix44 for the interpolated pose
        """
        return self.sample(time).to_matrix()

    def __len__(self):
        return len(self.keyframes)

    def __repr__(self):
        if not self.keyframes:
            return "BoneAnimation(keyframes=0)"
        return (
            f"BoneAnimation(keyframes={len(self.keyframes)}, "
            f"start={self.start_time:.2f}s, end={self.end_time:.2f}s)"
        )


class AnimationClip:
    """
    Named animation with one BoneAnimation per skeleton bone.

    Bone animations are indexed the same way as the owning skeleton's bones.
    Examples of clips: "Walk", "Run", "Take1".
    """

    def __init__(self, name: str, bone_animations: List[BoneAnimation] = None):
        """
        Initialize animation clip.

        Args:
            name: Clip name
            bone_animations: One BoneAnimation per bone, in bone index order
        """
        self.name = name
        self.bone_animations: List[BoneAnimation] = list(bone_animations) if bone_animations else []

    @property
    def bone_count(self) -> int:
        return len(self.bone_animations)

    @property
    def start_time(self) -> float:
        """Smallest start time over all bones in the clip."""
        return min((b.start_time for b in self.bone_animations), default=float('inf'))

    @property
    def end_time(self) -> float:
        """Largest end time over all bones in the clip."""
        return max([0.0] + [b.end_time for b in self.bone_animations])

    def frozen(self) -> 'AnimationClip':
        """Read-only copy of this clip (see BoneAnimation.frozen)."""
        copy = AnimationClip(self.name)
        copy.bone_animations = tuple(b.frozen() for b in self.bone_animations)
        return copy

    def interpolate(self, time: float) -> List[Matrix44]:
        """
        Sample every bone's local transform at a given time.

        Args:
            time: Time in seconds

        Returns:
            List of to-parent matrices, one per bone
        """
        return [bone.interpolate(time) for bone in self.bone_animations]

    def __repr__(self):
        return (
            f"AnimationClip(name='{self.name}', bones={self.bone_count}, "
            f"start={self.start_time:.2f}s, end={self.end_time:.2f}s)"
        )
