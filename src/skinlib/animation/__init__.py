"""
Animation System

Provides skeletal animation support for skinned .m3d models.
"""

from .animation import Keyframe, BoneAnimation, AnimationClip
from .skeleton import SkinnedSkeleton, SkeletonError, ClipNotFoundError
from .skin import pack_bone_transforms, implied_fourth_weight
from .animation_controller import SkeletalModelInstance

__all__ = [
    'Keyframe',
    'BoneAnimation',
    'AnimationClip',
    'SkinnedSkeleton',
    'SkeletonError',
    'ClipNotFoundError',
    'pack_bone_transforms',
    'implied_fourth_weight',
    'SkeletalModelInstance',
]
