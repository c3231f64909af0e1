"""
SkinLib - Skinned Mesh Animation

Host-side skeletal animation for the skinned mesh demo: .m3d asset loading,
keyframe interpolation and per-bone skinning transforms for the renderer.
"""

# Configuration
from .config.settings import (
    DEFAULT_CLIP_NAME,
    DEFAULT_SKINNED_MODEL,
    MAX_BONES,
    NUM_FRAME_RESOURCES,
    configure_logging,
)

# Animation
from .animation import (
    AnimationClip,
    BoneAnimation,
    ClipNotFoundError,
    Keyframe,
    SkeletalModelInstance,
    SkeletonError,
    SkinnedSkeleton,
    pack_bone_transforms,
)

# Loaders
from .loaders import M3DLoader, M3DModel, M3DParseError, SkinnedM3DModel, load_skinned_model

# Core
from .core import GameTimer, RenderItem, build_skinned_render_items

__version__ = "0.1.0"
__all__ = [
    # Config
    "DEFAULT_CLIP_NAME",
    "DEFAULT_SKINNED_MODEL",
    "MAX_BONES",
    "NUM_FRAME_RESOURCES",
    "configure_logging",
    # Animation
    "Keyframe",
    "BoneAnimation",
    "AnimationClip",
    "SkinnedSkeleton",
    "SkeletonError",
    "ClipNotFoundError",
    "SkeletalModelInstance",
    "pack_bone_transforms",
    # Loaders
    "M3DLoader",
    "M3DModel",
    "SkinnedM3DModel",
    "M3DParseError",
    "load_skinned_model",
    # Core
    "GameTimer",
    "RenderItem",
    "build_skinned_render_items",
]
