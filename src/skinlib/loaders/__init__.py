"""Asset loaders."""

from .m3d_loader import M3DLoader, M3DParseError, load_skinned_model
from .material import M3DMaterial
from .model import M3DModel, SkinnedM3DModel, Subset, VERTEX_DTYPE, SKINNED_VERTEX_DTYPE

__all__ = [
    "M3DLoader",
    "M3DParseError",
    "load_skinned_model",
    "M3DMaterial",
    "M3DModel",
    "SkinnedM3DModel",
    "Subset",
    "VERTEX_DTYPE",
    "SKINNED_VERTEX_DTYPE",
]
