"""
Model

Geometry, subsets and materials loaded from an .m3d asset.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..animation import SkinnedSkeleton
from .material import M3DMaterial

# Interleaved vertex layouts, matching the demo's input layouts
VERTEX_DTYPE = np.dtype([
    ('position', 'f4', 3),
    ('normal', 'f4', 3),
    ('texcoord', 'f4', 2),
    ('tangent', 'f4', 4),
])

SKINNED_VERTEX_DTYPE = np.dtype([
    ('position', 'f4', 3),
    ('normal', 'f4', 3),
    ('texcoord', 'f4', 2),
    ('tangent', 'f4', 3),
    ('bone_weights', 'f4', 3),  # fourth weight is implied by the shader
    ('bone_indices', 'u1', 4),
])


@dataclass
class Subset:
    """Range of vertices and triangles drawn with one material."""

    id: int = -1
    vertex_start: int = 0
    vertex_count: int = 0
    face_start: int = 0
    face_count: int = 0

    @property
    def index_start(self) -> int:
        return self.face_start * 3

    @property
    def index_count(self) -> int:
        return self.face_count * 3


@dataclass
class M3DModel:
    """Result of loading a static .m3d mesh."""

    vertices: np.ndarray
    indices: np.ndarray
    subsets: List[Subset] = field(default_factory=list)
    materials: List[M3DMaterial] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def texture_names(self) -> List[str]:
        """
        Unique texture file names referenced by the materials.

        Returns:
            Names in first-seen order (diffuse map before normal map)
        """
        names = []
        for material in self.materials:
            for name in material.texture_names():
                if name not in names:
                    names.append(name)
        return names


@dataclass
class SkinnedM3DModel(M3DModel):
    """Result of loading a skinned .m3d mesh, with its skeleton."""

    skeleton: Optional[SkinnedSkeleton] = None
