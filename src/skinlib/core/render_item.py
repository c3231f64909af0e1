"""
Render Items

Draw parameters for skinned model subsets, as consumed by a renderer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pyrr import Matrix44

from ..animation import SkeletalModelInstance
from ..config.settings import NUM_FRAME_RESOURCES
from ..loaders.model import M3DModel


@dataclass
class RenderItem:
    """
    One draw call.

    ``num_frames_dirty`` counts how many in-flight frame resources still
    need this item's constants re-uploaded.
    """

    name: str = "RenderItem"
    world: Matrix44 = field(default_factory=Matrix44.identity)
    tex_transform: Matrix44 = field(default_factory=Matrix44.identity)
    material_index: int = 0

    index_count: int = 0
    start_index_location: int = 0
    base_vertex_location: int = 0

    # Only set for skinned items
    skinned_instance: Optional[SkeletalModelInstance] = None
    skinned_cb_index: int = -1

    num_frame_resources: int = NUM_FRAME_RESOURCES
    num_frames_dirty: int = field(default=None)

    def __post_init__(self):
        if self.num_frame_resources < 1:
            raise ValueError(f"num_frame_resources must be at least 1 (got {self.num_frame_resources})")
        if self.num_frames_dirty is None:
            self.num_frames_dirty = self.num_frame_resources

    @property
    def is_skinned(self) -> bool:
        return self.skinned_instance is not None

    def mark_dirty(self):
        """Schedule a constant-buffer update in every frame resource."""
        self.num_frames_dirty = self.num_frame_resources

    def consume_dirty(self) -> bool:
        """
        Check and count down the dirty flag for the current frame resource.

        Returns:
            True if this frame resource needs the item's constants uploaded
        """
        if self.num_frames_dirty > 0:
            self.num_frames_dirty -= 1
            return True
        return False


def build_skinned_render_items(
    model: M3DModel,
    instance: SkeletalModelInstance,
    num_frame_resources: int = NUM_FRAME_RESOURCES,
    world: Matrix44 = None,
    skinned_cb_index: int = 0,
) -> List[RenderItem]:
    """
    Create one render item per subset of a skinned model.

    All items share the same instance (and therefore the same bone
    transforms and skinned constant buffer slot).

    Args:
        model: Loaded model providing subsets
        instance: Animation instance driving the items
        num_frame_resources: Number of in-flight frame resources
        world: World matrix shared by the items
        skinned_cb_index: Slot of the instance in the skinned constant buffer

    Returns:
        List of RenderItem objects, in subset order
    """
    items = []
    for i, subset in enumerate(model.subsets):
        material_name = model.materials[i].name if i < len(model.materials) else f"subset{i}"
        items.append(RenderItem(
            name=material_name,
            world=Matrix44(world) if world is not None else Matrix44.identity(),
            material_index=i,
            index_count=subset.index_count,
            start_index_location=subset.index_start,
            base_vertex_location=0,
            skinned_instance=instance,
            skinned_cb_index=skinned_cb_index,
            num_frame_resources=num_frame_resources,
        ))
    return items
