"""Frame timing and render item bookkeeping."""

from .game_timer import GameTimer
from .render_item import RenderItem, build_skinned_render_items

__all__ = ["GameTimer", "RenderItem", "build_skinned_render_items"]
