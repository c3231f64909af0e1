"""Tests for GameTimer and render items"""

import numpy as np
import pytest
from pyrr import Matrix44

from skinlib.animation import SkeletalModelInstance
from skinlib.core import GameTimer, RenderItem, build_skinned_render_items
from skinlib.loaders import M3DLoader

from conftest import allclose


class FakeClock:
    """Manually advanced clock for deterministic timing."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def test_timer_delta_and_total():
    """Test tick reports the elapsed time between frames"""
    clock = FakeClock()
    timer = GameTimer(clock)
    timer.reset()

    clock.now += 0.016
    assert timer.tick() == pytest.approx(0.016)
    clock.now += 0.034
    assert timer.tick() == pytest.approx(0.034)
    assert timer.delta_time == pytest.approx(0.034)
    assert timer.total_time == pytest.approx(0.05)


def test_timer_excludes_stopped_time():
    """Test time spent stopped is not counted"""
    clock = FakeClock()
    timer = GameTimer(clock)
    timer.reset()

    clock.now += 1.0
    timer.tick()
    timer.stop()
    clock.now += 5.0
    assert timer.tick() == 0.0
    assert timer.total_time == pytest.approx(1.0)

    timer.start()
    clock.now += 0.5
    assert timer.tick() == pytest.approx(0.5)
    assert timer.total_time == pytest.approx(1.5)


def test_timer_clamps_negative_delta():
    """Test a clock stepping backwards yields a zero delta"""
    clock = FakeClock()
    timer = GameTimer(clock)
    timer.reset()

    clock.now -= 1.0
    assert timer.tick() == 0.0


def test_render_item_dirty_countdown():
    """Test dirty flag counts down once per frame resource"""
    item = RenderItem(num_frame_resources=2)

    assert item.num_frames_dirty == 2
    assert item.consume_dirty()
    assert item.consume_dirty()
    assert not item.consume_dirty()

    item.mark_dirty()
    assert item.num_frames_dirty == 2


def test_render_item_requires_frame_resources():
    """Test the frame resource count must be positive"""
    with pytest.raises(ValueError):
        RenderItem(num_frame_resources=0)


def test_render_item_defaults():
    """Test default render item is an unskinned identity item"""
    item = RenderItem()

    assert not item.is_skinned
    assert allclose(item.world, np.identity(4))
    assert item.num_frames_dirty == item.num_frame_resources


def test_build_skinned_render_items(skinned_m3d_path):
    """Test one item per subset, all sharing the instance"""
    model = M3DLoader().load_skinned_m3d(skinned_m3d_path)
    instance = SkeletalModelInstance(model.skeleton, "Take1")
    world = Matrix44.from_scale([0.05, 0.05, 0.05])

    items = build_skinned_render_items(model, instance, num_frame_resources=3, world=world)

    assert [item.name for item in items] == ["body", "head"]
    assert all(item.skinned_instance is instance for item in items)
    assert all(item.is_skinned for item in items)
    assert items[1].start_index_location == 3
    assert items[1].index_count == 3
    assert items[0].num_frames_dirty == 3
    assert allclose(items[0].world, world)
