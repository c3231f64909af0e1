#!/usr/bin/env python3
"""
Skull Keyframe Example

Single-bone keyframe animation: a skull flies through five poses over
eight seconds and loops. Prints the world matrix at a few time points.
"""

import math
import sys
from pathlib import Path

import numpy as np
from pyrr import Quaternion

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from skinlib.animation import BoneAnimation, Keyframe  # noqa: E402
from skinlib.core import GameTimer  # noqa: E402


def define_skull_animation() -> BoneAnimation:
    """Five keyframes at t = 0, 2, 4, 6, 8 seconds; the last repeats the first."""
    q0 = Quaternion.from_axis_rotation([0.0, 1.0, 0.0], math.radians(30.0))
    q1 = Quaternion.from_axis_rotation(np.array([1.0, 1.0, 2.0]) / math.sqrt(6.0), math.radians(45.0))
    q2 = Quaternion.from_axis_rotation([0.0, 1.0, 0.0], math.radians(-30.0))
    q3 = Quaternion.from_axis_rotation([1.0, 0.0, 0.0], math.radians(70.0))

    return BoneAnimation([
        Keyframe(0.0, [0.0, 0.0, 0.0], [0.25, 0.25, 0.25], q0),
        Keyframe(2.0, [0.0, 2.0, 10.0], [0.5, 0.5, 0.5], q1),
        Keyframe(4.0, [7.0, 0.0, 0.0], [0.25, 0.25, 0.25], q2),
        Keyframe(6.0, [0.0, 1.0, -10.0], [0.5, 0.5, 0.5], q3),
        Keyframe(8.0, [0.0, 0.0, 0.0], [0.25, 0.25, 0.25], q0),
    ])


class SkullAnimationDemo:
    """Drives the skull animation from fixed or measured frame deltas."""

    def __init__(self):
        self.animation = define_skull_animation()
        self.animation.validate()
        self.time_point = 0.0
        self.world = self.animation.interpolate(0.0)

    def update(self, delta_time: float):
        self.time_point += delta_time
        if self.time_point >= self.animation.end_time:
            self.time_point = 0.0
        self.world = self.animation.interpolate(self.time_point)


def main():
    demo = SkullAnimationDemo()
    timer = GameTimer(clock=iter(np.arange(0.0, 20.0, 0.5)).__next__)
    timer.reset()

    np.set_printoptions(precision=3, suppress=True)
    for _ in range(20):
        demo.update(timer.tick())
        position = np.asarray(demo.world)[3, :3]
        print(f"t={demo.time_point:4.1f}s  position={position}")


if __name__ == "__main__":
    main()
