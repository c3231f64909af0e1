#!/usr/bin/env python3
"""
Skinned Mesh Demo - Command Line Entry Point

Inspect .m3d assets and sample their animation clips without a renderer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import numpy as np

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from skinlib import (  # noqa: E402
    DEFAULT_CLIP_NAME,
    DEFAULT_SKINNED_MODEL,
    ClipNotFoundError,
    M3DLoader,
    M3DParseError,
    SkeletalModelInstance,
    SkeletonError,
    configure_logging,
)

logger = logging.getLogger(__name__)


def _print_model_summary(model) -> None:
    print(f"Vertices:  {model.vertex_count}")
    print(f"Triangles: {model.triangle_count}")
    print(f"Materials: {len(model.materials)}")
    for material, subset in zip(model.materials, model.subsets):
        print(
            f"  {material.name}: {material.material_type_name}, "
            f"faces {subset.face_start}..{subset.face_start + subset.face_count}, "
            f"diffuse={material.diffuse_map_name}, normal={material.normal_map_name}"
        )
    print(f"Textures:  {', '.join(model.texture_names()) or '-'}")

    skeleton = getattr(model, "skeleton", None)
    if skeleton is None:
        return
    print(f"Bones:     {skeleton.bone_count}")
    for name in skeleton.clip_names:
        print(
            f"  clip '{name}': {skeleton.get_clip_start_time(name):.3f}s"
            f" .. {skeleton.get_clip_end_time(name):.3f}s"
        )


def cmd_info(args: argparse.Namespace) -> int:
    loader = M3DLoader()
    model = loader.load_m3d(args.path) if args.plain else loader.load_skinned_m3d(args.path)
    _print_model_summary(model)
    return 0


def cmd_sample(args: argparse.Namespace) -> int:
    model = M3DLoader().load_skinned_m3d(args.path)
    transforms = model.skeleton.get_final_transforms(args.clip, args.time)

    np.set_printoptions(precision=4, suppress=True)
    for index, matrix in enumerate(transforms):
        matrix = np.asarray(matrix).T if args.transpose else np.asarray(matrix)
        print(f"Bone {index}:")
        print(matrix)
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    model = M3DLoader().load_skinned_m3d(args.path)
    instance = SkeletalModelInstance(model.skeleton, args.clip)
    end_time = model.skeleton.get_clip_end_time(args.clip)

    for step in range(args.steps):
        instance.advance(args.dt)
        root = np.asarray(instance.final_transforms[0]) if instance.final_transforms else None
        root_position = root[3, :3] if root is not None else ()
        print(f"step {step:4d}  t={instance.time:7.3f}/{end_time:.3f}  root={np.round(root_position, 3)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and sample skinned .m3d models.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Print materials, subsets, bones and clips")
    info.add_argument("path", nargs="?", default=DEFAULT_SKINNED_MODEL)
    info.add_argument("--plain", action="store_true", help="Load as a static (non-skinned) mesh")
    info.set_defaults(func=cmd_info)

    sample = subparsers.add_parser("sample", help="Print final bone transforms at a time point")
    sample.add_argument("path", nargs="?", default=DEFAULT_SKINNED_MODEL)
    sample.add_argument("--clip", default=DEFAULT_CLIP_NAME)
    sample.add_argument("--time", type=float, default=0.0)
    sample.add_argument("--transpose", action="store_true", help="Print shader (column-major) layout")
    sample.set_defaults(func=cmd_sample)

    play = subparsers.add_parser("play", help="Advance an instance and print its playback time")
    play.add_argument("path", nargs="?", default=DEFAULT_SKINNED_MODEL)
    play.add_argument("--clip", default=DEFAULT_CLIP_NAME)
    play.add_argument("--dt", type=float, default=1.0 / 60.0)
    play.add_argument("--steps", type=int, default=60)
    play.set_defaults(func=cmd_play)

    return parser


def cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    try:
        return args.func(args)
    except (FileNotFoundError, M3DParseError, SkeletonError) as e:
        logger.error("Failed to load model: %s", e)
    except ClipNotFoundError as e:
        logger.error("%s", e)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """CLI-compatible entry point."""

    return cli(argv)


if __name__ == "__main__":
    raise SystemExit(cli())
