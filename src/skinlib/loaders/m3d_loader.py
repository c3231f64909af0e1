"""M3D loader for whitespace-tokenized text model files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
from pyrr import Matrix44

from ..config.settings import ASSETS_DIR
from ..animation import (
    AnimationClip,
    BoneAnimation,
    Keyframe,
    SkeletalModelInstance,
    SkinnedSkeleton,
)
from .material import M3DMaterial
from .model import M3DModel, SKINNED_VERTEX_DTYPE, SkinnedM3DModel, Subset, VERTEX_DTYPE

logger = logging.getLogger(__name__)

_MAX_INDEX = 0xFFFF


class M3DParseError(ValueError):
    """Raised when an .m3d file is truncated or holds malformed tokens."""

    def __init__(self, message: str, path=None, position: int = None):
        self.path = path
        self.position = position
        where = ""
        if path is not None:
            where = f"{path}"
            if position is not None:
                where += f" (token {position})"
            where += ": "
        super().__init__(f"{where}{message}")


class _TokenStream:
    """Sequential reader over the whitespace-separated tokens of a file."""

    def __init__(self, text: str, path=None):
        self._tokens = text.split()
        self._pos = 0
        self.path = path

    def error(self, message: str) -> M3DParseError:
        return M3DParseError(message, self.path, self._pos)

    def next(self, what: str = "token") -> str:
        if self._pos >= len(self._tokens):
            raise self.error(f"Unexpected end of file while reading {what}")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def skip(self, count: int = 1):
        """Consume and discard header or label tokens."""
        for _ in range(count):
            self.next("label")

    def expect(self, literal: str):
        token = self.next(repr(literal))
        if token != literal:
            self._pos -= 1
            raise self.error(f"Expected '{literal}', found '{token}'")

    def read_int(self, what: str = "integer") -> int:
        token = self.next(what)
        try:
            return int(token)
        except ValueError:
            self._pos -= 1
            raise self.error(f"Expected {what}, found '{token}'") from None

    def read_count(self, what: str) -> int:
        value = self.read_int(what)
        if value < 0:
            self._pos -= 1
            raise self.error(f"{what} must not be negative (got {value})")
        return value

    def read_float(self, what: str = "float") -> float:
        token = self.next(what)
        try:
            return float(token)
        except ValueError:
            self._pos -= 1
            raise self.error(f"Expected {what}, found '{token}'") from None

    def read_floats(self, count: int, what: str = "float") -> List[float]:
        return [self.read_float(what) for _ in range(count)]

    def read_labeled_floats(self, count: int, what: str) -> List[float]:
        """Read ``<label> f0 f1 ...``."""
        self.skip()
        return self.read_floats(count, what)


class M3DLoader:
    """
    Load .m3d models (materials, subsets, geometry and optional skinning data).

    Sections are read strictly in file order; every section starts with a
    header token, and every field with a label token, both discarded.
    """

    def load_m3d(self, path: Path | str) -> M3DModel:
        """
        Load a static mesh.

        Args:
            path: Path to the .m3d file

        Returns:
            M3DModel with vertices in ``VERTEX_DTYPE`` layout

        Raises:
            FileNotFoundError: If the file does not exist
            M3DParseError: If the content is malformed
        """
        model_path, stream = self._open(path)
        num_mats, num_vertices, num_tris, _num_bones, _num_clips = self._read_header(stream)

        materials = self._read_materials(stream, num_mats)
        subsets = self._read_subset_table(stream, num_mats)
        vertices = self._read_vertices(stream, num_vertices)
        indices = self._read_triangles(stream, num_tris)

        logger.info(
            "Loaded model %s: %d materials, %d vertices, %d triangles",
            model_path.name, num_mats, num_vertices, num_tris,
        )
        return M3DModel(vertices=vertices, indices=indices, subsets=subsets, materials=materials)

    def load_skinned_m3d(self, path: Path | str) -> SkinnedM3DModel:
        """
        Load a skinned mesh together with its skeleton and animation clips.

        Args:
            path: Path to the .m3d file

        Returns:
            SkinnedM3DModel with vertices in ``SKINNED_VERTEX_DTYPE`` layout

        Raises:
            FileNotFoundError: If the file does not exist
            M3DParseError: If the content is malformed
            SkeletonError: If the bone hierarchy or clips are inconsistent
        """
        model_path, stream = self._open(path)
        num_mats, num_vertices, num_tris, num_bones, num_clips = self._read_header(stream)

        materials = self._read_materials(stream, num_mats)
        subsets = self._read_subset_table(stream, num_mats)
        vertices = self._read_skinned_vertices(stream, num_vertices)
        indices = self._read_triangles(stream, num_tris)
        bone_offsets = self._read_bone_offsets(stream, num_bones)
        bone_hierarchy = self._read_bone_hierarchy(stream, num_bones)
        animations = self._read_animation_clips(stream, num_bones, num_clips)

        skeleton = SkinnedSkeleton(bone_hierarchy, bone_offsets, animations)

        logger.info(
            "Loaded skinned model %s: %d materials, %d vertices, %d triangles, %d bones, clips=%s",
            model_path.name, num_mats, num_vertices, num_tris, num_bones, list(animations.keys()),
        )
        return SkinnedM3DModel(
            vertices=vertices,
            indices=indices,
            subsets=subsets,
            materials=materials,
            skeleton=skeleton,
        )

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _open(self, path: Path | str) -> Tuple[Path, _TokenStream]:
        model_path = Path(path)
        if not model_path.is_absolute() and not model_path.exists():
            candidate = ASSETS_DIR / model_path
            if candidate.exists():
                model_path = candidate

        if not model_path.is_file():
            raise FileNotFoundError(f"Model file not found: {model_path}")

        try:
            with model_path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except UnicodeDecodeError as e:
            raise M3DParseError(f"File is not UTF-8 text ({e.reason})", model_path) from e

        logger.debug("Parsing %s", model_path)
        return model_path, _TokenStream(text, model_path)

    def _read_header(self, stream: _TokenStream) -> Tuple[int, int, int, int, int]:
        stream.skip()  # header text
        counts = []
        for what in ("material count", "vertex count", "triangle count", "bone count", "clip count"):
            stream.skip()
            counts.append(stream.read_count(what))
        return tuple(counts)

    def _read_materials(self, stream: _TokenStream, num_mats: int) -> List[M3DMaterial]:
        stream.skip()  # materials header
        materials = []
        for _ in range(num_mats):
            material = M3DMaterial()
            stream.skip()
            material.name = stream.next("material name")
            material.diffuse_albedo = tuple(stream.read_labeled_floats(3, "diffuse albedo")) + (1.0,)
            material.fresnel_r0 = tuple(stream.read_labeled_floats(3, "Fresnel R0"))
            material.roughness = stream.read_labeled_floats(1, "roughness")[0]
            stream.skip()
            material.alpha_clip = stream.read_int("alpha clip flag") != 0
            stream.skip()
            material.material_type_name = stream.next("material type name")
            stream.skip()
            material.diffuse_map_name = stream.next("diffuse map name")
            stream.skip()
            material.normal_map_name = stream.next("normal map name")
            materials.append(material)
        logger.debug("Read %d materials", len(materials))
        return materials

    def _read_subset_table(self, stream: _TokenStream, num_subsets: int) -> List[Subset]:
        stream.skip()  # subset header
        subsets = []
        for _ in range(num_subsets):
            values = []
            for what in ("subset id", "vertex start", "vertex count", "face start", "face count"):
                stream.skip()
                values.append(stream.read_count(what))
            subsets.append(Subset(*values))
        return subsets

    def _read_vertices(self, stream: _TokenStream, num_vertices: int) -> np.ndarray:
        stream.skip()  # vertices header
        vertices = np.zeros(num_vertices, dtype=VERTEX_DTYPE)
        for i in range(num_vertices):
            vertices['position'][i] = stream.read_labeled_floats(3, "position")
            vertices['tangent'][i] = stream.read_labeled_floats(4, "tangent")
            vertices['normal'][i] = stream.read_labeled_floats(3, "normal")
            vertices['texcoord'][i] = stream.read_labeled_floats(2, "texture coordinate")
        logger.debug("Read %d vertices", num_vertices)
        return vertices

    def _read_skinned_vertices(self, stream: _TokenStream, num_vertices: int) -> np.ndarray:
        stream.skip()  # vertices header
        vertices = np.zeros(num_vertices, dtype=SKINNED_VERTEX_DTYPE)
        for i in range(num_vertices):
            vertices['position'][i] = stream.read_labeled_floats(3, "position")
            # Tangent handedness (w) is not used by the skinned shaders
            vertices['tangent'][i] = stream.read_labeled_floats(4, "tangent")[:3]
            vertices['normal'][i] = stream.read_labeled_floats(3, "normal")
            vertices['texcoord'][i] = stream.read_labeled_floats(2, "texture coordinate")

            weights = stream.read_labeled_floats(4, "bone weight")
            stream.skip()
            bone_indices = [stream.read_int("bone index") for _ in range(4)]

            vertices['bone_weights'][i] = weights[:3]
            vertices['bone_indices'][i] = [index & 0xFF for index in bone_indices]
        logger.debug("Read %d skinned vertices", num_vertices)
        return vertices

    def _read_triangles(self, stream: _TokenStream, num_tris: int) -> np.ndarray:
        stream.skip()  # triangles header
        indices = np.zeros(num_tris * 3, dtype=np.uint16)
        for i in range(num_tris * 3):
            index = stream.read_int("vertex index")
            if not 0 <= index <= _MAX_INDEX:
                raise stream.error(f"Vertex index {index} does not fit in 16 bits")
            indices[i] = index
        return indices

    def _read_bone_offsets(self, stream: _TokenStream, num_bones: int) -> List[Matrix44]:
        stream.skip()  # bone offsets header
        offsets = []
        for _ in range(num_bones):
            values = stream.read_labeled_floats(16, "bone offset")
            offsets.append(Matrix44(np.array(values, dtype='f4').reshape(4, 4)))
        return offsets

    def _read_bone_hierarchy(self, stream: _TokenStream, num_bones: int) -> List[int]:
        stream.skip()  # bone hierarchy header
        hierarchy = []
        for _ in range(num_bones):
            stream.skip()
            hierarchy.append(stream.read_int("parent bone index"))
        return hierarchy

    def _read_bone_keyframes(self, stream: _TokenStream) -> BoneAnimation:
        stream.skip(2)  # bone name, keyframe count label
        num_keyframes = stream.read_count("keyframe count")
        stream.expect("{")

        bone_animation = BoneAnimation()
        for _ in range(num_keyframes):
            time = stream.read_labeled_floats(1, "keyframe time")[0]
            translation = stream.read_labeled_floats(3, "translation")
            scale = stream.read_labeled_floats(3, "scale")
            rotation = stream.read_labeled_floats(4, "rotation quaternion")
            bone_animation.add_keyframe(Keyframe(time, translation, scale, rotation))

        stream.expect("}")
        return bone_animation

    def _read_animation_clips(
        self,
        stream: _TokenStream,
        num_bones: int,
        num_clips: int,
    ) -> Dict[str, AnimationClip]:
        stream.skip()  # animation clips header
        animations: Dict[str, AnimationClip] = {}
        for _ in range(num_clips):
            stream.skip()
            clip_name = stream.next("clip name")
            if clip_name in animations:
                raise stream.error(f"Duplicate animation clip '{clip_name}'")

            stream.expect("{")
            bone_animations = [self._read_bone_keyframes(stream) for _ in range(num_bones)]
            stream.expect("}")

            animations[clip_name] = AnimationClip(clip_name, bone_animations)
            logger.debug("Read clip '%s' (%d bones)", clip_name, num_bones)
        return animations


def load_skinned_model(path: Path | str, clip_name: str) -> Tuple[SkinnedM3DModel, SkeletalModelInstance]:
    """
    Load a skinned model and create an instance playing one of its clips.

    Args:
        path: Path to the .m3d file
        clip_name: Clip the instance plays

    Returns:
        Tuple of (model, instance); the instance shares the model's skeleton
    """
    model = M3DLoader().load_skinned_m3d(path)
    instance = SkeletalModelInstance(model.skeleton, clip_name)
    return model, instance
