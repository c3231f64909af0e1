"""Shared fixtures: small .m3d assets written to a temp directory."""

import numpy as np
import pytest


def allclose(a, b, **kwargs):
    """np.allclose on plain arrays (pyrr types restrict operator overloads)."""
    return np.allclose(np.asarray(a, dtype=float), np.asarray(b, dtype=float), **kwargs)


SKINNED_M3D = """\
***************m3d-File-Header***************
#Materials 2
#Vertices 4
#Triangles 2
#Bones 3
#AnimationClips 2

***************Materials*********************
Name: body
Diffuse: 1 0.9 0.8
Fresnel0: 0.05 0.05 0.05
Roughness: 0.5
AlphaClip: 0
MaterialTypeName: Skinned
DiffuseMap: body_diff.dds
NormalMap: body_norm.dds

Name: head
Diffuse: 1 1 1
Fresnel0: 0.02 0.02 0.02
Roughness: 0.7
AlphaClip: 1
MaterialTypeName: Skinned
DiffuseMap: head_diff.dds
NormalMap: body_norm.dds

***************SubsetTable*******************
SubsetID: 0 VertexStart: 0 VertexCount: 3 FaceStart: 0 FaceCount: 1
SubsetID: 1 VertexStart: 1 VertexCount: 3 FaceStart: 1 FaceCount: 1

***************Vertices**********************
Position: 0 0 0
Tangent: 1 0 0 1
Normal: 0 0 -1
Tex-Coords: 0 0
BlendWeights: 0.5 0.3 0.2 0
BlendIndices: 0 1 2 0

Position: 1 0 0
Tangent: 1 0 0 -1
Normal: 0 0 -1
Tex-Coords: 1 0
BlendWeights: 1 0 0 0
BlendIndices: 0 0 0 0

Position: 0 1 0
Tangent: 0 1 0 1
Normal: 0 0 -1
Tex-Coords: 0 1
BlendWeights: 0.25 0.25 0.25 0.25
BlendIndices: 1 2 300 0

Position: 1 2 0
Tangent: 0 0 1 1
Normal: 0 1 0
Tex-Coords: 1 1
BlendWeights: 0.6 0.4 0 0
BlendIndices: 2 1 0 0

***************Triangles*********************
0 1 2
1 3 2

***************BoneOffsets*******************
BoneOffset0 1 0 0 0 0 1 0 0 0 0 1 0 0 0 0 1
BoneOffset1 1 0 0 0 0 1 0 0 0 0 1 0 0 -1 0 1
BoneOffset2 1 0 0 0 0 1 0 0 0 0 1 0 0 -2 0 1

***************BoneHierarchy*****************
ParentIndexOfBone0: -1
ParentIndexOfBone1: 0
ParentIndexOfBone2: 1

***************AnimationClips****************
AnimationClip Take1
{
\tBone0 #Keyframes: 2
\t{
\t\tTime: 0 Pos: 0 0 0 Scale: 1 1 1 Quat: 0 0 0 1
\t\tTime: 1 Pos: 2 0 0 Scale: 1 1 1 Quat: 0 0 0 1
\t}
\tBone1 #Keyframes: 1
\t{
\t\tTime: 0 Pos: 0 1 0 Scale: 1 1 1 Quat: 0 0 0 1
\t}
\tBone2 #Keyframes: 2
\t{
\t\tTime: 0.25 Pos: 0 1 0 Scale: 1 1 1 Quat: 0 0 0 1
\t\tTime: 1.5 Pos: 0 1 0 Scale: 2 2 2 Quat: 0 0 0 1
\t}
}
AnimationClip Late
{
\tBone0 #Keyframes: 2
\t{
\t\tTime: 0.5 Pos: 0 0 0 Scale: 1 1 1 Quat: 0 0 0 1
\t\tTime: 2 Pos: 0 0 4 Scale: 1 1 1 Quat: 0 0 0 1
\t}
\tBone1 #Keyframes: 1
\t{
\t\tTime: 0.5 Pos: 0 1 0 Scale: 1 1 1 Quat: 0 0 0 1
\t}
\tBone2 #Keyframes: 1
\t{
\t\tTime: 0.5 Pos: 0 1 0 Scale: 1 1 1 Quat: 0 0 0 1
\t}
}
"""


PLAIN_M3D = """\
***************m3d-File-Header***************
#Materials 1
#Vertices 3
#Triangles 1
#Bones 0
#AnimationClips 0

***************Materials*********************
Name: floor
Diffuse: 0.5 0.5 0.5
Fresnel0: 0.1 0.1 0.1
Roughness: 0.9
AlphaClip: 0
MaterialTypeName: Default
DiffuseMap: tile_diff.dds
NormalMap: tile_norm.dds

***************SubsetTable*******************
SubsetID: 0 VertexStart: 0 VertexCount: 3 FaceStart: 0 FaceCount: 1

***************Vertices**********************
Position: 0 0 0
Tangent: 1 0 0 -1
Normal: 0 1 0
Tex-Coords: 0 0

Position: 1 0 0
Tangent: 1 0 0 1
Normal: 0 1 0
Tex-Coords: 1 0

Position: 0 0 1
Tangent: 1 0 0 1
Normal: 0 1 0
Tex-Coords: 0 1

***************Triangles*********************
0 2 1
"""


@pytest.fixture
def write_m3d(tmp_path):
    """Write .m3d text to a file and return its path."""

    def _write(text, name="model.m3d"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def skinned_m3d_path(write_m3d):
    return write_m3d(SKINNED_M3D, "soldier.m3d")


@pytest.fixture
def plain_m3d_path(write_m3d):
    return write_m3d(PLAIN_M3D, "floor.m3d")
