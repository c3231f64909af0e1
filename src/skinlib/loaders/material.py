"""
Material

Material descriptors read from .m3d assets.
"""

from dataclasses import dataclass


@dataclass
class M3DMaterial:
    """
    Material properties stored in an .m3d file.

    The file supplies RGB diffuse albedo; alpha stays at 1.0.
    Textures are referenced by file name only.
    """

    name: str = ""
    diffuse_albedo: tuple = (1.0, 1.0, 1.0, 1.0)
    fresnel_r0: tuple = (0.01, 0.01, 0.01)
    roughness: float = 0.8
    alpha_clip: bool = False

    material_type_name: str = ""
    diffuse_map_name: str = ""
    normal_map_name: str = ""

    def texture_names(self) -> tuple:
        """Diffuse and normal map file names (skipping empty ones)."""
        return tuple(n for n in (self.diffuse_map_name, self.normal_map_name) if n)
