"""Materials module: surface appearance and local illumination.

Components:
    phong: Phong material parameters and the per-light lighting function
"""

from .phong import Material, lighting

__all__ = [
    "Material",
    "lighting",
]
