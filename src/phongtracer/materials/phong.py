"""Phong surface material and local illumination model.

The Phong model approximates the light leaving a surface point as the sum of
three terms:

    ambient:  a constant fraction of the surface color, standing in for all
              indirect light in the scene
    diffuse:  Lambertian reflection, proportional to the cosine between the
              light direction and the surface normal
    specular: a highlight that peaks when the eye lies along the mirror
              reflection of the light, sharpened by the shininess exponent

Each light contributes independently; there is no falloff with distance.

Example:
    >>> from phongtracer.core.color import Color
    >>> from phongtracer.materials.phong import Material
    >>> matte_red = Material(color=Color(1.0, 0.2, 0.2), specular=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from phongtracer.core.color import BLACK, Color
from phongtracer.core.tuples import Point, Vector

if TYPE_CHECKING:
    from phongtracer.scene.light import PointLight

DEFAULT_AMBIENT = 0.1
DEFAULT_DIFFUSE = 0.9
DEFAULT_SPECULAR = 0.9
DEFAULT_SHININESS = 200.0


@dataclass(frozen=True)
class Material:
    """Surface appearance parameters for the Phong model.

    Attributes:
        color: Base surface color.
        ambient: Fraction of the light treated as ambient, usually in [0, 1].
        diffuse: Weight of the Lambertian term, usually in [0, 1].
        specular: Weight of the highlight term, usually in [0, 1].
        shininess: Highlight exponent. Larger values give smaller, tighter
            highlights (10 is very broad, 200 is very tight).

    Raises:
        ValueError: If a coefficient is negative or shininess is not positive.
    """

    color: Color = field(default_factory=lambda: Color(1.0, 1.0, 1.0))
    ambient: float = DEFAULT_AMBIENT
    diffuse: float = DEFAULT_DIFFUSE
    specular: float = DEFAULT_SPECULAR
    shininess: float = DEFAULT_SHININESS

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")

    def coefficients(self) -> tuple[float, float, float, float]:
        """Return (ambient, diffuse, specular, shininess)."""
        return (self.ambient, self.diffuse, self.specular, self.shininess)


def lighting(
    material: Material,
    light: PointLight,
    point: Point,
    eyev: Vector,
    normalv: Vector,
    in_shadow: bool = False,
) -> Color:
    """Shade a surface point lit by a single point light.

    Args:
        material: The surface material at the point.
        light: The light source.
        point: The world-space point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point.
        in_shadow: If True, only the ambient term is returned.

    Returns:
        The ambient + diffuse + specular contribution of this light.
    """
    effective_color = material.color * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    lightv = (light.position - point).normalize()

    # Cosine of the angle between light and normal; negative means the
    # light is on the other side of the surface
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * (material.diffuse * light_dot_normal)

    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        factor = math.pow(reflect_dot_eye, material.shininess)
        specular = light.intensity * (material.specular * factor)

    return ambient + diffuse + specular
