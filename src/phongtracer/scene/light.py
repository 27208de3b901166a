"""Point light sources.

A point light has a position and an intensity (its color and brightness).
It emits equally in all directions with no falloff; its contribution is
added to every lit point whose line of sight to it is unobstructed.
"""

from dataclasses import dataclass

from phongtracer.core.color import Color
from phongtracer.core.tuples import Point


@dataclass(frozen=True)
class PointLight:
    """An infinitely small light source.

    Attributes:
        position: Location of the light in world space.
        intensity: Emitted color. Channels above 1.0 are allowed.
    """

    position: Point
    intensity: Color
