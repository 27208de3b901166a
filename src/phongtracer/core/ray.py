"""Ray data structure.

A ray is a half-line: an origin point plus a direction vector. Rays are
immutable; transforming one returns a new ray.

Example:
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import Point, Vector
    >>> ray = Ray(Point(2.0, 3.0, 4.0), Vector(1.0, 0.0, 0.0))
    >>> ray.position(2.5)
    Point(4.5, 3.0, 4.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from phongtracer.core.matrix import Matrix
from phongtracer.core.tuples import Point, Vector


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. It is not normalized
            automatically; transformed rays usually are not unit length.
    """

    origin: Point
    direction: Vector

    def position(self, t: float) -> Point:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Map the ray into another coordinate space.

        The origin is transformed as a point and the direction as a vector,
        so translation moves the origin but never the direction.

        Args:
            matrix: A 4x4 affine transform.

        Returns:
            A new transformed Ray.
        """
        return Ray(matrix @ self.origin, matrix @ self.direction)
