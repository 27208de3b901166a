"""Transformable unit sphere primitive.

Every sphere is the unit sphere centred on the object-space origin. Size,
position and orientation come from an attached affine transform. To
intersect a world-space ray, the ray is mapped into object space with the
inverse transform and tested against the canonical sphere:

    |O + tD|^2 = 1

Expanding gives a*t^2 + b*t + c = 0 with

    a = D.D
    b = 2 * D.(O - center)
    c = (O - center).(O - center) - 1

Normals are computed in object space and carried back to world space with
the transpose of the inverse transform, which keeps them perpendicular to
the surface under non-uniform scaling.

Configuration is functional: set_transform and set_material return a new
Sphere with the same id. The inverse transform is computed once, when the
sphere is built, so a singular transform is rejected immediately.

Example:
    >>> from phongtracer.core.transformations import scaling
    >>> from phongtracer.geometry.sphere import Sphere
    >>> from phongtracer.scene.ids import ObjectIdAllocator
    >>> ids = ObjectIdAllocator()
    >>> s = Sphere(ids.allocate()).set_transform(scaling(2, 2, 2))
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

from phongtracer.core.matrix import IDENTITY, Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.tuples import Point, Vector
from phongtracer.geometry.intersection import Intersection, Intersections
from phongtracer.materials.phong import Material

OBJECT_ORIGIN = Point(0.0, 0.0, 0.0)


@dataclass(frozen=True, eq=False)
class Sphere:
    """A unit sphere placed in the world by an affine transform.

    Attributes:
        id: Identity used for equality. Two spheres with the same id are the
            same object regardless of how they are configured.
        transform: Object-to-world transform.
        material: Surface material.
        inverse_transform: World-to-object transform, derived.
        normal_transform: Transpose of inverse_transform, derived.

    Raises:
        MatrixNotInvertibleError: If the transform is singular.
        ValueError: If the transform is not 4x4.
    """

    id: int
    # Matrix is unhashable, so the shared identity goes through a factory
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    material: Material = field(default_factory=Material)
    inverse_transform: Matrix = field(init=False, repr=False)
    normal_transform: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.transform.shape != (4, 4):
            raise ValueError(f"Sphere transform must be 4x4, got {self.transform.shape}")
        inverse = self.transform.inverse()
        object.__setattr__(self, "inverse_transform", inverse)
        object.__setattr__(self, "normal_transform", inverse.transpose())

    def set_transform(self, transform: Matrix) -> Sphere:
        """Return a copy of this sphere with a new transform.

        Raises:
            MatrixNotInvertibleError: If the transform is singular.
        """
        return dataclasses.replace(self, transform=transform)

    def set_material(self, material: Material) -> Sphere:
        """Return a copy of this sphere with a new material."""
        return dataclasses.replace(self, material=material)

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this sphere.

        Args:
            ray: The ray to test.

        Returns:
            An empty collection on a miss, otherwise both roots ordered
            t1 <= t2 (equal for a tangent ray). Roots behind the ray origin
            are included; hit selection filters them.
        """
        local = ray.transform(self.inverse_transform)
        sphere_to_ray = local.origin - OBJECT_ORIGIN

        a = local.direction.dot(local.direction)
        b = 2.0 * local.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return Intersections()

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        return Intersections([Intersection(t1, self), Intersection(t2, self)])

    def normal_at(self, world_point: Point) -> Vector:
        """Compute the unit surface normal at a world-space point.

        The point is assumed to lie on the sphere's surface.

        Args:
            world_point: A point on the surface, in world space.

        Returns:
            The outward unit normal in world space.
        """
        object_point = self.inverse_transform @ world_point
        object_normal = object_point - OBJECT_ORIGIN
        world_normal = self.normal_transform @ object_normal
        # The inverse-transpose can leak translation into w; only the
        # linear part applies to normals
        return Vector(world_normal.x, world_normal.y, world_normal.z).normalize()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("sphere", self.id))


# Every renderable shape; intersection and normal_at are the only capability
# the world and renderer rely on
SceneObject = Sphere
