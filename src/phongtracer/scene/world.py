"""World: the objects and lights that make up a scene.

The world answers the three questions the renderer asks of a ray:

    intersect: every intersection with every object, sorted by t
    color_at:  the shaded color seen along the ray (black on a miss)
    is_shadowed_from: whether an object blocks the path to a light

Shading sums the Phong contribution of every light. Each light gets its own
shadow test, cast from the hit's over_point so the surface does not shadow
itself.

Example:
    >>> from phongtracer.scene.world import default_world
    >>> from phongtracer.core.ray import Ray
    >>> from phongtracer.core.tuples import Point, Vector
    >>> world = default_world()
    >>> world.color_at(Ray(Point(0, 0, -5), Vector(0, 0, 1)))
    Color(0.38066..., 0.47583..., 0.2855...)
"""

from __future__ import annotations

from collections.abc import Iterable

from phongtracer.core.color import BLACK, Color
from phongtracer.core.matrix import IDENTITY, Matrix
from phongtracer.core.ray import Ray
from phongtracer.core.transformations import scaling
from phongtracer.core.tuples import Point
from phongtracer.geometry.intersection import Computations, Intersections
from phongtracer.geometry.sphere import SceneObject, Sphere
from phongtracer.materials.phong import Material, lighting
from phongtracer.scene.ids import ObjectIdAllocator
from phongtracer.scene.light import PointLight


class World:
    """A collection of objects and point lights.

    Args:
        objects: Initial scene objects.
        lights: Initial light sources.
        ids: Id allocator used by new_sphere. A fresh allocator is created
            when omitted.

    Attributes:
        objects: The scene objects, in insertion order.
        lights: The light sources, in insertion order.
        ids: The id allocator owned by this world.
    """

    def __init__(
        self,
        objects: Iterable[SceneObject] = (),
        lights: Iterable[PointLight] = (),
        ids: ObjectIdAllocator | None = None,
    ) -> None:
        self.objects: list[SceneObject] = []
        self.lights: list[PointLight] = list(lights)
        self.ids = ids if ids is not None else ObjectIdAllocator()
        for obj in objects:
            self.add_object(obj)

    # =========================================================================
    # Scene assembly
    # =========================================================================

    def add_object(self, obj: SceneObject) -> None:
        """Add an object, reserving its id with this world's allocator.

        Raises:
            ValueError: If an object with the same id is already present.
        """
        if any(existing.id == obj.id for existing in self.objects):
            raise ValueError(f"An object with id {obj.id} is already in the world")
        self.ids.reserve(obj.id)
        self.objects.append(obj)

    def add_light(self, light: PointLight) -> None:
        self.lights.append(light)

    def new_sphere(
        self,
        transform: Matrix = IDENTITY,
        material: Material | None = None,
    ) -> Sphere:
        """Create a sphere with a fresh id and add it to the world.

        Args:
            transform: Object-to-world transform.
            material: Surface material. Defaults to Material().

        Returns:
            The new sphere.

        Raises:
            MatrixNotInvertibleError: If the transform is singular.
        """
        sphere = Sphere(
            self.ids.allocate(),
            transform=transform,
            material=material if material is not None else Material(),
        )
        self.add_object(sphere)
        return sphere

    def __contains__(self, obj: object) -> bool:
        return obj in self.objects

    # =========================================================================
    # Ray queries
    # =========================================================================

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a ray with every object in the world.

        Returns:
            All intersections merged into one t-sorted collection.
        """
        intersections = Intersections()
        for obj in self.objects:
            intersections.extend(obj.intersect(ray))
        return intersections

    def shade_hit(self, comps: Computations) -> Color:
        """Shade a prepared hit by summing every light's contribution.

        Args:
            comps: Precomputed hit state.

        Returns:
            The total color at the hit.
        """
        color = BLACK
        for light in self.lights:
            shadowed = self.is_shadowed_from(comps.over_point, light)
            color = color + lighting(
                comps.object.material,
                light,
                comps.over_point,
                comps.eyev,
                comps.normalv,
                shadowed,
            )
        return color

    def color_at(self, ray: Ray) -> Color:
        """Trace a ray into the world and return the color it sees.

        Returns:
            The shaded color of the nearest visible hit, or black when the
            ray hits nothing in front of its origin.
        """
        hit = self.intersect(ray).hit()
        if hit is None:
            return BLACK
        return self.shade_hit(hit.prepare_computations(ray))

    def is_shadowed_from(self, point: Point, light: PointLight) -> bool:
        """Test whether an object blocks the segment from point to light.

        Args:
            point: The point being lit, usually a hit's over_point.
            light: The light to test against.

        Returns:
            True if a hit lies strictly between the point and the light.
        """
        v = light.position - point
        distance = v.magnitude()
        hit = self.intersect(Ray(point, v.normalize())).hit()
        return hit is not None and hit.t < distance

    def is_shadowed(self, point: Point) -> bool:
        """Test whether a point is in shadow with respect to the lights.

        Lights are checked in order. The answer is False as soon as one
        light reaches the point unobstructed; it is True only when every
        light is blocked, which includes a world with no lights at all.
        """
        for light in self.lights:
            if not self.is_shadowed_from(point, light):
                return False
        return True

    def __repr__(self) -> str:
        return f"World(objects={len(self.objects)}, lights={len(self.lights)})"


def default_world() -> World:
    """Build the canonical two-sphere world used for shading checks.

    Contains a light at (-10, 10, -10), an outer unit sphere with a
    green-yellow material and an inner sphere scaled by 0.5.
    """
    world = World()
    world.add_light(PointLight(Point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0)))
    world.new_sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    world.new_sphere(transform=scaling(0.5, 0.5, 0.5))
    return world
