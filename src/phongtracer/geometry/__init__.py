"""Geometry module for shape primitives and intersections.

Components:
    sphere: Transformable unit sphere with ray intersection and normals
    intersection: Intersection records, sorted collections and hit selection

Every shape is intersected in its own object space: the world-space ray is
mapped through the shape's cached inverse transform before solving.
"""

from .intersection import Computations, Intersection, Intersections
from .sphere import SceneObject, Sphere

__all__ = [
    "Sphere",
    "SceneObject",
    "Intersection",
    "Intersections",
    "Computations",
]
