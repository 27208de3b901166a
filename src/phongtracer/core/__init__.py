"""Core rendering module.

This module contains the numeric building blocks of the ray tracer:

Components:
    tuples: Homogeneous tuples with Point/Vector algebra
    color: RGB colors
    matrix: Immutable matrices with cofactor-based inversion
    transformations: Translation, scaling, rotation, shearing and view transforms
    ray: Ray data structure
    integrator: Parallel Taichi render kernel

Every floating-point comparison uses the shared EPSILON tolerance.
"""

from .color import BLACK, WHITE, Color
from .matrix import IDENTITY, Matrix, MatrixNotInvertibleError
from .ray import Ray
from .transformations import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import EPSILON, Point, Tuple, TupleKindError, Vector

# Note: integrator is NOT imported here. It allocates Taichi fields at import
# time, so it must be imported after ti.init():
#   from phongtracer.core.integrator import render_canvas

__all__ = [
    "EPSILON",
    "Tuple",
    "Point",
    "Vector",
    "TupleKindError",
    "Color",
    "BLACK",
    "WHITE",
    "Matrix",
    "MatrixNotInvertibleError",
    "IDENTITY",
    "Ray",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
]
