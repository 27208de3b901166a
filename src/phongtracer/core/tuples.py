"""Homogeneous 4-component tuples with point/vector semantics.

A Tuple is (x, y, z, w). The w component tags what the tuple represents:
w = 1 is a Point (a location), w = 0 is a Vector (a direction). Arithmetic
keeps that algebra intact, so subtracting two points yields a vector and
adding a vector to a point yields a point.

All comparisons are approximate: two tuples are equal when every component
differs by less than EPSILON.

Example:
    >>> from phongtracer.core.tuples import Point, Vector
    >>> p = Point(1.0, 2.0, 3.0)
    >>> v = Vector(0.0, 0.0, 1.0)
    >>> p + v
    Point(1.0, 2.0, 4.0)
    >>> (p + v) - p
    Vector(0.0, 0.0, 1.0)
"""

from __future__ import annotations

import math

# Tolerance used by every approximate comparison in the package
EPSILON = 1e-5


class TupleKindError(ValueError):
    """Raised when a tuple is converted to a Point or Vector it is not."""


def approx_equal(a: float, b: float) -> bool:
    """Return True if two floats differ by less than EPSILON."""
    return abs(a - b) < EPSILON


class Tuple:
    """A 4-component homogeneous coordinate.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
        w: Homogeneous component (1.0 for points, 0.0 for vectors).
    """

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    # ------------------------------------------------------------------
    # Classification and conversion
    # ------------------------------------------------------------------

    def is_point(self) -> bool:
        return approx_equal(self.w, 1.0)

    def is_vector(self) -> bool:
        return approx_equal(self.w, 0.0)

    def as_tuple(self) -> Tuple:
        """Return this value as a plain, untagged Tuple."""
        return Tuple(self.x, self.y, self.z, self.w)

    def as_point(self) -> Point:
        """Convert to a Point.

        Raises:
            TupleKindError: If w is not 1.
        """
        return Point.from_tuple(self)

    def as_vector(self) -> Vector:
        """Convert to a Vector.

        Raises:
            TupleKindError: If w is not 0.
        """
        return Vector.from_tuple(self)

    def components(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return _combine(
            self,
            other,
            self.x + other.x,
            self.y + other.y,
            self.z + other.z,
            self.w + other.w,
        )

    def __sub__(self, other: Tuple) -> Tuple:
        if not isinstance(other, Tuple):
            return NotImplemented
        return _combine(
            self,
            other,
            self.x - other.x,
            self.y - other.y,
            self.z - other.z,
            self.w - other.w,
        )

    def __neg__(self) -> Tuple:
        return _combine(self, self, -self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        s = float(scalar)
        return _combine(self, self, self.x * s, self.y * s, self.z * s, self.w * s)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        if isinstance(scalar, Tuple):
            return NotImplemented
        s = float(scalar)
        return _combine(self, self, self.x / s, self.y / s, self.z / s, self.w / s)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> Tuple:
        """Scale to unit length.

        A zero-length input divides by zero and yields NaN/Inf components;
        callers must not normalize degenerate directions.
        """
        m = self.magnitude()
        if m == 0.0:
            nan = float("nan")
            return _combine(self, self, nan, nan, nan, nan)
        return self / m

    def dot(self, other: Tuple) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return (
            approx_equal(self.x, other.x)
            and approx_equal(self.y, other.y)
            and approx_equal(self.z, other.z)
            and approx_equal(self.w, other.w)
        )

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        return iter(self.components())

    def __repr__(self) -> str:
        return f"Tuple({self.x}, {self.y}, {self.z}, {self.w})"


class Point(Tuple):
    """A location in space (w = 1)."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float) -> None:
        super().__init__(x, y, z, 1.0)

    @classmethod
    def from_tuple(cls, t: Tuple) -> Point:
        """Build a Point from a tuple whose w is 1.

        Raises:
            TupleKindError: If the tuple is not a point.
        """
        if not t.is_point():
            raise TupleKindError(f"Expected a point (w=1), got w={t.w}")
        return cls(t.x, t.y, t.z)

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y}, {self.z})"


class Vector(Tuple):
    """A direction in space (w = 0)."""

    __slots__ = ()

    def __init__(self, x: float, y: float, z: float) -> None:
        super().__init__(x, y, z, 0.0)

    @classmethod
    def from_tuple(cls, t: Tuple) -> Vector:
        """Build a Vector from a tuple whose w is 0.

        Raises:
            TupleKindError: If the tuple is not a vector.
        """
        if not t.is_vector():
            raise TupleKindError(f"Expected a vector (w=0), got w={t.w}")
        return cls(t.x, t.y, t.z)

    def cross(self, other: Vector) -> Vector:
        """Cross product; only defined between vectors."""
        if not isinstance(other, Vector):
            raise TypeError(f"cross() requires a Vector, got {type(other).__name__}")
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector about a normal.

        The normal must be unit length for the result to be meaningful.
        """
        return self - normal * (2.0 * self.dot(normal))

    def __repr__(self) -> str:
        return f"Vector({self.x}, {self.y}, {self.z})"


def typed(x: float, y: float, z: float, w: float) -> Tuple:
    """Wrap raw components as a Point, Vector or plain Tuple according to w."""
    if approx_equal(w, 1.0):
        return Point(x, y, z)
    if approx_equal(w, 0.0):
        return Vector(x, y, z)
    return Tuple(x, y, z, w)


def _combine(a: Tuple, b: Tuple, x: float, y: float, z: float, w: float) -> Tuple:
    # Plain tuples stay plain; tagged operands produce a tagged result
    if type(a) is Tuple or type(b) is Tuple:
        return Tuple(x, y, z, w)
    return typed(x, y, z, w)


def typed_like(source: Tuple, x: float, y: float, z: float, w: float) -> Tuple:
    """Wrap components the way an operation on ``source`` would.

    A plain Tuple source gives a plain Tuple; a Point or Vector source gives a
    result tagged by its own w component.
    """
    return _combine(source, source, x, y, z, w)
