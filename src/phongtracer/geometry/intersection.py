"""Intersection records and hit selection.

An Intersection pairs a ray parameter t with the object that was struck.
Intersections keeps a collection of them sorted by t, which turns hit
selection into a scan for the first non-negative entry.

Once the hit is known, prepare_computations derives everything shading
needs: the world-space point, the eye and normal vectors, whether the ray
started inside the object, and an over_point nudged off the surface so
shadow rays do not immediately re-hit it.

Example:
    >>> from phongtracer.geometry.intersection import Intersection, Intersections
    >>> xs = Intersections([Intersection(5.0, s), Intersection(-3.0, s), Intersection(2.0, s)])
    >>> xs.hit().t
    2.0
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

from phongtracer.core.ray import Ray
from phongtracer.core.tuples import EPSILON, Point, Vector

if TYPE_CHECKING:
    from phongtracer.geometry.sphere import Sphere


@dataclass(frozen=True)
class Computations:
    """Shading state precomputed at a ray/object hit.

    Attributes:
        object: The object that was hit.
        t: The ray parameter of the hit.
        point: World-space hit point.
        eyev: Unit vector from the point back toward the ray origin.
        normalv: Surface normal, flipped to face the eye when inside.
        inside: True if the ray originated inside the object.
        over_point: point offset by EPSILON along normalv.
    """

    object: Sphere
    t: float
    point: Point
    eyev: Vector
    normalv: Vector
    inside: bool
    over_point: Point


@dataclass(frozen=True, eq=False)
class Intersection:
    """A ray/object intersection at parameter t.

    Attributes:
        t: Distance along the ray, in units of the ray's direction length.
        object: The intersected object.
    """

    t: float
    object: Sphere

    def prepare_computations(self, ray: Ray) -> Computations:
        """Derive the shading state for this intersection.

        Args:
            ray: The ray that produced this intersection.

        Returns:
            A Computations record.
        """
        point = ray.position(self.t)
        eyev = -ray.direction
        normalv = self.object.normal_at(point)

        inside = False
        if normalv.dot(eyev) < 0.0:
            inside = True
            normalv = -normalv

        return Computations(
            object=self.object,
            t=self.t,
            point=point,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
            over_point=point + normalv * EPSILON,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.t == other.t and self.object == other.object

    def __hash__(self) -> int:
        return hash((self.t, self.object))


class Intersections:
    """A collection of intersections kept sorted by t.

    Sorting is stable, so intersections with equal t keep the order in which
    they were added. hit() therefore returns the first of several tied
    candidates.

    Args:
        intersections: Optional initial intersections, in any order.
    """

    __slots__ = ("_items",)

    def __init__(self, intersections: Iterable[Intersection] = ()) -> None:
        self._items: list[Intersection] = sorted(intersections, key=_by_t)

    def push(self, intersection: Intersection) -> None:
        """Add one intersection, keeping the collection sorted."""
        self._items.append(intersection)
        self._items.sort(key=_by_t)

    def extend(self, other: Iterable[Intersection]) -> None:
        """Merge in another batch of intersections."""
        self._items.extend(other)
        self._items.sort(key=_by_t)

    def hit(self) -> Intersection | None:
        """Return the visible intersection: the lowest non-negative t.

        Returns:
            The hit, or None when every intersection is behind the origin.
        """
        for intersection in self._items:
            if intersection.t >= 0.0:
                return intersection
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Intersection]:
        return iter(self._items)

    @overload
    def __getitem__(self, index: int) -> Intersection: ...

    @overload
    def __getitem__(self, index: slice) -> list[Intersection]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        ts = ", ".join(f"{i.t:g}" for i in self._items)
        return f"Intersections([{ts}])"


def _by_t(intersection: Intersection) -> float:
    return intersection.t
