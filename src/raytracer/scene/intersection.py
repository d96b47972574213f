"""Ray-shape intersection records and hit preparation.

An Intersection pairs a ray parameter t with the shape that was hit. Inside a
World the shape is identified by its stable insertion index, which keeps
identity well defined even when two shapes have equal transforms and materials
and lets intersection lists be sorted deterministically.

The visible hit of a sorted list is the intersection with the smallest
non-negative t.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.geometry.shape import sphere
    >>> from raytracer.scene.intersection import hit, intersect_shape
    >>> ray = Ray(point(0, 0, -5), vector(0, 0, 1))
    >>> xs = intersect_shape(sphere(), ray)
    >>> hit(xs).t
    4.0
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from raytracer.core.ray import Ray
from raytracer.core.tuples import EPSILON, Tuple, dot, normalize

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape


@dataclass(frozen=True)
class Intersection:
    """Record of a ray hitting a shape.

    Attributes:
        t: The ray parameter of the hit.
        shape: The shape that was hit.
        shape_index: Insertion index of the shape in its World, or -1 for a
            shape intersected on its own.
    """

    t: float
    shape: Shape
    shape_index: int = -1

    def sort_key(self) -> tuple[float, int]:
        """Order by t, breaking ties by shape insertion order."""
        return (self.t, self.shape_index)


def intersect_shape(shape: Shape, ray: Ray, shape_index: int = -1) -> list[Intersection]:
    """Intersect a world-space ray with one shape and tag the results.

    Args:
        shape: The shape to test.
        ray: The world-space ray.
        shape_index: The shape's index in its World, if any.

    Returns:
        The intersections in ascending t order.
    """
    return [Intersection(t, shape, shape_index) for t in shape.intersect(ray)]


def sort_intersections(intersections: Iterable[Intersection]) -> list[Intersection]:
    """Sort intersections by t; equal t values keep shape insertion order."""
    return sorted(intersections, key=Intersection.sort_key)


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Return the visible hit: the smallest non-negative t, or None.

    The input need not be sorted. Ties are resolved by shape insertion order.
    """
    visible = [i for i in intersections if i.t >= 0.0]
    if not visible:
        return None
    return min(visible, key=Intersection.sort_key)


# =============================================================================
# Hit Preparation
# =============================================================================


@dataclass(frozen=True)
class Computations:
    """Precomputed shading state for a single hit.

    Attributes:
        t: The ray parameter of the hit.
        shape: The shape that was hit.
        shape_index: Index of the shape in its World, or -1.
        point: The world-space hit point.
        eye_vector: Unit vector from the point back toward the ray origin.
        normal: Unit surface normal, flipped to face the eye.
        inside: True if the normal was flipped (the eye is inside the shape).
        over_point: The point nudged along the normal by EPSILON, used as the
            shadow ray origin so a surface does not shadow itself.
    """

    t: float
    shape: Shape
    shape_index: int
    point: Tuple
    eye_vector: Tuple
    normal: Tuple
    inside: bool
    over_point: Tuple


def prepare_computations(intersection: Intersection, ray: Ray) -> Computations:
    """Compute the shading state for an intersection along a ray.

    Args:
        intersection: The hit to prepare.
        ray: The ray that produced the hit.

    Returns:
        A Computations record for shade_hit.
    """
    position = ray.position(intersection.t)
    eye_vector = normalize(-ray.direction)
    normal = intersection.shape.normal_at(position)

    inside = dot(normal, eye_vector) < 0.0
    if inside:
        normal = -normal

    return Computations(
        t=intersection.t,
        shape=intersection.shape,
        shape_index=intersection.shape_index,
        point=position,
        eye_vector=eye_vector,
        normal=normal,
        inside=inside,
        over_point=position + normal * EPSILON,
    )
