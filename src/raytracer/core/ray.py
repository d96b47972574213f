"""Ray data structure.

A ray is an origin point plus a direction vector. Shapes never see world-space
rays: the world-space ray is moved into each shape's local frame with the
shape's inverse transform, which lets every primitive define its intersection
math against a canonical object (e.g. the unit sphere at the origin).

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> ray = Ray(origin=point(2, 3, 4), direction=vector(1, 0, 0))
    >>> ray.position(2.5)
    Tuple(x=4.5, y=3.0, z=4.0, w=1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from raytracer.core.matrix import Matrix
from raytracer.core.tuples import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector. It is not required to be normalized;
            local-space rays are generally not unit length after transforming.
    """

    origin: Tuple
    direction: Tuple

    def position(self, t: float) -> Tuple:
        """Compute the point origin + direction * t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with both origin and direction multiplied by matrix."""
        return Ray(origin=matrix @ self.origin, direction=matrix @ self.direction)
