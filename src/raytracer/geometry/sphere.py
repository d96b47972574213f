"""Unit sphere primitive in object space.

The sphere is always the unit sphere centered at the origin; position and size
come from the owning Shape's transform. Intersection solves

    |O + tD|^2 = 1

which expands to the quadratic a*t^2 + b*t + c = 0 with

    a = dot(D, D)
    b = 2 * dot(D, O - origin)
    c = dot(O - origin, O - origin) - 1

A discriminant below -EPSILON means the ray misses. Otherwise both roots are
returned in ascending order; a tangent ray yields two equal roots.
"""

import math

from raytracer.core.ray import Ray
from raytracer.core.tuples import EPSILON, Tuple, dot, point

ORIGIN = point(0.0, 0.0, 0.0)


def intersect_sphere(local_ray: Ray) -> tuple[float, ...]:
    """Intersect a local-space ray with the unit sphere.

    Args:
        local_ray: The ray, already transformed into the sphere's object space.

    Returns:
        An empty tuple on a miss, otherwise (t0, t1) with t0 <= t1.
    """
    sphere_to_ray = local_ray.origin - ORIGIN

    a = dot(local_ray.direction, local_ray.direction)
    b = 2.0 * dot(local_ray.direction, sphere_to_ray)
    c = dot(sphere_to_ray, sphere_to_ray) - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < -EPSILON or a < EPSILON:
        return ()

    # Rounding can push a tangent hit slightly negative
    sqrt_d = math.sqrt(max(discriminant, 0.0))
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    if t0 > t1:
        t0, t1 = t1, t0
    return (t0, t1)


def sphere_normal(local_point: Tuple) -> Tuple:
    """Object-space normal of the unit sphere: the vector from origin to point."""
    return local_point - ORIGIN
