"""Infinite xz-plane primitive in object space.

The canonical plane is y = 0 with normal (0, 1, 0) everywhere. A ray whose
direction has (nearly) zero y component is parallel to the plane and is
treated as a miss, including the coplanar case where the ray lies inside the
plane.
"""

from raytracer.core.ray import Ray
from raytracer.core.tuples import EPSILON, Tuple, vector

PLANE_NORMAL = vector(0.0, 1.0, 0.0)


def intersect_plane(local_ray: Ray) -> tuple[float, ...]:
    """Intersect a local-space ray with the xz-plane.

    Returns:
        An empty tuple for parallel or coplanar rays, otherwise a single t.
    """
    if abs(local_ray.direction.y) < EPSILON:
        return ()
    return (-local_ray.origin.y / local_ray.direction.y,)


def plane_normal(local_point: Tuple) -> Tuple:
    """Object-space normal of the plane, constant everywhere."""
    return PLANE_NORMAL
