"""Shape: a primitive together with its transform and material.

Shapes are a closed tagged variant. Every shape carries the same fields
(transform, material, shadow flag) plus a ShapeKind tag, and the per-primitive
math is selected with a match on that tag rather than through subclasses.

The world-space wrappers are shared by every kind:

    intersect(ray):
        local_ray = ray transformed by the inverse transform
        return local_intersect(local_ray)

    normal_at(point):
        local_point = inverse transform * point
        local_normal = local_normal_at(local_point)
        world_normal = inverse-transpose * local_normal, w forced to 0
        return normalize(world_normal)

Renormalizing is required because non-uniform scaling does not preserve
normal lengths.

Example:
    >>> from raytracer.core.transform import translation
    >>> from raytracer.geometry.shape import sphere
    >>> s = sphere(transform=translation(0, 1, 0))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from raytracer.core.matrix import IDENTITY, Matrix
from raytracer.core.ray import Ray
from raytracer.core.tuples import Tuple, normalize
from raytracer.geometry.plane import intersect_plane, plane_normal
from raytracer.geometry.sphere import intersect_sphere, sphere_normal
from raytracer.materials.phong import Material


class ShapeKind(IntEnum):
    """Enumeration of supported primitives.

    The integer values are also used by the Taichi backend for dispatch.
    """

    SPHERE = 0
    PLANE = 1


@dataclass(frozen=True)
class Shape:
    """A primitive placed in the world.

    Attributes:
        kind: Which primitive this is.
        transform: Object-to-world transform.
        material: The Phong material, owned by value.
        casts_shadow: Whether the shape occludes shadow rays.
        inverse: Precomputed inverse of transform.
        inverse_transpose: Precomputed transpose of inverse, for normals.

    Raises:
        NonInvertibleMatrixError: If transform is singular.
    """

    kind: ShapeKind
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    material: Material = field(default_factory=Material)
    casts_shadow: bool = True
    inverse: Matrix = field(init=False, repr=False, compare=False)
    inverse_transpose: Matrix = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        inverse = self.transform.inverse()
        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "inverse_transpose", inverse.transpose())

    # =========================================================================
    # Local space (per primitive)
    # =========================================================================

    def local_intersect(self, local_ray: Ray) -> tuple[float, ...]:
        """Intersect a ray already in object space; t values ascending."""
        match self.kind:
            case ShapeKind.SPHERE:
                return intersect_sphere(local_ray)
            case ShapeKind.PLANE:
                return intersect_plane(local_ray)
        raise ValueError(f"Unknown shape kind: {self.kind}")

    def local_normal_at(self, local_point: Tuple) -> Tuple:
        """Object-space normal at an object-space point."""
        match self.kind:
            case ShapeKind.SPHERE:
                return sphere_normal(local_point)
            case ShapeKind.PLANE:
                return plane_normal(local_point)
        raise ValueError(f"Unknown shape kind: {self.kind}")

    # =========================================================================
    # World space (shared)
    # =========================================================================

    def intersect(self, ray: Ray) -> tuple[float, ...]:
        """Intersect a world-space ray, returning the t values in ascending order.

        The transform is affine, so t along the local ray equals t along the
        world ray.
        """
        return self.local_intersect(ray.transform(self.inverse))

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Compute the unit world-space normal at a point on the surface."""
        local_point = self.inverse @ world_point
        local_normal = self.local_normal_at(local_point)
        world_normal = (self.inverse_transpose @ local_normal).as_vector()
        return normalize(world_normal)


def sphere(
    transform: Matrix = IDENTITY,
    material: Material | None = None,
    casts_shadow: bool = True,
) -> Shape:
    """Create a sphere shape (the unit sphere moved by transform)."""
    return Shape(ShapeKind.SPHERE, transform, material or Material(), casts_shadow)


def plane(
    transform: Matrix = IDENTITY,
    material: Material | None = None,
    casts_shadow: bool = True,
) -> Shape:
    """Create a plane shape (the xz-plane moved by transform)."""
    return Shape(ShapeKind.PLANE, transform, material or Material(), casts_shadow)
