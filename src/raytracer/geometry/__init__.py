"""Geometry module for shape primitives.

This module provides the Shape variant and the per-primitive math:

Components:
    shape: Shape tagged variant with shared world-space wrappers
    sphere: Unit sphere intersection and normal
    plane: xz-plane intersection and normal

Every primitive is defined in its own canonical local space. Shapes move the
incoming ray into that space with their inverse transform and move normals
back out with the inverse-transpose.
"""

from .plane import intersect_plane, plane_normal
from .shape import Shape, ShapeKind, plane, sphere
from .sphere import intersect_sphere, sphere_normal

__all__ = [
    "Shape",
    "ShapeKind",
    "sphere",
    "plane",
    "intersect_sphere",
    "sphere_normal",
    "intersect_plane",
    "plane_normal",
]
