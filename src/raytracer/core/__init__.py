"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Points, vectors, colors and the shared EPSILON
    matrix: Small dense matrices with cofactor inversion
    transform: Translation, scaling, rotation, shearing and view transforms
    ray: Ray data structure
    canvas: Pixel buffer written by the render loop
    render: Serial render loop

Note: the Taichi backend (kernel) is NOT imported here so that the rest of the
package works without initialising Taichi. Import it directly:

    from raytracer.core.kernel import TaichiRenderer
"""

from .canvas import Canvas
from .matrix import IDENTITY, Matrix, NonInvertibleMatrixError
from .ray import Ray
from .render import ProgressCallback, render, render_rows
from .transform import (
    chain,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    uniform_scaling,
    view_transform,
)
from .tuples import (
    BLACK,
    EPSILON,
    WHITE,
    Color,
    Tuple,
    approx_equal,
    cross,
    dot,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)

__all__ = [
    # Tuples
    "Tuple",
    "Color",
    "point",
    "vector",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "reflect",
    "approx_equal",
    "EPSILON",
    "BLACK",
    "WHITE",
    # Matrices and transforms
    "Matrix",
    "IDENTITY",
    "NonInvertibleMatrixError",
    "translation",
    "scaling",
    "uniform_scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "chain",
    "view_transform",
    # Rays and rendering
    "Ray",
    "Canvas",
    "render",
    "render_rows",
    "ProgressCallback",
]
