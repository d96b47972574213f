"""Builders for 4x4 affine transformation matrices.

Transforms are plain Matrix values; there is no separate runtime type. They
compose by matrix multiplication, and the rightmost transform in a product is
the first one applied to a point. chain() takes transforms in application
order so scene code can read top to bottom.

Example:
    >>> import math
    >>> from raytracer.core.transform import chain, rotation_x, scaling, translation
    >>> t = chain(rotation_x(math.pi / 2), scaling(5, 5, 5), translation(10, 5, 7))
    >>> # equivalent to translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
"""

import math
from functools import reduce

from raytracer.core.matrix import IDENTITY, Matrix
from raytracer.core.tuples import Tuple, cross, normalize


def translation(x: float, y: float, z: float) -> Matrix:
    """Create a translation matrix. Vectors are unaffected by it."""
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Create a scaling matrix."""
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def uniform_scaling(factor: float) -> Matrix:
    """Create a scaling matrix with the same factor on every axis."""
    return scaling(factor, factor, factor)


def rotation_x(radians: float) -> Matrix:
    """Rotate around the x axis (left-handed, clockwise looking down +x)."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    """Rotate around the y axis."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    """Rotate around the z axis."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Create a shearing matrix.

    Each argument moves one component in proportion to another; ``xy`` moves
    x in proportion to y, and so on.
    """
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def chain(*transforms: Matrix) -> Matrix:
    """Compose transforms given in the order they should be applied.

    Args:
        *transforms: Transforms, first-applied first.

    Returns:
        The product ``transforms[-1] @ ... @ transforms[0]``, or the identity
        when called without arguments.
    """
    return reduce(lambda acc, t: t @ acc, transforms, IDENTITY)


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Orient the world relative to an eye position.

    Args:
        from_point: Where the eye is.
        to_point: The point the eye looks at.
        up: Approximate up direction; it need not be orthogonal to the view.

    Returns:
        A matrix moving the world so the eye sits at the origin looking
        down -z.
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
