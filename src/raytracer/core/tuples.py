"""Homogeneous tuples, points, vectors and colors.

This module provides the value types every other part of the tracer is built
on. A Tuple is a 4-component (x, y, z, w) quadruple where w distinguishes
points (w = 1) from vectors (w = 0). Translation matrices move points but leave
vectors untouched because of that fourth component.

All comparisons between computed floats go through approx_equal and the shared
EPSILON, never through exact equality.

Example:
    >>> from raytracer.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> p + v * 2.0
    Tuple(x=1.0, y=2.0, z=5.0, w=1.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Shared tolerance for tuple, matrix, color and shadow-ray comparisons
EPSILON = 1e-5


def approx_equal(a: float, b: float) -> bool:
    """Return True if two floats differ by less than EPSILON."""
    return abs(a - b) < EPSILON


# =============================================================================
# Tuple
# =============================================================================


@dataclass(frozen=True, eq=False)
class Tuple:
    """A homogeneous (x, y, z, w) quadruple.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
        w: 1.0 for points, 0.0 for vectors. Other values only appear
            transiently while multiplying by matrices.
    """

    x: float
    y: float
    z: float
    w: float

    @property
    def is_point(self) -> bool:
        return approx_equal(self.w, 1.0)

    @property
    def is_vector(self) -> bool:
        return approx_equal(self.w, 0.0)

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

    def __add__(self, other: Tuple) -> Tuple:
        if self.is_point and other.is_point:
            raise ValueError("Cannot add two points")
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return Tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def as_vector(self) -> Tuple:
        """Return a copy with w forced to 0."""
        return Tuple(self.x, self.y, self.z, 0.0)


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w = 1)."""
    return Tuple(float(x), float(y), float(z), 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w = 0)."""
    return Tuple(float(x), float(y), float(z), 0.0)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Tuple, b: Tuple) -> float:
    """Compute the dot product of two tuples (all four components)."""
    return a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w


def magnitude(v: Tuple) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Tuple) -> Tuple:
    """Scale a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. A zero-length vector has no
        direction, so it is returned unchanged as the zero vector.
    """
    length = magnitude(v)
    if length < EPSILON:
        return Tuple(0.0, 0.0, 0.0, v.w)
    return v / length


def cross(a: Tuple, b: Tuple) -> Tuple:
    """Compute the cross product of two vectors.

    Raises:
        ValueError: If either operand is not a vector.
    """
    if not (a.is_vector and b.is_vector):
        raise ValueError("Cross product is only defined for vectors")
    return vector(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def reflect(incident: Tuple, normal: Tuple) -> Tuple:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.
    """
    return incident - normal * 2.0 * dot(incident, normal)


# =============================================================================
# Color
# =============================================================================


@dataclass(frozen=True, eq=False)
class Color:
    """An RGB color with unclamped float components.

    Components are typically in [0, 1], but intermediate shading results may
    exceed that range; clamping is left to the image export step.
    """

    red: float
    green: float
    blue: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: Color) -> Color:
        return Color(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: Color) -> Color:
        return Color(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: Color | float) -> Color:
        # Hadamard product for colors, plain scaling for numbers
        if isinstance(other, Color):
            return Color(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Color(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, scalar: float) -> Color:
        return Color(self.red * scalar, self.green * scalar, self.blue * scalar)

    def __iter__(self):
        yield self.red
        yield self.green
        yield self.blue

    def is_black(self) -> bool:
        return self == BLACK


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
