"""Procedural color patterns for Phong materials.

A pattern replaces a material's flat color with a color that varies over the
surface. Patterns are evaluated in their own space: a world-space point is
first moved into the shape's object space and then into pattern space, so a
pattern can be scaled or rotated independently of the shape it decorates.

Supported patterns:
    - STRIPE: alternates between two colors on integer steps of x
    - GRADIENT: linear blend from a to b over each unit step of x
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from raytracer.core.matrix import IDENTITY, Matrix
from raytracer.core.tuples import BLACK, WHITE, Color, Tuple

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape


class PatternKind(IntEnum):
    """Enumeration of supported pattern types.

    The integer values are also used by the Taichi backend for dispatch.
    """

    STRIPE = 0
    GRADIENT = 1


@dataclass(frozen=True)
class Pattern:
    """A two-color procedural pattern.

    Attributes:
        kind: Which pattern function to evaluate.
        a: The first color (even stripes, gradient start).
        b: The second color (odd stripes, gradient end).
        transform: Pattern-space transform relative to the shape's object space.
    """

    kind: PatternKind
    a: Color = field(default_factory=lambda: WHITE)
    b: Color = field(default_factory=lambda: BLACK)
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Fails at construction for a singular transform
        object.__setattr__(self, "inverse", self.transform.inverse())

    def pattern_at(self, pattern_point: Tuple) -> Color:
        """Evaluate the pattern at a point already in pattern space."""
        match self.kind:
            case PatternKind.STRIPE:
                return self.a if math.floor(pattern_point.x) % 2 == 0 else self.b
            case PatternKind.GRADIENT:
                fraction = pattern_point.x - math.floor(pattern_point.x)
                return self.a + (self.b - self.a) * fraction
        raise ValueError(f"Unknown pattern kind: {self.kind}")

    def pattern_at_shape(self, shape: Shape, world_point: Tuple) -> Color:
        """Evaluate the pattern at a world-space point on a shape."""
        object_point = shape.inverse @ world_point
        pattern_point = self.inverse @ object_point
        return self.pattern_at(pattern_point)


def stripe_pattern(a: Color = WHITE, b: Color = BLACK, transform: Matrix = IDENTITY) -> Pattern:
    """Create a stripe pattern alternating along x."""
    return Pattern(PatternKind.STRIPE, a, b, transform)


def gradient_pattern(a: Color = WHITE, b: Color = BLACK, transform: Matrix = IDENTITY) -> Pattern:
    """Create a linear gradient pattern along x."""
    return Pattern(PatternKind.GRADIENT, a, b, transform)
