"""Point light source."""

from dataclasses import dataclass

from raytracer.core.tuples import Color, Tuple


@dataclass(frozen=True)
class PointLight:
    """A light with no size, emitting equally in all directions.

    Attributes:
        position: The light's location (a point).
        intensity: The light's color and brightness.
    """

    position: Tuple
    intensity: Color

    def __post_init__(self) -> None:
        if not self.position.is_point:
            raise ValueError("Light position must be a point (w = 1)")
