"""Pinhole camera mapping canvas pixels to world-space rays.

The camera sits at the origin of its own space looking down -z, with a view
plane at unit distance (z = -1). The field of view and the canvas aspect ratio
decide how big that plane is:

    half_view = tan(field_of_view / 2)
    aspect    = hsize / vsize
    aspect >= 1:  half_width = half_view,          half_height = half_view / aspect
    aspect <  1:  half_width = half_view * aspect, half_height = half_view
    pixel_size = half_width * 2 / hsize        (= 2 * half_view / max(hsize, vsize))

The camera transform is a view transform (see transform.view_transform) that
moves the world relative to the eye. Its inverse maps points on the view plane
back into world space.

Example:
    >>> import math
    >>> from raytracer.camera.pinhole import Camera
    >>> from raytracer.core.transform import view_transform
    >>> from raytracer.core.tuples import point, vector
    >>> camera = Camera(
    ...     hsize=160,
    ...     vsize=120,
    ...     field_of_view=math.pi / 2,
    ...     transform=view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0)),
    ... )
    >>> ray = camera.ray_for_pixel(80, 60)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raytracer.core.matrix import IDENTITY, Matrix
from raytracer.core.ray import Ray
from raytracer.core.tuples import normalize, point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        hsize: Horizontal size of the canvas in pixels.
        vsize: Vertical size of the canvas in pixels.
        field_of_view: Angle, in radians, the camera sees across the longer
            canvas dimension.
        transform: The view transform (world to camera).
        inverse: Cached inverse of transform.
        half_width: Half the view plane width at unit distance.
        half_height: Half the view plane height at unit distance.
        pixel_size: World-space size of a pixel on the view plane.

    Raises:
        ValueError: If a dimension is not positive or the field of view is
            outside (0, pi).
        NonInvertibleMatrixError: If transform is singular.
    """

    hsize: int
    vsize: int
    field_of_view: float
    transform: Matrix = field(default_factory=lambda: IDENTITY)
    inverse: Matrix = field(init=False, repr=False, compare=False)
    half_width: float = field(init=False, repr=False, compare=False)
    half_height: float = field(init=False, repr=False, compare=False)
    pixel_size: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.hsize <= 0 or self.vsize <= 0:
            raise ValueError(f"Camera size must be positive, got {self.hsize}x{self.vsize}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.field_of_view}")

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.hsize / self.vsize
        if aspect >= 1.0:
            half_width = half_view
            half_height = half_view / aspect
        else:
            half_width = half_view * aspect
            half_height = half_view

        object.__setattr__(self, "inverse", self.transform.inverse())
        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", half_width * 2.0 / self.hsize)

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Generate the world-space ray through the center of pixel (px, py).

        Args:
            px: Pixel column, 0 at the left edge.
            py: Pixel row, 0 at the top edge.

        Returns:
            A ray from the camera origin with a unit direction.
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self.inverse @ point(world_x, world_y, -1.0)
        origin = self.inverse @ point(0.0, 0.0, 0.0)
        direction = normalize(pixel - origin)
        return Ray(origin, direction)

    def get_camera_info(self) -> dict[str, float | int]:
        """Get derived camera parameters for debugging."""
        return {
            "hsize": self.hsize,
            "vsize": self.vsize,
            "field_of_view": self.field_of_view,
            "half_width": self.half_width,
            "half_height": self.half_height,
            "pixel_size": self.pixel_size,
        }
