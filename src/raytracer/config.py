"""Render settings.

RenderSettings groups the knobs that are not part of the scene itself: output
size, field of view, which backend renders the pixels and how the result is
exported. Settings round-trip through plain dictionaries so callers can keep
them in JSON or any other format of their choosing.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Literal

from raytracer.camera.pinhole import Camera
from raytracer.core.matrix import IDENTITY, Matrix

Backend = Literal["python", "taichi"]
Arch = Literal["cpu", "gpu"]

_BACKENDS = ("python", "taichi")
_ARCHES = ("cpu", "gpu")


@dataclass
class RenderSettings:
    """Configuration for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        field_of_view: Camera field of view in radians.
        backend: "python" for the serial loop, "taichi" for the parallel kernel.
        arch: Taichi architecture when backend is "taichi".
        gamma: Gamma applied when exporting to PNG.
    """

    width: int = 100
    height: int = 50
    field_of_view: float = math.pi / 3
    backend: Backend = "python"
    arch: Arch = "cpu"
    gamma: float = 1.0

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If any setting is out of range.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {self.field_of_view}")
        if self.backend not in _BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend}")
        if self.arch not in _ARCHES:
            raise ValueError(f"Unknown arch: {self.arch}")
        if self.gamma <= 0.0:
            raise ValueError(f"Gamma must be positive, got {self.gamma}")

    def make_camera(self, transform: Matrix = IDENTITY) -> Camera:
        """Create a camera matching these settings."""
        return Camera(self.width, self.height, self.field_of_view, transform)

    def to_dict(self) -> dict[str, Any]:
        """Export the settings to a dictionary (for JSON serialization)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderSettings:
        """Load settings from a dictionary; missing keys keep their defaults.

        Raises:
            ValueError: If the dictionary has unknown keys or invalid values.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render settings: {sorted(unknown)}")
        return cls(**data)
