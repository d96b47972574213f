"""Phong material model.

This module provides the Material dataclass and the lighting() function that
evaluates the Phong reflection model for a single point light:

    color = ambient + (diffuse + specular) * shadow_factor

where shadow_factor is 0 for points in shadow and 1 otherwise. The diffuse and
specular terms vanish when the light sits on the far side of the surface, and
the specular term also vanishes when the reflected light points away from the
eye.

Example:
    >>> from raytracer.core.tuples import Color, point, vector
    >>> from raytracer.materials.phong import Material, lighting
    >>> from raytracer.scene.light import PointLight
    >>> m = Material()
    >>> light = PointLight(point(0, 0, -10), Color(1, 1, 1))
    >>> result = lighting(m, light, point(0, 0, 0), vector(0, 0, -1), vector(0, 0, -1))
    >>> result == Color(1.9, 1.9, 1.9)
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from raytracer.core.tuples import BLACK, WHITE, Color, Tuple, dot, normalize, reflect
from raytracer.materials.pattern import Pattern

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape
    from raytracer.scene.light import PointLight


@dataclass(frozen=True)
class Material:
    """Surface reflectance properties for Phong shading.

    Attributes:
        color: Surface color, used when no pattern is set.
        ambient: Ambient reflection coefficient.
        diffuse: Diffuse reflection coefficient.
        specular: Specular reflection coefficient.
        shininess: Specular exponent; larger values give a tighter highlight.
        pattern: Optional procedural pattern replacing color.

    Raises:
        ValueError: If any coefficient is negative.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0
    pattern: Pattern | None = None

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular", "shininess"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        for i, component in enumerate(self.color):
            if component < 0.0:
                raise ValueError(f"Color component {i} = {component} is negative.")

    def color_at(self, shape: Shape | None, world_point: Tuple) -> Color:
        """Get the surface color at a point, honoring the pattern if any."""
        if self.pattern is not None and shape is not None:
            return self.pattern.pattern_at_shape(shape, world_point)
        return self.color


def lighting(
    material: Material,
    light: PointLight,
    position: Tuple,
    eye_vector: Tuple,
    normal: Tuple,
    in_shadow: bool = False,
    shape: Shape | None = None,
) -> Color:
    """Evaluate the Phong reflection model at a surface point.

    Args:
        material: The surface material.
        light: The point light illuminating the surface.
        position: The world-space point being shaded.
        eye_vector: Unit vector from the point toward the eye.
        normal: Unit surface normal at the point, facing the eye.
        in_shadow: Whether the light is occluded from the point.
        shape: The shape being shaded, needed to evaluate patterns.

    Returns:
        The reflected color.
    """
    effective_color = material.color_at(shape, position) * light.intensity
    ambient = effective_color * material.ambient

    if in_shadow:
        return ambient

    light_vector = normalize(light.position - position)
    light_dot_normal = dot(light_vector, normal)
    if light_dot_normal <= 0.0:
        # Light is on the other side of the surface
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    reflect_vector = reflect(-light_vector, normal)
    reflect_dot_eye = dot(reflect_vector, eye_vector)
    if reflect_dot_eye <= 0.0:
        specular = BLACK
    else:
        specular = light.intensity * (material.specular * reflect_dot_eye**material.shininess)

    return ambient + diffuse + specular
