"""World: the scene container and its shading queries.

A World owns an ordered list of shapes and at most one point light. It is
mutated only while the scene is being built and is read-only while rendering,
so the same World can be shared by any number of render workers.

Shading pipeline for a single ray:

    intersect(ray)          all hits across all shapes, sorted by t
    hit(...)                nearest non-negative hit
    prepare_computations    point, eye, normal, over_point
    shade_hit(comps)        Phong lighting with a shadow test
    color_at(ray)           black on a miss, otherwise shade_hit

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.scene.world import default_world
    >>> world = default_world()
    >>> color = world.color_at(Ray(point(0, 0, -5), vector(0, 0, 1)))
"""

from __future__ import annotations

from raytracer.core.ray import Ray
from raytracer.core.transform import scaling
from raytracer.core.tuples import BLACK, WHITE, Color, Tuple, magnitude, normalize, point
from raytracer.geometry.shape import Shape, sphere
from raytracer.materials.phong import Material, lighting
from raytracer.scene.intersection import (
    Computations,
    Intersection,
    hit,
    intersect_shape,
    prepare_computations,
    sort_intersections,
)
from raytracer.scene.light import PointLight


class World:
    """A collection of shapes lit by an optional point light.

    Args:
        shapes: Initial shapes, in insertion order.
        light: The light source, or None for an unlit world.
    """

    def __init__(
        self,
        shapes: list[Shape] | None = None,
        light: PointLight | None = None,
    ) -> None:
        self._shapes: list[Shape] = list(shapes) if shapes else []
        self.light = light

    @property
    def shapes(self) -> tuple[Shape, ...]:
        """The shapes in insertion order. Indices are stable."""
        return tuple(self._shapes)

    def add_shape(self, shape: Shape) -> int:
        """Add a shape to the world.

        Returns:
            The index of the added shape.
        """
        self._shapes.append(shape)
        return len(self._shapes) - 1

    def get_shape_count(self) -> int:
        return len(self._shapes)

    def __contains__(self, shape: Shape) -> bool:
        return any(s is shape for s in self._shapes)

    # =========================================================================
    # Intersection
    # =========================================================================

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every shape.

        Returns:
            All intersections sorted by ascending t. Intersections at equal t
            are ordered by shape insertion order.
        """
        intersections: list[Intersection] = []
        for index, shape in enumerate(self._shapes):
            intersections.extend(intersect_shape(shape, ray, index))
        return sort_intersections(intersections)

    def is_shadowed(self, position: Tuple) -> bool:
        """Test whether a point is occluded from the light.

        A point is in shadow if a shadow-casting shape intersects the ray
        toward the light at 0 < t < distance-to-light. Without a light nothing
        is shadowed.
        """
        if self.light is None:
            return False

        to_light = self.light.position - position
        distance = magnitude(to_light)
        shadow_ray = Ray(position, normalize(to_light))

        for index, shape in enumerate(self._shapes):
            if not shape.casts_shadow:
                continue
            for xs in intersect_shape(shape, shadow_ray, index):
                if 0.0 < xs.t < distance:
                    return True
        return False

    # =========================================================================
    # Shading
    # =========================================================================

    def shade_hit(self, comps: Computations) -> Color:
        """Evaluate Phong lighting for a prepared hit, including the shadow test."""
        if self.light is None:
            return BLACK
        in_shadow = self.is_shadowed(comps.over_point)
        return lighting(
            comps.shape.material,
            self.light,
            comps.point,
            comps.eye_vector,
            comps.normal,
            in_shadow,
            comps.shape,
        )

    def color_at(self, ray: Ray) -> Color:
        """Trace a ray and return the color it sees; black on a miss."""
        nearest = hit(self.intersect(ray))
        if nearest is None:
            return BLACK
        return self.shade_hit(prepare_computations(nearest, ray))


def default_world() -> World:
    """Create the two-sphere reference scene.

    An outer unit sphere with a green-ish matte material, a concentric sphere
    of radius 0.5 and a white light at (-10, 10, -10).
    """
    outer = sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    inner = sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10.0, 10.0, -10.0), WHITE)
    return World([outer, inner], light)
