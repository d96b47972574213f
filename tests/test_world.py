"""Unit tests for World: intersection, shadows and shading.

Tests cover:
- The default two-sphere world
- Aggregated, sorted intersections
- Shading outside and inside a shape
- Shadow queries, including non-shadow-casting shapes
- color_at for misses, hits and hits behind the ray origin
"""

from dataclasses import replace

import pytest


class TestWorldBasics:
    """Tests for World construction."""

    def test_empty_world(self):
        from raytracer.scene.world import World

        w = World()
        assert w.shapes == ()
        assert w.light is None
        assert w.get_shape_count() == 0

    def test_add_shape_returns_index(self):
        from raytracer.geometry.shape import plane, sphere
        from raytracer.scene.world import World

        w = World()
        assert w.add_shape(sphere()) == 0
        assert w.add_shape(plane()) == 1
        assert w.get_shape_count() == 2

    def test_default_world(self, world):
        from raytracer.core.transform import scaling
        from raytracer.core.tuples import WHITE, Color, point

        outer, inner = world.shapes
        assert world.light.position == point(-10, 10, -10)
        assert world.light.intensity == WHITE
        assert outer.material.color == Color(0.8, 1.0, 0.6)
        assert outer.material.diffuse == 0.7
        assert outer.material.specular == 0.2
        assert inner.transform == scaling(0.5, 0.5, 0.5)
        assert outer in world
        assert inner in world


class TestWorldIntersect:
    def test_intersections_are_sorted(self, world, front_ray):
        xs = world.intersect(front_ray)
        assert [i.t for i in xs] == pytest.approx([4.0, 4.5, 5.5, 6.0])
        assert [i.shape_index for i in xs] == [0, 1, 1, 0]

    def test_identical_shapes_keep_insertion_order(self, front_ray):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.world import World

        a = sphere()
        b = sphere()
        xs = World([a, b]).intersect(front_ray)
        assert [i.shape_index for i in xs] == [0, 1, 0, 1]

    def test_empty_world_has_no_intersections(self, front_ray):
        from raytracer.scene.world import World

        assert World().intersect(front_ray) == []


class TestShadeHit:
    """Tests for shade_hit()."""

    def test_outside(self, world, front_ray):
        from raytracer.scene.intersection import Intersection, prepare_computations

        shape = world.shapes[0]
        comps = prepare_computations(Intersection(4, shape, 0), front_ray)
        assert tuple(world.shade_hit(comps)) == pytest.approx((0.38066, 0.47583, 0.2855), abs=1e-4)

    def test_inside(self, world):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import WHITE, point, vector
        from raytracer.scene.intersection import Intersection, prepare_computations
        from raytracer.scene.light import PointLight

        world.light = PointLight(point(0, 0.25, 0), WHITE)
        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        shape = world.shapes[1]
        comps = prepare_computations(Intersection(0.5, shape, 1), r)
        assert tuple(world.shade_hit(comps)) == pytest.approx((0.90498, 0.90498, 0.90498), abs=1e-4)

    def test_in_shadow(self):
        from raytracer.core.ray import Ray
        from raytracer.core.transform import translation
        from raytracer.core.tuples import WHITE, Color, point, vector
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, prepare_computations
        from raytracer.scene.light import PointLight
        from raytracer.scene.world import World

        s1 = sphere()
        s2 = sphere(translation(0, 0, 10))
        w = World([s1, s2], PointLight(point(0, 0, -10), WHITE))
        r = Ray(point(0, 0, 5), vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, s2, 1), r)
        assert w.shade_hit(comps) == Color(0.1, 0.1, 0.1)

    def test_no_light_is_black(self, world, front_ray):
        from raytracer.core.tuples import BLACK
        from raytracer.scene.intersection import Intersection, prepare_computations

        world.light = None
        comps = prepare_computations(Intersection(4, world.shapes[0], 0), front_ray)
        assert world.shade_hit(comps) == BLACK


class TestIsShadowed:
    """Tests for is_shadowed()."""

    @pytest.mark.parametrize(
        "p, expected",
        [
            ((0, 10, 0), False),
            ((10, -10, 10), True),
            ((-20, 20, -20), False),
            ((-2, 2, -2), False),
        ],
    )
    def test_default_world(self, world, p, expected):
        from raytracer.core.tuples import point

        assert world.is_shadowed(point(*p)) is expected

    def test_no_light(self, world):
        from raytracer.core.tuples import point

        world.light = None
        assert not world.is_shadowed(point(10, -10, 10))

    def test_non_casting_shapes_are_ignored(self, world):
        from raytracer.core.tuples import point
        from raytracer.scene.world import World

        see_through = [replace(s, casts_shadow=False) for s in world.shapes]
        w = World(see_through, world.light)
        assert not w.is_shadowed(point(10, -10, 10))

    def test_surface_does_not_shadow_itself(self, world, front_ray):
        from raytracer.scene.intersection import Intersection, prepare_computations

        comps = prepare_computations(Intersection(4, world.shapes[0], 0), front_ray)
        assert not world.is_shadowed(comps.over_point)


class TestColorAt:
    """Tests for color_at()."""

    def test_miss_is_black(self, world):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import BLACK, point, vector

        assert world.color_at(Ray(point(0, 0, -5), vector(0, 1, 0))) == BLACK

    def test_hit(self, world, front_ray):
        color = world.color_at(front_ray)
        assert tuple(color) == pytest.approx((0.38066, 0.47583, 0.2855), abs=1e-4)

    def test_hit_behind_ray_origin_uses_nearest_visible(self, world):
        """A ray starting between the spheres sees the inner one."""
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.scene.world import World

        outer, inner = world.shapes
        outer = replace(outer, material=replace(outer.material, ambient=1.0))
        inner = replace(inner, material=replace(inner.material, ambient=1.0))
        w = World([outer, inner], world.light)

        color = w.color_at(Ray(point(0, 0, 0.75), vector(0, 0, -1)))
        assert color == inner.material.color

    def test_no_light_renders_black(self, world, front_ray):
        from raytracer.core.tuples import BLACK

        world.light = None
        assert world.color_at(front_ray) == BLACK
