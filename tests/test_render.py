"""Integration tests for the serial render loop.

These tests render small complete scenes through the camera, world and canvas
together and check known pixel values.
"""

import math

import pytest


def _red_sphere_world():
    from raytracer.core.tuples import WHITE, Color, point
    from raytracer.geometry.shape import sphere
    from raytracer.materials.phong import Material
    from raytracer.scene.light import PointLight
    from raytracer.scene.world import World

    red = sphere(material=Material(color=Color(1, 0, 0)))
    return World([red], PointLight(point(-10, 10, -10), WHITE))


class TestRender:
    """Tests for render()."""

    def test_default_world_center_pixel(self, world, front_camera):
        from raytracer.core.render import render

        image = render(front_camera, world)
        assert (image.width, image.height) == (11, 11)
        assert tuple(image.pixel_at(5, 5)) == pytest.approx((0.38066, 0.47583, 0.2855), abs=1e-4)

    def test_red_sphere_wide_canvas(self):
        """Non-black in the middle, black in every corner."""
        from raytracer.camera.pinhole import Camera
        from raytracer.core.render import render
        from raytracer.core.transform import view_transform
        from raytracer.core.tuples import BLACK, point, vector

        transform = view_transform(point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))
        camera = Camera(20, 10, math.pi / 2, transform)
        image = render(camera, _red_sphere_world())

        center = image.pixel_at(10, 5)
        assert not center.is_black()
        assert center.red > 0.0
        assert center.red > center.green
        for x, y in [(0, 0), (19, 0), (0, 9), (19, 9)]:
            assert image.pixel_at(x, y) == BLACK

    def test_empty_world_is_black(self, front_camera):
        from raytracer.core.render import render
        from raytracer.scene.world import World

        image = render(front_camera, World())
        assert not image.to_numpy().any()

    def test_progress_callback(self, world):
        from raytracer.camera.pinhole import Camera
        from raytracer.core.render import render

        calls = []
        render(Camera(4, 3, math.pi / 2), world, callback=lambda *args: calls.append(args))
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_render_rows_yields_each_row(self, world, front_camera):
        from raytracer.core.canvas import Canvas
        from raytracer.core.render import render_rows

        canvas = Canvas(front_camera.hsize, front_camera.vsize)
        assert list(render_rows(front_camera, world, canvas)) == list(range(11))

    def test_render_does_not_mutate_world(self, world, front_camera):
        from raytracer.core.render import render

        shapes_before = world.shapes
        render(front_camera, world)
        assert world.shapes == shapes_before
        assert all(a is b for a, b in zip(world.shapes, shapes_before))

    def test_pixels_are_independent(self, world, front_camera):
        """A single pixel traced on its own matches the full render."""
        from raytracer.core.render import render

        image = render(front_camera, world)
        for x, y in [(0, 0), (3, 7), (5, 5), (10, 2)]:
            assert image.pixel_at(x, y) == world.color_at(front_camera.ray_for_pixel(x, y))

    def test_plane_and_patterns(self):
        """A floor plane under the sphere shows up in the lower half."""
        from raytracer.camera.pinhole import Camera
        from raytracer.core.render import render
        from raytracer.core.transform import translation, view_transform
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import plane
        from raytracer.materials.pattern import stripe_pattern
        from raytracer.materials.phong import Material

        w = _red_sphere_world()
        w.add_shape(plane(translation(0, -1, 0), Material(pattern=stripe_pattern())))
        transform = view_transform(point(0, 1, -5), point(0, 0, 0), vector(0, 1, 0))
        image = render(Camera(16, 16, math.pi / 2, transform), w)

        bottom_row = [image.pixel_at(x, 15) for x in range(16)]
        assert any(not c.is_black() for c in bottom_row)
        top_row = [image.pixel_at(x, 0) for x in range(16)]
        assert all(c.is_black() for c in top_row)
