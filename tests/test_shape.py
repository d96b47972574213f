"""Unit tests for the Shape variant shared by every primitive."""

import pytest


class TestShape:
    """Tests for construction and dispatch."""

    def test_kinds(self):
        from raytracer.geometry.shape import ShapeKind, plane, sphere

        assert sphere().kind == ShapeKind.SPHERE
        assert plane().kind == ShapeKind.PLANE

    def test_default_material(self):
        from raytracer.geometry.shape import sphere
        from raytracer.materials.phong import Material

        assert sphere().material == Material()

    def test_assigned_material(self):
        from raytracer.core.tuples import Color
        from raytracer.geometry.shape import sphere
        from raytracer.materials.phong import Material

        m = Material(color=Color(1, 0, 0), ambient=1.0)
        assert sphere(material=m).material.ambient == 1.0

    def test_casts_shadow_by_default(self):
        from raytracer.geometry.shape import plane, sphere

        assert sphere().casts_shadow
        assert not plane(casts_shadow=False).casts_shadow

    def test_inverse_is_precomputed(self):
        from raytracer.core.transform import translation
        from raytracer.geometry.shape import sphere

        s = sphere(translation(2, 3, 4))
        assert s.inverse == translation(-2, -3, -4)
        assert s.inverse_transpose == translation(-2, -3, -4).transpose()

    def test_singular_transform_raises(self):
        from raytracer.core.matrix import NonInvertibleMatrixError
        from raytracer.core.transform import scaling
        from raytracer.geometry.shape import sphere

        with pytest.raises(NonInvertibleMatrixError):
            sphere(scaling(1, 0, 1))

    def test_tiny_sphere_is_constructible(self):
        from raytracer.core.ray import Ray
        from raytracer.core.transform import uniform_scaling
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import sphere

        s = sphere(uniform_scaling(0.02))
        xs = s.intersect(Ray(point(0, 0, -50), vector(0, 0, 1)))
        assert len(xs) == 2
        assert abs(xs[0] - 49.98) < 1e-6
        assert abs(xs[1] - 50.02) < 1e-6

    def test_shapes_are_immutable(self):
        from dataclasses import FrozenInstanceError

        from raytracer.geometry.shape import sphere

        s = sphere()
        with pytest.raises(FrozenInstanceError):
            s.casts_shadow = False

    def test_local_intersect_dispatches_by_kind(self):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import plane, sphere

        r = Ray(point(0, 1, -5), vector(0, -1, 5))
        assert len(sphere().local_intersect(r)) == 2
        assert plane().local_intersect(r) == pytest.approx((1.0,))
