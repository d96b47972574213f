"""Unit tests for intersection records, hit selection and hit preparation."""

import pytest


class TestIntersection:
    """Tests for Intersection and intersect_shape."""

    def test_encapsulates_t_and_shape(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection

        s = sphere()
        i = Intersection(3.5, s)
        assert i.t == 3.5
        assert i.shape is s
        assert i.shape_index == -1

    def test_intersect_shape_tags_results(self):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import intersect_shape

        s = sphere()
        xs = intersect_shape(s, Ray(point(0, 0, -5), vector(0, 0, 1)), 3)
        assert [i.t for i in xs] == pytest.approx([4.0, 6.0])
        assert all(i.shape is s and i.shape_index == 3 for i in xs)

    def test_sort_breaks_ties_by_index(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, sort_intersections

        s = sphere()
        xs = sort_intersections(
            [Intersection(2.0, s, 1), Intersection(1.0, s, 5), Intersection(2.0, s, 0)]
        )
        assert [(i.t, i.shape_index) for i in xs] == [(1.0, 5), (2.0, 0), (2.0, 1)]


class TestHit:
    """Tests for hit()."""

    def test_all_positive(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        s = sphere()
        i1 = Intersection(1, s)
        i2 = Intersection(2, s)
        assert hit([i2, i1]) is i1

    def test_some_negative(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        s = sphere()
        i1 = Intersection(-1, s)
        i2 = Intersection(1, s)
        assert hit([i2, i1]) is i2

    def test_all_negative(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        s = sphere()
        assert hit([Intersection(-2, s), Intersection(-1, s)]) is None

    def test_empty(self):
        from raytracer.scene.intersection import hit

        assert hit([]) is None

    def test_lowest_non_negative_of_unsorted(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        s = sphere()
        xs = [Intersection(5, s), Intersection(7, s), Intersection(-3, s), Intersection(2, s)]
        assert hit(xs) is xs[3]

    def test_zero_counts_as_visible(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        s = sphere()
        i0 = Intersection(0.0, s)
        assert hit([Intersection(1.0, s), i0]) is i0

    def test_tie_goes_to_earlier_shape(self):
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, hit

        a = sphere()
        b = sphere()
        xs = [Intersection(1.0, b, 1), Intersection(1.0, a, 0)]
        assert hit(xs).shape is a


class TestPrepareComputations:
    """Tests for prepare_computations()."""

    def test_outside_hit(self, front_ray):
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, prepare_computations

        s = sphere()
        comps = prepare_computations(Intersection(4, s), front_ray)
        assert comps.t == 4
        assert comps.shape is s
        assert comps.point == point(0, 0, -1)
        assert comps.eye_vector == vector(0, 0, -1)
        assert comps.normal == vector(0, 0, -1)
        assert not comps.inside

    def test_inside_hit_flips_normal(self):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import point, vector
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, prepare_computations

        r = Ray(point(0, 0, 0), vector(0, 0, 1))
        comps = prepare_computations(Intersection(1, sphere()), r)
        assert comps.point == point(0, 0, 1)
        assert comps.eye_vector == vector(0, 0, -1)
        assert comps.inside
        assert comps.normal == vector(0, 0, -1)

    def test_over_point_is_above_surface(self, front_ray):
        from raytracer.core.transform import translation
        from raytracer.core.tuples import EPSILON
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, prepare_computations

        s = sphere(translation(0, 0, 1))
        comps = prepare_computations(Intersection(5, s), front_ray)
        assert comps.over_point.z < -EPSILON / 2
        assert comps.point.z > comps.over_point.z

    def test_eye_vector_is_unit_for_long_directions(self):
        from raytracer.core.ray import Ray
        from raytracer.core.tuples import magnitude, point, vector
        from raytracer.geometry.shape import sphere
        from raytracer.scene.intersection import Intersection, prepare_computations

        r = Ray(point(0, 0, -5), vector(0, 0, 4))
        comps = prepare_computations(Intersection(1, sphere()), r)
        assert magnitude(comps.eye_vector) == pytest.approx(1.0)
