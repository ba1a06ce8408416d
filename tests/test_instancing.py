"""Unit tests for Translate and Rotate wrappers.

Tests cover:
- Hit points and normals moved back into world space
- Bounding boxes of moved and rotated objects
- Normals opposing the incoming ray for every wrapped hit
- Translate and Rotate undone by their inverses
"""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.box import Cube
from pathtracer.geometry.rotate import Axis, Rotate
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.translate import Translate


class TestTranslate:
    """Tests for translated objects."""

    def test_hit_matches_sphere_at_offset(self, grey):
        offset = Vector3(3.0, -1.0, 2.0)
        moved = Translate(Sphere(Vector3(0.0, 0.0, 0.0), 1.0, grey), offset)
        direct = Sphere(offset, 1.0, grey)
        ray = Ray(Vector3(3.2, -0.9, -10.0), Vector3(0.0, 0.0, 1.0))

        a = moved.hit(ray, 0.001, math.inf)
        b = direct.hit(ray, 0.001, math.inf)
        assert a.t == pytest.approx(b.t)
        assert a.p.is_close(b.p)
        assert a.normal.is_close(b.normal)
        assert a.front_face == b.front_face

    def test_bounding_box_is_shifted(self, grey):
        moved = Translate(Sphere(Vector3(0.0, 0.0, 0.0), 1.0, grey), Vector3(10.0, 0.0, 0.0))
        box = moved.bounding_box(0.0, 1.0)
        assert box.minimum == Vector3(9.0, -1.0, -1.0)
        assert box.maximum == Vector3(11.0, 1.0, 1.0)

    def test_hit_point_is_shifted(self, grey):
        sphere = Sphere(Vector3(0.0, 0.0, 0.0), 1.0, grey)
        moved = Translate(sphere, Vector3(5.0, 0.0, 0.0))
        ray = Ray(Vector3(5.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
        rec = moved.hit(ray, 0.001, math.inf)
        assert rec.p.is_close(Vector3(5.0, 0.0, -1.0))


class TestRotate:
    """Tests for rotated objects."""

    def test_world_local_round_trip(self):
        for axis in Axis:
            rot = Rotate(axis, Sphere(Vector3(0.0, 0.0, 0.0), 1.0, None), 37.0)
            v = Vector3(0.3, -1.2, 2.5)
            assert rot.to_world(rot.to_local(v)).is_close(v)
            assert rot.to_local(rot.to_world(v)).is_close(v)

    def test_rotate_y_quarter_turn(self):
        rot = Rotate(Axis.Y, Sphere(Vector3(0.0, 0.0, 0.0), 1.0, None), 90.0)
        # Rotation about Y acts on (z, x): z' = cos·z - sin·x, x' = sin·z + cos·x.
        assert rot.to_world(Vector3(0.0, 0.0, 1.0)).is_close(Vector3(1.0, 0.0, 0.0))

    def test_rotated_sphere_is_found_at_rotated_center(self, grey):
        rot = Rotate(Axis.Y, Sphere(Vector3(0.0, 0.0, 3.0), 1.0, grey), 90.0)
        ray = Ray(Vector3(3.0, 10.0, 0.0), Vector3(0.0, -1.0, 0.0))
        rec = rot.hit(ray, 0.001, math.inf)
        assert rec is not None
        assert rec.p.is_close(Vector3(3.0, 1.0, 0.0))
        assert rec.normal.is_close(Vector3(0.0, 1.0, 0.0))
        assert rec.front_face

    def test_bounding_box_contains_rotated_corners(self, grey):
        cube = Cube(Vector3(0.0, 0.0, 0.0), Vector3(1.0, 2.0, 1.0), grey)
        rot = Rotate(Axis.Y, cube, 45.0)
        box = rot.bounding_box(0.0, 1.0)
        diagonal = math.sqrt(2.0)
        assert box.maximum.x - box.minimum.x == pytest.approx(diagonal)
        assert box.maximum.z - box.minimum.z == pytest.approx(diagonal)
        assert box.minimum.y == pytest.approx(0.0)
        assert box.maximum.y == pytest.approx(2.0)

    def test_unbounded_inner_object_has_no_box(self):
        class Unbounded:
            def bounding_box(self, time0, time1):
                return None

        assert Rotate(Axis.X, Unbounded(), 10.0).bounding_box(0.0, 1.0) is None


class TestNormalsOpposeRay:
    """Every hit through a wrapper reports a normal facing the incoming ray."""

    @pytest.mark.parametrize("angle", [-18.0, 15.0, 90.0, 200.0])
    def test_translated_rotated_cube(self, grey, rng, angle):
        obj = Translate(
            Rotate(Axis.Y, Cube(Vector3(-0.5, -0.5, -0.5), Vector3(0.5, 0.5, 0.5), grey), angle),
            Vector3(2.0, 0.0, 1.0),
        )
        hits = 0
        for _ in range(200):
            origin = Vector3(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            target = Vector3(2.0, 0.0, 1.0)
            ray = Ray(origin, target - origin)
            rec = obj.hit(ray, 0.001, math.inf)
            if rec is None:
                continue
            hits += 1
            assert rec.normal.dot(ray.direction) <= 0.0
        assert hits > 0


def _random_rays(rng, target_min, target_max, count=300):
    """Rays from a shell around the scene towards points of a target box."""
    for _ in range(count):
        origin = Vector3(rng.uniform(-6, 6), rng.uniform(-6, 6), rng.uniform(-6, 6))
        target = Vector3(rng.uniform(target_min.x, target_max.x),
                         rng.uniform(target_min.y, target_max.y),
                         rng.uniform(target_min.z, target_max.z))
        yield Ray(origin, target - origin)


class TestInverseWrappers:
    """Undoing a wrapper with its inverse gives back the original hits."""

    def _assert_same_hits(self, obj, wrapped, rng):
        box = obj.bounding_box(0.0, 1.0)
        hits = 0
        for ray in _random_rays(rng, box.minimum - Vector3(0.5, 0.5, 0.5),
                                box.maximum + Vector3(0.5, 0.5, 0.5)):
            expected = obj.hit(ray, 0.001, math.inf)
            actual = wrapped.hit(ray, 0.001, math.inf)
            assert (actual is None) == (expected is None)
            if expected is None:
                continue
            hits += 1
            assert actual.t == pytest.approx(expected.t, abs=1e-6)
            assert actual.p.is_close(expected.p)
            assert actual.normal.is_close(expected.normal)
            assert actual.normal.dot(ray.direction) <= 0.0
        assert hits > 0

    def test_translate_there_and_back(self, grey, rng):
        obj = Cube(Vector3(0.5, -0.5, 1.0), Vector3(1.5, 0.5, 2.0), grey)
        offset = Vector3(3.0, -2.0, 0.7)
        self._assert_same_hits(obj, Translate(Translate(obj, offset), -offset), rng)

    @pytest.mark.parametrize("axis", list(Axis))
    def test_rotate_there_and_back(self, grey, rng, axis):
        obj = Cube(Vector3(0.5, -0.5, 1.0), Vector3(1.5, 0.5, 2.0), grey)
        self._assert_same_hits(obj, Rotate(axis, Rotate(axis, obj, 37.0), -37.0), rng)

    def test_sphere_through_both_wrappers(self, grey, rng):
        obj = Sphere(Vector3(1.0, 0.5, -1.0), 1.2, grey)
        offset = Vector3(-2.0, 1.0, 4.0)
        wrapped = Translate(Rotate(Axis.Y, Rotate(Axis.Y, Translate(obj, offset), 60.0), -60.0),
                            -offset)
        self._assert_same_hits(obj, wrapped, rng)
