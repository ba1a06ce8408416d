"""Unit tests for Vector3, Ray and AABB.

Tests cover:
- Vector arithmetic, element-wise products and indexing
- Ray evaluation
- Slab test including axis-parallel rays with zero direction components
- Surrounding boxes
"""

import math

import pytest

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3


class TestVector3:
    """Tests for vector arithmetic."""

    def test_scalar_and_elementwise_multiplication(self):
        v = Vector3(1.0, 2.0, 3.0)
        assert v * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2 * v == Vector3(2.0, 4.0, 6.0)
        assert v * Vector3(2.0, 0.5, -1.0) == Vector3(2.0, 1.0, -3.0)

    def test_dot_and_cross(self):
        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert x.dot(y) == 0.0
        assert x.cross(y) == Vector3(0.0, 0.0, 1.0)

    def test_normalize(self):
        v = Vector3(3.0, 0.0, 4.0).normalize()
        assert v.length() == pytest.approx(1.0)
        assert Vector3(0.0, 0.0, 0.0).normalize() == Vector3(0, 0, 0)

    def test_indexing_and_with_axis(self):
        v = Vector3(1.0, 2.0, 3.0)
        assert [v[0], v[1], v[2]] == [1.0, 2.0, 3.0]
        assert list(v) == [1.0, 2.0, 3.0]
        assert v.with_axis(1, 9.0) == Vector3(1.0, 9.0, 3.0)
        with pytest.raises(IndexError):
            v[3]

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0.0).near_zero()
        assert not Vector3(1e-7, 0.0, 0.0).near_zero()


class TestRay:
    def test_at(self):
        ray = Ray(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0), time=0.5)
        assert ray.at(1.5) == Vector3(1.0, 3.0, 0.0)
        assert ray.time == 0.5


class TestAABB:
    """Tests for the slab intersection test."""

    def setup_method(self):
        self.box = AABB(Vector3(-1.0, -1.0, -1.0), Vector3(1.0, 1.0, 1.0))

    def test_ray_through_box_hits(self):
        ray = Ray(Vector3(0.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
        assert self.box.hit(ray, 0.001, math.inf)

    def test_ray_beside_box_misses(self):
        ray = Ray(Vector3(3.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
        assert not self.box.hit(ray, 0.001, math.inf)

    def test_box_behind_ray_misses(self):
        ray = Ray(Vector3(0.0, 0.0, 5.0), Vector3(0.0, 0.0, 1.0))
        assert not self.box.hit(ray, 0.001, math.inf)

    def test_interval_ending_before_box_misses(self):
        ray = Ray(Vector3(0.0, 0.0, -5.0), Vector3(0.0, 0.0, 1.0))
        assert not self.box.hit(ray, 0.001, 3.0)

    def test_negative_direction_hits(self):
        ray = Ray(Vector3(0.5, 0.5, 5.0), Vector3(0.0, 0.0, -1.0))
        assert self.box.hit(ray, 0.001, math.inf)

    def test_zero_direction_component_inside_slab(self):
        """A ray parallel to a slab and inside it is not rejected by that slab."""
        ray = Ray(Vector3(0.0, 0.5, -5.0), Vector3(0.0, 0.0, 1.0))
        assert self.box.hit(ray, 0.001, math.inf)

    def test_zero_direction_component_outside_slab(self):
        ray = Ray(Vector3(0.0, 2.0, -5.0), Vector3(0.0, 0.0, 1.0))
        assert not self.box.hit(ray, 0.001, math.inf)

    def test_surrounding_box_is_tight(self):
        a = AABB(Vector3(0.0, -2.0, 1.0), Vector3(1.0, 0.0, 2.0))
        b = AABB(Vector3(-1.0, 1.0, 0.0), Vector3(0.5, 3.0, 1.5))
        box = AABB.surrounding_box(a, b)
        assert box.minimum == Vector3(-1.0, -2.0, 0.0)
        assert box.maximum == Vector3(1.0, 3.0, 2.0)

    def test_corners(self):
        corners = set(self.box.corners())
        assert len(corners) == 8
        assert Vector3(-1.0, 1.0, -1.0) in corners
