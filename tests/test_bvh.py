"""Unit tests for BVH construction and traversal.

Tests cover:
- Equivalence with a linear scan over the same objects
- Node boxes enclosing their subtrees
- Split axis and ordering
- Construction errors
"""

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.bvh import BVHConstructionError, BVHNode
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.moving_sphere import MovingSphere
from pathtracer.geometry.rect import Plane, Rect
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList


def _random_scene(seed, count):
    rng = random.Random(seed)
    world = HittableList()
    for _ in range(count):
        center = Vector3(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10))
        kind = rng.random()
        if kind < 0.6:
            world.add(Sphere(center, rng.uniform(0.2, 1.5), None))
        elif kind < 0.8:
            world.add(MovingSphere(center, center + Vector3(0.0, 1.0, 0.0), 0.0, 1.0,
                                   rng.uniform(0.2, 1.0), None))
        else:
            world.add(Rect(Plane.XY, center.x, center.x + 2.0, center.y, center.y + 1.0,
                           center.z, None))
    return world


def _box_contains(outer, inner):
    return all(outer.minimum[a] <= inner.minimum[a] and inner.maximum[a] <= outer.maximum[a]
               for a in range(3))


class TestBVHTraversal:
    """The BVH reports the same closest hit as a linear scan."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_matches_linear_scan(self, seed):
        world = _random_scene(seed, 60)
        bvh = world.build_bvh(0.0, 1.0)
        rng = random.Random(seed + 100)

        for _ in range(300):
            origin = Vector3(rng.uniform(-20, 20), rng.uniform(-20, 20), rng.uniform(-20, 20))
            direction = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
            ray = Ray(origin, direction, rng.random())

            expected = world.hit(ray, 0.001, math.inf)
            actual = bvh.hit(ray, 0.001, math.inf)
            if expected is None:
                assert actual is None
            else:
                assert actual is not None
                assert actual.t == pytest.approx(expected.t)

    def test_axis_parallel_rays(self):
        world = _random_scene(9, 40)
        bvh = world.build_bvh(0.0, 1.0)
        for axis in range(3):
            for sign in (1.0, -1.0):
                direction = Vector3(0.0, 0.0, 0.0).with_axis(axis, sign)
                for offset in range(-10, 11, 2):
                    origin = Vector3(offset * 0.7, offset * 0.3, offset * 0.5).with_axis(axis, -20.0 * sign)
                    ray = Ray(origin, direction, 0.5)
                    expected = world.hit(ray, 0.001, math.inf)
                    actual = bvh.hit(ray, 0.001, math.inf)
                    assert (expected is None) == (actual is None)
                    if expected is not None:
                        assert actual.t == pytest.approx(expected.t)


class TestBVHConstruction:
    """Tests for the tree built over a set of objects."""

    def test_every_node_box_encloses_children(self):
        bvh = _random_scene(4, 50).build_bvh(0.0, 1.0)

        def check(node):
            if node.is_leaf:
                assert _box_contains(node.box, node.object.bounding_box(0.0, 1.0))
                return
            assert _box_contains(node.box, node.left.box)
            assert _box_contains(node.box, node.right.box)
            check(node.left)
            check(node.right)

        check(bvh)

    def test_all_objects_are_leaves_once(self):
        world = _random_scene(5, 33)
        bvh = world.build_bvh(0.0, 1.0)
        leaves = list(bvh.leaves())
        assert len(leaves) == len(world)
        assert {id(o) for o in leaves} == {id(o) for o in world}

    def test_depth_is_logarithmic(self):
        bvh = _random_scene(6, 64).build_bvh(0.0, 1.0)
        assert bvh.depth() == 7

    def test_splits_on_widest_axis_in_order(self):
        spheres = [Sphere(Vector3(0.0, 0.0, z), 0.5, None) for z in (4.0, -2.0, 0.0, 10.0)]
        bvh = BVHNode.build(spheres)
        assert [s.center.z for s in bvh.leaves()] == [-2.0, 0.0, 4.0, 10.0]
        assert [s.center.z for s in bvh.left.leaves()] == [-2.0, 0.0]

    def test_equal_centroids_keep_input_order(self):
        spheres = [Sphere(Vector3(0.0, 0.0, 0.0), r, None) for r in (1.0, 2.0, 3.0)]
        bvh = BVHNode.build(spheres)
        assert [s.radius for s in bvh.leaves()] == [1.0, 2.0, 3.0]

    def test_single_object_is_leaf(self):
        sphere = Sphere(Vector3(1.0, 2.0, 3.0), 1.0, None)
        bvh = BVHNode.build([sphere])
        assert bvh.is_leaf
        assert bvh.object is sphere

    def test_input_is_not_mutated(self):
        world = _random_scene(8, 20)
        before = list(world.objects)
        world.build_bvh(0.0, 1.0)
        assert world.objects == before

    def test_empty_input_rejected(self):
        with pytest.raises(BVHConstructionError):
            BVHNode.build([])

    def test_unbounded_object_rejected(self):
        unbounded = ConstantMedium(HittableList(), 1.0, Vector3(1.0, 1.0, 1.0))
        with pytest.raises(BVHConstructionError):
            BVHNode.build([Sphere(Vector3(0, 0, 0), 1.0, None), unbounded])

    def test_construction_error_is_value_error(self):
        with pytest.raises(ValueError):
            HittableList().build_bvh()
