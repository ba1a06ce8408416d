# geometry/bvh.py
import logging
import random
from typing import List, Optional, Sequence
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)


class BVHConstructionError(ValueError):
    """Raised when a BVH cannot be built from the given objects."""


def _longest_axis(boxes: Sequence[AABB]) -> int:
    """Axis along which the union of the boxes is widest (lowest index on ties)."""
    best_axis = 0
    best_extent = None
    for axis in range(3):
        lo = min(box.minimum[axis] for box in boxes)
        hi = max(box.maximum[axis] for box in boxes)
        extent = hi - lo
        if best_extent is None or extent > best_extent:
            best_axis = axis
            best_extent = extent
    return best_axis


class BVHNode(Hittable):
    """
    Binary bounding volume hierarchy over a fixed set of objects.

    A node is either a leaf wrapping one object, or a branch owning two
    subtrees. Every node caches the box surrounding its whole subtree.
    """
    def __init__(self, objects: List[Hittable], boxes: List[AABB],
                 time0: float, time1: float):
        if len(objects) == 1:
            self.is_leaf = True
            self.object = objects[0]
            self.left = self.right = None
            self.box = boxes[0]
            return

        axis = _longest_axis(boxes)
        # Stable sort by box center; ties keep the input order.
        order = sorted(range(len(objects)), key=lambda i: boxes[i].centroid(axis))
        objects = [objects[i] for i in order]
        boxes = [boxes[i] for i in order]

        mid = len(objects) // 2
        self.is_leaf = False
        self.object = None
        self.left = BVHNode(objects[:mid], boxes[:mid], time0, time1)
        self.right = BVHNode(objects[mid:], boxes[mid:], time0, time1)
        self.box = AABB.surrounding_box(self.left.box, self.right.box)

    @classmethod
    def build(cls, objects: Sequence[Hittable], time0: float = 0.0,
              time1: float = 1.0) -> "BVHNode":
        """
        Builds a BVH over `objects` for the shutter interval [time0, time1].

        The input sequence is not modified. Raises BVHConstructionError when
        it is empty or when any object cannot report a bounding box.
        """
        objects = list(objects)
        if not objects:
            raise BVHConstructionError("Cannot build a BVH from an empty object list")

        boxes = []
        for obj in objects:
            box = obj.bounding_box(time0, time1)
            if box is None:
                raise BVHConstructionError(f"No bounding box in BVH input: {obj!r}")
            boxes.append(box)

        root = cls(objects, boxes, time0, time1)
        logger.debug("Built BVH over %d objects (depth %d)", len(objects), root.depth())
        return root

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        if self.is_leaf:
            return self.object.hit(ray, t_min, t_max, rng)

        hit_left = self.left.hit(ray, t_min, t_max, rng)
        # Anything on the right must be closer than the left hit to matter.
        if hit_left is not None:
            t_max = hit_left.t
        hit_right = self.right.hit(ray, t_min, t_max, rng)

        if hit_right is not None:
            return hit_right
        return hit_left

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        return self.box

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def leaves(self):
        """Objects in leaf order, left to right."""
        if self.is_leaf:
            yield self.object
            return
        yield from self.left.leaves()
        yield from self.right.leaves()
