# geometry/box.py
import random
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.rect import Plane, Rect
from pathtracer.geometry.world import HittableList


class Cube(Hittable):
    """
    Axis-aligned box between two corners, made of six rectangles that share
    one material.
    """
    def __init__(self, p0: Vector3, p1: Vector3, material):
        self.box_min = Vector3(min(p0.x, p1.x), min(p0.y, p1.y), min(p0.z, p1.z))
        self.box_max = Vector3(max(p0.x, p1.x), max(p0.y, p1.y), max(p0.z, p1.z))
        lo, hi = self.box_min, self.box_max

        self.sides = HittableList([
            Rect(Plane.XY, lo.x, hi.x, lo.y, hi.y, hi.z, material),
            Rect(Plane.XY, lo.x, hi.x, lo.y, hi.y, lo.z, material),
            Rect(Plane.ZX, lo.z, hi.z, lo.x, hi.x, hi.y, material),
            Rect(Plane.ZX, lo.z, hi.z, lo.x, hi.x, lo.y, material),
            Rect(Plane.YZ, lo.y, hi.y, lo.z, hi.z, hi.x, material),
            Rect(Plane.YZ, lo.y, hi.y, lo.z, hi.z, lo.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        # Exact corners; tighter than the union of the padded sides.
        return AABB(self.box_min, self.box_max)

    def __repr__(self) -> str:
        return f"Cube({self.box_min!r}, {self.box_max!r})"
