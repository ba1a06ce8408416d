# geometry/rect.py
import random
from enum import Enum
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

# Half-thickness given to the box of a planar primitive.
RECT_PADDING = 1e-4


class Plane(Enum):
    """Coordinate plane of a rectangle, valued as (k_axis, a_axis, b_axis)."""
    YZ = (0, 1, 2)
    ZX = (1, 2, 0)
    XY = (2, 0, 1)


class Rect(Hittable):
    """
    Axis-aligned rectangle lying on the plane k_axis = k and spanning
    [a0, a1] x [b0, b1] on the two remaining axes.
    """
    def __init__(self, plane: Plane, a0: float, a1: float,
                 b0: float, b1: float, k: float, material):
        if a0 == a1 or b0 == b1:
            raise ValueError(f"Degenerate rectangle: [{a0}, {a1}] x [{b0}, {b1}]")
        self.plane = plane
        self.a0 = min(a0, a1)
        self.a1 = max(a0, a1)
        self.b0 = min(b0, b1)
        self.b1 = max(b0, b1)
        self.k = k
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        k_axis, a_axis, b_axis = self.plane.value
        d_k = ray.direction[k_axis]
        if d_k == 0.0:
            # Parallel to the plane.
            return None

        t = (self.k - ray.origin[k_axis]) / d_k
        if t < t_min or t > t_max:
            return None

        a = ray.origin[a_axis] + t * ray.direction[a_axis]
        b = ray.origin[b_axis] + t * ray.direction[b_axis]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = ray.at(t)
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        outward_normal = Vector3.zero().with_axis(k_axis, 1.0)
        rec.set_face_normal(ray, outward_normal)
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        k_axis, a_axis, b_axis = self.plane.value
        minimum = [0.0, 0.0, 0.0]
        maximum = [0.0, 0.0, 0.0]
        minimum[k_axis] = self.k - RECT_PADDING
        maximum[k_axis] = self.k + RECT_PADDING
        minimum[a_axis] = self.a0
        maximum[a_axis] = self.a1
        minimum[b_axis] = self.b0
        maximum[b_axis] = self.b1
        return AABB(Vector3(*minimum), Vector3(*maximum))

    def __repr__(self) -> str:
        return (f"Rect({self.plane.name}, a=[{self.a0}, {self.a1}], "
                f"b=[{self.b0}, {self.b1}], k={self.k})")
