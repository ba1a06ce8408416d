# geometry/translate.py
import random
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    """
    Moves another object by a fixed offset. Rays are moved by -offset into the
    object's space and hit points moved back by +offset.
    """
    def __init__(self, hittable: Hittable, offset: Vector3):
        self.hittable = hittable
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        moved_ray = Ray(ray.origin - self.offset, ray.direction, ray.time)
        inner = self.hittable.hit(moved_ray, t_min, t_max, rng)
        if inner is None:
            return None

        rec = inner.copy()
        rec.p = inner.p + self.offset
        rec.set_face_normal(moved_ray, inner.normal if inner.front_face else -inner.normal)
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.hittable.bounding_box(time0, time1)
        if box is None:
            return None
        return box.translated(self.offset)
