# geometry/moving_sphere.py
import random
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.sphere import hit_sphere


class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. Rays are intersected against the center at the ray's own time.
    """
    def __init__(self, center0: Vector3, center1: Vector3,
                 time0: float, time1: float, radius: float, material):
        if time0 == time1:
            raise ValueError("MovingSphere needs a non-empty time interval")
        if radius == 0:
            raise ValueError("Sphere radius must be non-zero")
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.center0 + (self.center1 - self.center0) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return hit_sphere(self.center(ray.time), self.radius, self.material,
                          ray, t_min, t_max)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        # Union of the boxes at both ends of the shutter interval.
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        c0 = self.center(time0)
        c1 = self.center(time1)
        box0 = AABB(c0 - offset, c0 + offset)
        box1 = AABB(c1 - offset, c1 + offset)
        return AABB.surrounding_box(box0, box1)
