# geometry/rotate.py
import math
import random
from enum import Enum
from typing import Optional
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Axis(Enum):
    """Rotation axis, valued as (r_axis, a_axis, b_axis)."""
    X = (0, 1, 2)
    Y = (1, 2, 0)
    Z = (2, 0, 1)


class Rotate(Hittable):
    """
    Rotates another object by `angle` degrees about a coordinate axis.

    The rotation acts on the (a_axis, b_axis) plane:
        a' = cos(θ)·a - sin(θ)·b
        b' = sin(θ)·a + cos(θ)·b
    Rays are taken into object space with -θ, hit points and normals are
    brought back with +θ.
    """
    def __init__(self, axis: Axis, hittable: Hittable, angle: float):
        self.axis = axis
        self.hittable = hittable
        self.angle = angle
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = self._rotated_box(hittable.bounding_box(0.0, 1.0))

    def _rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        _, a_axis, b_axis = self.axis.value
        a = v[a_axis]
        b = v[b_axis]
        coords = [v.x, v.y, v.z]
        coords[a_axis] = self.cos_theta * a - sin_theta * b
        coords[b_axis] = sin_theta * a + self.cos_theta * b
        return Vector3(*coords)

    def to_world(self, v: Vector3) -> Vector3:
        return self._rotate(v, self.sin_theta)

    def to_local(self, v: Vector3) -> Vector3:
        return self._rotate(v, -self.sin_theta)

    def _rotated_box(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        minimum = [math.inf, math.inf, math.inf]
        maximum = [-math.inf, -math.inf, -math.inf]
        for corner in box.corners():
            rotated = self.to_world(corner)
            for axis in range(3):
                minimum[axis] = min(minimum[axis], rotated[axis])
                maximum[axis] = max(maximum[axis], rotated[axis])
        return AABB(Vector3(*minimum), Vector3(*maximum))

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        rotated_ray = Ray(self.to_local(ray.origin), self.to_local(ray.direction), ray.time)
        inner = self.hittable.hit(rotated_ray, t_min, t_max, rng)
        if inner is None:
            return None

        # The stored normal opposes the local ray; undo that to get the outward one.
        outward_local = inner.normal if inner.front_face else -inner.normal
        rec = inner.copy()
        rec.p = self.to_world(inner.p)
        rec.set_face_normal(ray, self.to_world(outward_local))
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> Optional[AABB]:
        return self.box
