# geometry/sphere.py
import math
import random
from typing import Optional, Tuple
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.core.aabb import AABB


def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
    """
    Maps a point on the unit sphere to texture coordinates.

    u: angle around the Y axis from X=-1, normalized to [0, 1].
    v: angle from Y=-1 up to Y=+1, normalized to [0, 1].
    """
    phi = math.atan2(-p.z, p.x) + math.pi
    # Clamped so rounding on the poles cannot leave acos' domain.
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    return phi / (2.0 * math.pi), theta / math.pi


def hit_sphere(center: Vector3, radius: float, material, ray: Ray,
               t_min: float, t_max: float) -> Optional[HitRecord]:
    """Shared quadratic solve for static and moving spheres."""
    oc = ray.origin - center
    a = ray.direction.dot(ray.direction)
    half_b = oc.dot(ray.direction)
    c = oc.dot(oc) - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None

    rec = HitRecord()
    rec.t = root
    rec.p = ray.at(rec.t)
    outward_normal = (rec.p - center) / radius
    rec.set_face_normal(ray, outward_normal)
    rec.u, rec.v = get_sphere_uv(outward_normal)
    rec.material = material
    return rec


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius == 0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        return hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def bounding_box(self, time0: float = 0.0, time1: float = 1.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"
