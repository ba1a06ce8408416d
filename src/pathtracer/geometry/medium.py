# geometry/medium.py
import math
import random
from typing import Optional, Union
from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.core.utils import exponential_free_flight
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.textures import Texture

# Gap used when looking for the exit point past the entry point.
EXIT_EPSILON = 1e-4
# Arbitrary: phase functions inside the medium ignore surface orientation.
MEDIUM_NORMAL = Vector3(1.0, 0.0, 0.0)


class ConstantMedium(Hittable):
    """
    Homogeneous fog or smoke filling a closed boundary object.

    A ray travelling a distance L inside the boundary scatters with probability
    1 - exp(-density * L); the scatter point is drawn from the exponential
    free-flight distribution.
    """
    def __init__(self, boundary: Hittable, density: float,
                 albedo: Union[Vector3, Texture]):
        if density <= 0:
            raise ValueError(f"Medium density must be positive, got {density}")
        self.boundary = boundary
        self.density = density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=random) -> Optional[HitRecord]:
        entry = self.boundary.hit(ray, -math.inf, math.inf, rng)
        if entry is None:
            return None
        exit_ = self.boundary.hit(ray, entry.t + EXIT_EPSILON, math.inf, rng)
        if exit_ is None:
            return None

        t_enter = max(entry.t, t_min)
        t_exit = min(exit_.t, t_max)
        if t_enter >= t_exit:
            return None
        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        hit_distance = exponential_free_flight(self.density, rng)
        if hit_distance >= distance_inside_boundary:
            return None

        rec = HitRecord()
        rec.t = t_enter + hit_distance / ray_length
        rec.p = ray.at(rec.t)
        rec.u = 0.0
        rec.v = 0.0
        rec.set_face_normal(ray, MEDIUM_NORMAL)
        rec.material = self.phase_function
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.boundary.bounding_box(time0, time1)
