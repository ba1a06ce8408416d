# materials/material.py
import random
from typing import Optional, Tuple
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord

BLACK = Vector3(0.0, 0.0, 0.0)


class Material:
    """
    Abstract material class. Subclasses must implement scatter().

    Materials never keep state between calls; any randomness is drawn from the
    `rng` passed in (anything with random() and uniform(a, b)).
    """
    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng=random) -> Optional[Tuple[Vector3, Ray]]:
        """
        Computes the attenuation and the scattered ray.
        Returns a tuple (attenuation, scattered_ray) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        """
        Radiance emitted at the hit point. Only lights emit anything.
        """
        return BLACK
