# materials/metal.py
import random
from typing import Optional, Tuple, Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import reflect, random_in_unit_sphere
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class Metal(Material):
    """
    Metal material with reflective properties and optional texture support.

    fuzz scales a random perturbation of the mirror direction. It is not
    clamped: large values send most rays below the surface, where they are
    absorbed.
    """
    def __init__(self, albedo: Union[Vector3, Texture], fuzz: float = 0.0):
        self.texture = as_texture(albedo)
        self.fuzz = fuzz

    def scatter(self, ray_in: Ray, rec: HitRecord,
                rng=random) -> Optional[Tuple[Vector3, Ray]]:
        reflected = reflect(ray_in.direction.normalize(), rec.normal)
        if self.fuzz:
            reflected = (reflected + random_in_unit_sphere(rng) * self.fuzz).normalize()
        scattered = Ray(rec.p, reflected, ray_in.time)

        if scattered.direction.dot(rec.normal) > 0:
            return self.texture.value(rec.u, rec.v, rec.p), scattered

        return None  # Absorb the ray if it does not scatter forward
