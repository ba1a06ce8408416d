# materials/diffuse_light.py
import random
from typing import Union
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material
from pathtracer.materials.textures import Texture, as_texture


class DiffuseLight(Material):
    """
    Area light: emits the radiance of its texture at every hit point, from both
    sides, and absorbs whatever arrives.
    """
    def __init__(self, emit: Union[Vector3, Texture]):
        self.texture = as_texture(emit)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng=random) -> None:
        # Paths end on a light.
        return None

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.texture.value(u, v, p)
