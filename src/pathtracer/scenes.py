# scenes.py
"""
Demo scenes. Every builder takes a random generator (for scene layout only)
and returns a Scene whose camera is created for the requested aspect ratio.
"""
import logging
import os
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional
from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.core.utils import random_vector
from pathtracer.geometry.box import Cube
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.medium import ConstantMedium
from pathtracer.geometry.moving_sphere import MovingSphere
from pathtracer.geometry.rect import Plane, Rect
from pathtracer.geometry.rotate import Axis, Rotate
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.translate import Translate
from pathtracer.geometry.world import HittableList
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.materials.texture_loader import create_image_material
from pathtracer.materials.textures import CheckerTexture, NoiseTexture, SpatialCheckerTexture

logger = logging.getLogger(__name__)

UP = Vector3(0.0, 1.0, 0.0)


@dataclass
class Scene:
    world: Hittable
    lookfrom: Vector3
    lookat: Vector3
    vfov: float = 20.0
    aperture: float = 0.0
    focus_dist: float = 10.0

    def camera(self, aspect_ratio: float) -> Camera:
        return Camera(self.lookfrom, self.lookat, UP, self.vfov, aspect_ratio,
                      aperture=self.aperture, focus_dist=self.focus_dist,
                      time0=0.0, time1=1.0)


def random_spheres(rng=random) -> Scene:
    """Ground, three large spheres and a grid of small random spheres; diffuse ones bounce."""
    world = HittableList()
    ground = Lambertian(SpatialCheckerTexture(Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9)))
    world.add(Sphere(Vector3(0, -1000, 0), 1000, ground))

    for a in range(-11, 12):
        for b in range(-11, 12):
            choose_mat = rng.random()
            center = Vector3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Vector3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                albedo = random_vector(rng) * random_vector(rng)
                center2 = center + Vector3(0, rng.uniform(0, 0.5), 0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = random_vector(rng, 0.5, 1.0)
                world.add(Sphere(center, 0.2, Metal(albedo, rng.uniform(0, 0.5))))
            else:
                world.add(Sphere(center, 0.2, Dielectric(1.5)))

    world.add(Sphere(Vector3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Vector3(-4, 1, 0), 1.0, Lambertian(Vector3(0.4, 0.2, 0.1))))
    world.add(Sphere(Vector3(4, 1, 0), 1.0, Metal(Vector3(0.7, 0.6, 0.5), 0.0)))

    return Scene(world.build_bvh(0.0, 1.0), Vector3(13, 2, 3), Vector3(0, 0, 0), aperture=0.1)


def two_spheres(rng=random) -> Scene:
    checker = CheckerTexture(Vector3(0.2, 0.3, 0.1), Vector3(0.9, 0.9, 0.9))
    world = HittableList([
        Sphere(Vector3(0, -10, 0), 10, Lambertian(checker)),
        Sphere(Vector3(0, 10, 0), 10, Lambertian(checker)),
    ])
    return Scene(world, Vector3(13, 2, 3), Vector3(0, 0, 0))


def two_perlin_spheres(rng=random) -> Scene:
    pertext = NoiseTexture(4.0, seed=rng.randrange(2 ** 32))
    world = HittableList([
        Sphere(Vector3(0, -1000, 0), 1000, Lambertian(pertext)),
        Sphere(Vector3(0, 2, 0), 2, Lambertian(pertext)),
    ])
    return Scene(world, Vector3(13, 2, 3), Vector3(0, 0, 0))


def _earth_material(image_path: Optional[str] = None) -> Lambertian:
    image_path = image_path or os.environ.get("PATHTRACER_EARTH_TEXTURE", "earthmap.jpg")
    if os.path.exists(image_path):
        return create_image_material(image_path, Lambertian)
    logger.warning("Texture %s not found, using a checker instead", image_path)
    return Lambertian(CheckerTexture(Vector3(0.1, 0.2, 0.6), Vector3(0.2, 0.6, 0.2), scale=16.0))


def earth(rng=random, image_path: Optional[str] = None) -> Scene:
    """A globe textured from `image_path`, or from a checker when no image is found."""
    globe = Sphere(Vector3(0, 0, 0), 2, _earth_material(image_path))
    return Scene(HittableList([globe]), Vector3(13, 2, 3), Vector3(0, 0, 0))


def simple_light(rng=random) -> Scene:
    pertext = NoiseTexture(4.0, seed=rng.randrange(2 ** 32))
    light = DiffuseLight(Vector3(4, 4, 4))
    world = HittableList([
        Sphere(Vector3(0, -1000, 0), 1000, Lambertian(pertext)),
        Sphere(Vector3(0, 2, 0), 2, Lambertian(pertext)),
        Sphere(Vector3(0, 7, 0), 2, light),
        Rect(Plane.XY, 3, 5, 1, 3, -2, light),
    ])
    return Scene(world, Vector3(26, 3, 6), Vector3(0, 2, 0))


def _cornell_walls(light_rect: Rect) -> HittableList:
    red = Lambertian(Vector3(0.65, 0.05, 0.05))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))
    green = Lambertian(Vector3(0.12, 0.45, 0.15))
    return HittableList([
        Rect(Plane.YZ, 0, 555, 0, 555, 555, green),
        Rect(Plane.YZ, 0, 555, 0, 555, 0, red),
        light_rect,
        Rect(Plane.ZX, 0, 555, 0, 555, 555, white),
        Rect(Plane.ZX, 0, 555, 0, 555, 0, white),
        Rect(Plane.XY, 0, 555, 0, 555, 555, white),
    ])


def _cornell_blocks(material):
    tall = Translate(Rotate(Axis.Y, Cube(Vector3(0, 0, 0), Vector3(165, 330, 165), material), 15),
                     Vector3(265, 0, 295))
    short = Translate(Rotate(Axis.Y, Cube(Vector3(0, 0, 0), Vector3(165, 165, 165), material), -18),
                      Vector3(130, 0, 65))
    return tall, short


def cornell_box(rng=random) -> Scene:
    light = DiffuseLight(Vector3(15, 15, 15))
    world = _cornell_walls(Rect(Plane.ZX, 227, 332, 213, 343, 554, light))
    world.extend(_cornell_blocks(Lambertian(Vector3(0.73, 0.73, 0.73))))
    return Scene(world.build_bvh(0.0, 1.0), Vector3(278, 278, -800), Vector3(278, 278, 0), vfov=40.0)


def cornell_smoke(rng=random) -> Scene:
    light = DiffuseLight(Vector3(7, 7, 7))
    world = _cornell_walls(Rect(Plane.ZX, 127, 432, 113, 443, 554, light))
    tall, short = _cornell_blocks(Lambertian(Vector3(0.73, 0.73, 0.73)))
    world.add(ConstantMedium(tall, 0.01, Vector3(0, 0, 0)))
    world.add(ConstantMedium(short, 0.01, Vector3(1, 1, 1)))
    return Scene(world.build_bvh(0.0, 1.0), Vector3(278, 278, -800), Vector3(278, 278, 0), vfov=40.0)


def final_scene(rng=random, boxes_per_side: int = 20, sphere_count: int = 1000) -> Scene:
    """Every feature at once: boxes, motion blur, glass, fog, noise and instancing."""
    ground = Lambertian(Vector3(0.48, 0.83, 0.53))
    white = Lambertian(Vector3(0.73, 0.73, 0.73))

    boxes = HittableList()
    w = 100.0
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y1 = 100.0 * (rng.random() + 0.01)
            boxes.add(Cube(Vector3(x0, 0.0, z0), Vector3(x0 + w, y1, z0 + w), ground))

    world = HittableList()
    world.add(boxes.build_bvh(0.0, 1.0))
    world.add(Rect(Plane.ZX, 147, 412, 123, 423, 554, DiffuseLight(Vector3(7, 7, 7))))

    center = Vector3(400, 400, 200)
    world.add(MovingSphere(center, center + Vector3(30, 0, 0), 0.0, 1.0, 50,
                           Lambertian(Vector3(0.7, 0.3, 0.1))))
    world.add(Sphere(Vector3(260, 150, 45), 50, Dielectric(1.5)))
    world.add(Sphere(Vector3(0, 150, 145), 50, Metal(Vector3(0.8, 0.8, 0.9), 1.0)))

    # The same sphere is both a glass surface and the wall of a blue fog.
    boundary = Sphere(Vector3(360, 150, 145), 70, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium(boundary, 0.2, Vector3(0.2, 0.4, 0.9)))
    mist = Sphere(Vector3(0, 0, 0), 5000, Dielectric(1.5))
    world.add(ConstantMedium(mist, 0.0001, Vector3(1, 1, 1)))

    world.add(Sphere(Vector3(400, 200, 400), 100, _earth_material()))
    world.add(Sphere(Vector3(220, 280, 300), 80,
                     Lambertian(NoiseTexture(0.1, seed=rng.randrange(2 ** 32)))))

    cluster = HittableList(
        Sphere(random_vector(rng, 0.0, 165.0), 10, white) for _ in range(sphere_count)
    )
    world.add(Translate(Rotate(Axis.Y, cluster.build_bvh(0.0, 1.0), 15),
                        Vector3(-100, 270, 395)))

    return Scene(world, Vector3(478, 278, -600), Vector3(278, 278, 0), vfov=40.0)


SCENES: Dict[str, Callable[..., Scene]] = {
    "random_spheres": random_spheres,
    "two_spheres": two_spheres,
    "two_perlin_spheres": two_perlin_spheres,
    "earth": earth,
    "simple_light": simple_light,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
    "final_scene": final_scene,
}


def build_scene(name: str, seed: Optional[int] = None) -> Scene:
    if name not in SCENES:
        raise ValueError(f"Unknown scene {name!r}; choose from {', '.join(SCENES)}")
    logger.info("Building scene %s", name)
    return SCENES[name](random.Random(seed))
