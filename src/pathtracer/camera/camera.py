# camera/camera.py
import math
import random
from pathtracer.core.vector import Vector3
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk


class Camera:
    def __init__(self, lookfrom: Vector3, lookat: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        """
        Thin-lens camera looking from `lookfrom` towards `lookat`.

        vfov is the vertical field of view in degrees. Rays are cast at a
        uniformly random time in [time0, time1] for motion blur.
        """
        self.position = lookfrom
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1

        # Compute viewport dimensions based on fov
        theta = math.radians(vfov)
        viewport_height = 2.0 * math.tan(theta / 2)
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal camera basis; w points backwards.
        self.w = (lookfrom - lookat).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Scale by focus distance
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (self.position -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng=random) -> Ray:
        """Generates a ray through viewport coordinates (s, t) in [0, 1]²."""
        origin = self.position
        if self.lens_radius > 0:
            # Generate random point on lens
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = self.position + self.u * rd.x + self.v * rd.y

        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        time = rng.uniform(self.time0, self.time1) if self.time1 > self.time0 else self.time0
        return Ray(origin, direction, time)
