# core/utils.py
import math
import random
from pathtracer.core.vector import Vector3


def random_vector(rng=random, low: float = 0.0, high: float = 1.0) -> Vector3:
    return Vector3(rng.uniform(low, high),
                   rng.uniform(low, high),
                   rng.uniform(low, high))


def random_in_unit_sphere(rng=random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p


def random_unit_vector(rng=random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        # Rejects the rare draw too close to the center to normalize.
        if p.dot(p) > 1e-12:
            return p.normalize()


def random_in_unit_disk(rng=random) -> Vector3:
    """Random point in the unit disk on the z = 0 plane, for lens sampling."""
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.dot(p) < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Snell's law refraction of a unit vector through a surface with normal n.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel


def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of the Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)


def exponential_free_flight(density: float, rng=random) -> float:
    """
    Samples a free-flight distance with rate `density` as -ln(U) / density,
    with U drawn from the open interval (0, 1).
    """
    u = rng.random()
    while u <= 0.0:
        u = rng.random()
    return -math.log(u) / density
