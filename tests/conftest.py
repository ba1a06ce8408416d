"""Shared fixtures for the path tracer tests."""

import random

import pytest

from pathtracer.core.vector import Vector3
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """Seeded generator so sampled tests are repeatable."""
    return random.Random(1234)


@pytest.fixture
def grey():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def white_light():
    return DiffuseLight(Vector3(1.0, 1.0, 1.0))
