# materials/textures.py
import math
from typing import Union
import numpy as np
from pathtracer.core.vector import Vector3
from pathtracer.materials.perlin import Perlin


class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        """Color of the texture at surface coordinates (u, v) and point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


def as_texture(source: Union[Vector3, Texture]) -> Texture:
    """Wraps a plain color in a SolidTexture; textures pass through."""
    if isinstance(source, Vector3):
        return SolidTexture(source)
    return source


class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color


class CheckerTexture(Texture):
    """A checker pattern over the (u, v) parametrization."""
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 scale: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        x = math.floor(u * self.scale)
        y = math.floor(v * self.scale)
        if (x + y) % 2 == 0:
            return self.even.value(u, v, p)
        return self.odd.value(u, v, p)


class SpatialCheckerTexture(Texture):
    """A solid 3D checker driven by the sign of sin(fx)·sin(fy)·sin(fz)."""
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 frequency: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.frequency = frequency

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        f = self.frequency
        sines = math.sin(f * p.x) * math.sin(f * p.y) * math.sin(f * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class NoiseTexture(Texture):
    """Marble-like grey pattern: a sine along z phase-shifted by Perlin turbulence."""
    def __init__(self, scale: float = 1.0, seed=None):
        self.noise = Perlin(seed)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        level = 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.noise.turb(p, 7)))
        return Vector3(level, level, level)


class ImageTexture(Texture):
    """A texture backed by an (height, width, 3) array of colors in [0, 1]."""
    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float32)
        if data.ndim != 3 or data.shape[2] < 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Image texture data must be (h, w, 3), got {data.shape}")
        self.data = data
        self.height, self.width = data.shape[:2]

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        # Clamp to [0, 1] and flip V so v = 1 is the top image row.
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))
