# materials/perlin.py
import math
import numpy as np
from pathtracer.core.vector import Vector3

POINT_COUNT = 256


class Perlin:
    """
    Gradient (Perlin) noise over 3D points, with random unit gradient vectors
    and one permutation table per axis.
    """
    def __init__(self, seed=None):
        rng = np.random.default_rng(seed)
        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        self.ranvec = vectors / norms
        self.perm_x = rng.permutation(POINT_COUNT)
        self.perm_y = rng.permutation(POINT_COUNT)
        self.perm_z = rng.permutation(POINT_COUNT)

    def noise(self, p: Vector3) -> float:
        """Noise value in roughly [-1, 1]; zero on integer lattice points."""
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u = p.x - fx
        v = p.y - fy
        w = p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        # Hermite smoothing of the interpolation weights.
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)

        accum = 0.0
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    index = (self.perm_x[(i + di) & 255] ^
                             self.perm_y[(j + dj) & 255] ^
                             self.perm_z[(k + dk) & 255])
                    gx, gy, gz = self.ranvec[index]
                    weight = ((di * uu + (1 - di) * (1 - uu)) *
                              (dj * vv + (1 - dj) * (1 - vv)) *
                              (dk * ww + (1 - dk) * (1 - ww)))
                    accum += weight * (gx * (u - di) + gy * (v - dj) + gz * (w - dk))
        return float(accum)

    def turb(self, p: Vector3, depth: int = 7) -> float:
        """Sum of `depth` octaves with halving weight and doubling frequency."""
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2.0
        return abs(accum)
