# renderer/raytracer.py
import logging
import math
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Tuple
import numpy as np
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.tone_mapping import gamma_correct

logger = logging.getLogger(__name__)

# Lower bound of the hit interval; avoids re-hitting the surface a ray leaves.
T_MIN = 0.001

QUALITY_PRESETS = {
    "preview": {"samples_per_pixel": 4, "max_depth": 8},
    "balanced": {"samples_per_pixel": 64, "max_depth": 25},
    "final": {"samples_per_pixel": 500, "max_depth": 50},
}


def ray_color(ray: Ray, world: Hittable, depth: int, rng=random) -> Vector3:
    """
    Radiance arriving along `ray`, estimated by following one random path.

    Equivalent to the recursion
        color(r, d) = emitted + attenuation * color(scattered, d - 1)
    which is black on a miss and stops on absorption or once d reaches 0. The
    loop carries the product of attenuations so deep paths do not grow the call
    stack.
    """
    color = Vector3(0.0, 0.0, 0.0)
    throughput = Vector3(1.0, 1.0, 1.0)

    while True:
        rec = world.hit(ray, T_MIN, math.inf, rng)
        if rec is None:
            return color

        emitted = rec.material.emitted(rec.u, rec.v, rec.p)
        color = color + throughput * emitted
        if depth <= 0:
            return color

        scatter_result = rec.material.scatter(ray, rec, rng)
        if scatter_result is None:
            return color

        attenuation, ray = scatter_result
        throughput = throughput * attenuation
        depth -= 1


@dataclass
class RenderSettings:
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 16
    max_depth: int = 50
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    seed: int = 42

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError("samples_per_pixel must be at least 1")
        if self.max_depth < 0:
            raise ValueError("max_depth must not be negative")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_quality(cls, quality: str, **overrides) -> "RenderSettings":
        if quality not in QUALITY_PRESETS:
            raise ValueError(f"Unknown quality preset: {quality}")
        params = dict(QUALITY_PRESETS[quality])
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)


def row_seed(seed: int, row: int, frame: int = 0) -> int:
    """Seed of the generator that owns one image row of one pass."""
    return (seed * 1_000_003 + frame) * 1_000_003 + row


def render_row(world: Hittable, camera, settings: RenderSettings, row: int,
               frame: int = 0) -> Tuple[int, np.ndarray, int]:
    """
    Renders one image row (row 0 is the top of the image).

    Returns (row, summed radiance of shape (width, 3), dropped sample count).
    Samples that come back NaN or infinite are dropped from the sum.
    """
    rng = random.Random(row_seed(settings.seed, row, frame))
    width, height = settings.width, settings.height
    j = height - 1 - row
    out = np.zeros((width, 3), dtype=np.float32)
    dropped = 0

    for i in range(width):
        r = g = b = 0.0
        for _ in range(settings.samples_per_pixel):
            s = (i + rng.random()) / max(width - 1, 1)
            t = (j + rng.random()) / max(height - 1, 1)
            ray = camera.get_ray(s, t, rng)
            col = ray_color(ray, world, settings.max_depth, rng)
            if not (math.isfinite(col.x) and math.isfinite(col.y) and math.isfinite(col.z)):
                dropped += 1
                continue
            r += col.x
            g += col.y
            b += col.z
        out[i] = (r, g, b)

    return row, out, dropped


# Per-process scene, installed once by the pool initializer.
_worker_scene = {}


def _init_worker(world, camera, settings, frame):
    _worker_scene["args"] = (world, camera, settings)
    _worker_scene["frame"] = frame


def _render_row_in_worker(row: int):
    world, camera, settings = _worker_scene["args"]
    return render_row(world, camera, settings, row, _worker_scene["frame"])


class Renderer:
    """
    Progressive CPU path tracer.

    Each call to render() adds `samples_per_pixel` more samples per pixel to
    the accumulation buffer, so repeated calls refine the same image.
    """
    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()
        self.width = self.settings.width
        self.height = self.settings.height
        self.frame_number = 0
        self.reset_accumulation()

    def reset_accumulation(self):
        self.accumulation_buffer = np.zeros((self.height, self.width, 3), dtype=np.float32)
        self.samples = 0
        self.dropped_samples = 0
        self.frame_number = 0

    def render(self, world: Hittable, camera) -> np.ndarray:
        """Adds one pass of samples and returns the accumulated radiance sums."""
        settings = self.settings
        rows = range(self.height)
        start = time.perf_counter()
        logger.info("Rendering %dx%d, %d spp, depth %d, %d worker(s)",
                    self.width, self.height, settings.samples_per_pixel,
                    settings.max_depth, settings.workers)

        if settings.workers > 1 and self.height > 1:
            with ProcessPoolExecutor(max_workers=settings.workers,
                                     initializer=_init_worker,
                                     initargs=(world, camera, settings, self.frame_number)) as pool:
                chunksize = max(1, self.height // (4 * settings.workers))
                results = pool.map(_render_row_in_worker, rows, chunksize=chunksize)
                self._collect(results)
        else:
            self._collect(render_row(world, camera, settings, row, self.frame_number) for row in rows)

        self.samples += settings.samples_per_pixel
        self.frame_number += 1
        logger.info("Pass %d done in %.2fs (%d spp total)",
                    self.frame_number, time.perf_counter() - start, self.samples)
        if self.dropped_samples:
            logger.warning("Dropped %d non-finite samples", self.dropped_samples)
        return self.accumulation_buffer

    def _collect(self, results):
        done = 0
        step = max(1, self.height // 10)
        for row, pixels, dropped in results:
            self.accumulation_buffer[row] += pixels
            self.dropped_samples += dropped
            done += 1
            if done % step == 0:
                logger.debug("Scanlines done: %d/%d", done, self.height)

    def image(self) -> np.ndarray:
        """8-bit RGB image of the samples accumulated so far."""
        if self.samples == 0:
            raise RuntimeError("Nothing rendered yet")
        return gamma_correct(self.accumulation_buffer, self.samples)
