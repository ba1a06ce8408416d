# renderer/tone_mapping.py
import numpy as np

# Rec. 709 luma weights.
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)


def _linear(accumulated, samples: int) -> np.ndarray:
    """Per-pixel mean radiance; NaN, inf and negative values become 0."""
    if samples < 1:
        raise ValueError("samples must be at least 1")
    mean = np.asarray(accumulated, dtype=np.float32) / samples
    mean = np.nan_to_num(mean, nan=0.0, posinf=0.0, neginf=0.0)
    return np.clip(mean, 0.0, None)


def gamma_correct(accumulated, samples: int, gamma: float = 2.0):
    """
    Average the accumulated radiance over `samples`, apply gamma and quantize
    to 8 bits. Channels are clamped to [0, 0.999] before scaling by 256.
    """
    mapped = _linear(accumulated, samples) ** (1.0 / gamma)
    return (256.0 * np.clip(mapped, 0.0, 0.999)).astype(np.uint8)


def reinhard_tone_mapping(accumulated, samples: int = 1, exposure: float = 1.0,
                          white_point: float = 1.0, gamma: float = 2.2):
    """Reinhard operator x / (1 + x / white_point) on the exposed mean radiance."""
    exposed = _linear(accumulated, samples) * exposure
    compressed = exposed / (1.0 + exposed / white_point)
    return np.clip(255.0 * compressed ** (1.0 / gamma), 0, 255).astype(np.uint8)


def auto_exposure_tone_mapping(accumulated, samples: int = 1, gamma: float = 2.2,
                               target_midgray: float = 0.18):
    """Reinhard with the exposure that maps the mean luminance to `target_midgray`."""
    luminance = _linear(accumulated, samples) @ LUMINANCE_WEIGHTS
    exposure = target_midgray / (float(luminance.mean()) + 1e-5)
    return reinhard_tone_mapping(accumulated, samples, exposure=exposure, gamma=gamma)


# Name -> function(accumulated, samples) returning an 8-bit image.
TONE_MAPPERS = {
    "gamma": gamma_correct,
    "reinhard": reinhard_tone_mapping,
    "auto": auto_exposure_tone_mapping,
}
