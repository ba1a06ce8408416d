# renderer/output.py
import logging
import os
from PIL import Image
import numpy as np

logger = logging.getLogger(__name__)


def save_image(pixels: np.ndarray, path: str) -> str:
    """
    Writes an (h, w, 3) uint8 array to `path`; the format follows the file
    extension (.png, .ppm, .bmp, ...).
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ValueError(f"Expected an (h, w, 3) uint8 image, got {pixels.shape} {pixels.dtype}")

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    Image.fromarray(pixels).save(path)
    logger.info("Wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)
    return path
