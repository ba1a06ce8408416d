# materials/texture_loader.py
import logging
import os
from PIL import Image, UnidentifiedImageError
import numpy as np
from pathtracer.materials.textures import ImageTexture

logger = logging.getLogger(__name__)


def load_texture(image_path: str) -> ImageTexture:
    """
    Reads an image file into an ImageTexture with channels scaled to [0, 1].

    Palette, greyscale and alpha images are converted to RGB. Raises
    FileNotFoundError for a missing path and ValueError when Pillow cannot
    decode the file.
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            rgb = img if img.mode == "RGB" else img.convert("RGB")
            pixels = np.asarray(rgb, dtype=np.float32) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot decode texture {image_path}: {e}") from e

    logger.debug("Loaded %s texture %s (%dx%d)", img.mode, image_path,
                 pixels.shape[1], pixels.shape[0])
    return ImageTexture(pixels)


def create_image_material(image_path: str, material_class, **material_params):
    """Builds `material_class(texture, **material_params)` around the image at `image_path`."""
    return material_class(load_texture(image_path), **material_params)
