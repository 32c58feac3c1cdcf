"""Image importer for QRMeasure.

Loads photographs (PNG, JPEG, TIFF, WebP, BMP) as RGB pixel arrays for
marker detection.
"""

from pathlib import Path

from loguru import logger

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif", ".webp"}


def can_import(path: Path) -> bool:
    """Check if the file is a supported image format."""
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def load_image(path: Path):
    """Load an image file as an RGB numpy array (height, width, 3)."""
    import numpy as np
    from PIL import Image, ImageOps

    path = Path(path)
    with Image.open(path) as img:
        # Photos from phones carry their orientation in EXIF
        img = ImageOps.exif_transpose(img)
        pixels = np.asarray(img.convert("RGB"))

    logger.debug(f"Loaded image {path} ({pixels.shape[1]}x{pixels.shape[0]})")
    return pixels
