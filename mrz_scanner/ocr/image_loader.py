"""Decoding of uploaded image bytes into numpy arrays."""

import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from mrz_scanner.utils.errors import ImageDecodeError
from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)

DECODE_ERROR_MESSAGE = "Unsupported or corrupt image file"


def decode_image(data: bytes) -> np.ndarray:
    """Decode PNG/JPEG bytes into a grayscale or RGB uint8 array.

    Grayscale images stay single-channel; every other mode (palette, RGBA,
    CMYK, 16-bit) is converted to RGB.

    Args:
        data: Raw uploaded file contents.

    Returns:
        Array of shape ``(H, W)`` or ``(H, W, 3)``.

    Raises:
        ImageDecodeError: If the bytes are empty or not a readable image.
    """
    if not data:
        raise ImageDecodeError(DECODE_ERROR_MESSAGE)

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.mode != "L":
                img = img.convert("RGB")
            array = np.array(img)
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as exc:
        logger.warning("Image decode failed: %s", exc)
        raise ImageDecodeError(DECODE_ERROR_MESSAGE) from exc

    logger.info("Decoded image %dx%d", array.shape[1], array.shape[0])
    return array
