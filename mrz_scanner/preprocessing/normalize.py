"""Normalization of the MRZ crop for OCR-B recognition.

Converts to grayscale, applies an aggressive linear contrast stretch that
pushes mid-tones to pure black or white, and upscales by a fixed integer
factor so glyph height stays above what the OCR model handles well.
"""

import cv2
import numpy as np

from mrz_scanner.utils.config import NormalizationConfig
from mrz_scanner.utils.logger import get_logger

from .region import Region

logger = get_logger(__name__)

_INTERPOLATION = {
    "nearest": cv2.INTER_NEAREST,
    "bilinear": cv2.INTER_LINEAR,
}


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert an RGB image to luminance-weighted grayscale.

    Args:
        image: Input image (RGB or grayscale).

    Returns:
        Single-channel image. Grayscale input is returned as a copy.
    """
    if image.ndim == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
    return image.copy()


def rescale_intensity(gray: np.ndarray, gain: float, bias: float) -> np.ndarray:
    """Apply ``clamp(in * gain + bias, 0, 255)`` to every pixel.

    Args:
        gray: Single-channel uint8 image.
        gain: Multiplicative factor.
        bias: Additive offset applied after the gain.

    Returns:
        Rescaled uint8 image.
    """
    scaled = gray.astype(np.float32) * gain + bias
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def upscale(
    image: np.ndarray, factor: int, interpolation: str = "nearest"
) -> np.ndarray:
    """Enlarge an image by an integer factor in both dimensions.

    Args:
        image: Input image.
        factor: Integer scale factor.
        interpolation: ``"nearest"`` or ``"bilinear"``.

    Returns:
        Image of exactly ``factor`` times the input width and height.
    """
    height, width = image.shape[:2]
    try:
        flag = _INTERPOLATION[interpolation]
    except KeyError:
        raise ValueError(f"Unsupported interpolation: {interpolation}") from None
    return cv2.resize(image, (width * factor, height * factor), interpolation=flag)


class ImageNormalizer:
    """Prepares an MRZ region for the OCR engine.

    Args:
        config: Gain, bias, scale factor, and interpolation settings.
    """

    def __init__(self, config: NormalizationConfig) -> None:
        self.config = config

    def normalize(self, region: Region) -> np.ndarray:
        """Run grayscale conversion, contrast stretch, and upscale.

        Args:
            region: MRZ crop to normalize.

        Returns:
            Grayscale uint8 image scaled by ``config.scale_factor``.
        """
        gray = to_grayscale(region.pixels)
        stretched = rescale_intensity(gray, self.config.gain, self.config.bias)
        result = upscale(
            stretched, self.config.scale_factor, self.config.interpolation
        )

        logger.info(
            "Normalized MRZ crop %dx%d -> %dx%d",
            region.width,
            region.height,
            result.shape[1],
            result.shape[0],
        )
        return result
