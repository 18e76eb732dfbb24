"""MRZ band extraction for TD3 passport captures.

The MRZ of a passport data page sits in a band of roughly fixed height at
the bottom edge. The capture is assumed to be axis-aligned with the MRZ at
the bottom; no rotation or perspective correction happens here.
"""

import math
from dataclasses import dataclass

import numpy as np

from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Region:
    """A rectangular read-only view into a source image."""

    x: int
    y: int
    width: int
    height: int
    pixels: np.ndarray


def extract_mrz_region(image: np.ndarray, height_fraction: float = 0.18) -> Region:
    """Return the full-width bottom band of ``image`` that holds the MRZ.

    Args:
        image: Source image (grayscale or RGB).
        height_fraction: Share of the image height covered by the MRZ.

    Returns:
        Region spanning the bottom ``height * height_fraction`` rows, rounded
        half up.

    Raises:
        ValueError: If the image has no pixels.
    """
    height, width = image.shape[:2]
    if height == 0 or width == 0:
        raise ValueError(f"Cannot extract MRZ from empty image {width}x{height}")

    # halves round up, unlike round()
    mrz_height = math.floor(height * height_fraction + 0.5)
    y = height - mrz_height

    view = image[y:height, 0:width]
    view.flags.writeable = False

    logger.debug("MRZ band: y=%d height=%d width=%d", y, mrz_height, width)
    return Region(x=0, y=y, width=width, height=mrz_height, pixels=view)
