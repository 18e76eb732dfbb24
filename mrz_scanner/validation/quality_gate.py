"""Quality gates that stop the scan pipeline on unusable captures.

Each check returns ``None`` when the input may proceed, or the diagnostic
the scan should end with. Gate failures are not retried: the caller has to
submit a new capture.
"""

import numpy as np

from mrz_scanner.ocr.diagnostics import Diagnostic, ScanRejected, ScanWarning
from mrz_scanner.preprocessing.region import Region
from mrz_scanner.utils.config import QualityConfig
from mrz_scanner.utils.errors import ErrorKind
from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)


class QualityGate:
    """Resolution, crop-size, and text-shape checks.

    Args:
        config: Thresholds and user-facing messages.
    """

    def __init__(self, config: QualityConfig) -> None:
        self.config = config

    def check_resolution(self, image: np.ndarray) -> Diagnostic | None:
        """Reject images with either side below ``min_image_side`` pixels."""
        height, width = image.shape[:2]
        if width < self.config.min_image_side or height < self.config.min_image_side:
            logger.info(
                "Resolution gate failed: %dx%d (minimum %d)",
                width,
                height,
                self.config.min_image_side,
            )
            return ScanRejected(self.config.resolution_message, ErrorKind.INPUT)
        return None

    def check_crop(self, region: Region) -> Diagnostic | None:
        """Reject MRZ crops shorter than ``min_crop_height`` pixels."""
        if region.height < self.config.min_crop_height:
            logger.info(
                "Crop gate failed: height %d (minimum %d)",
                region.height,
                self.config.min_crop_height,
            )
            return ScanRejected(self.config.crop_message, ErrorKind.INPUT)
        return None

    def check_text(self, raw_text: str) -> Diagnostic | None:
        """Turn OCR text into a warning unless it looks like an MRZ.

        The text must be at least ``min_text_length`` characters long and
        contain the name separator. Pass whitespace-collapsed text.
        """
        too_short = len(raw_text) < self.config.min_text_length
        has_separator = self.config.name_separator in raw_text
        if too_short or not has_separator:
            logger.info(
                "Text gate failed: %d characters, separator %s",
                len(raw_text),
                "present" if has_separator else "missing",
            )
            return ScanWarning(raw_text, self.config.text_message)
        return None
