"""Tesseract OCR engine wrapper configured for MRZ text.

Runs Tesseract with an OCR-B language model, single-column page
segmentation, and a character whitelist of ``A-Z``, ``0-9`` and ``<``.
"""

import shutil
from typing import Protocol

import numpy as np
import pytesseract
from PIL import Image

from mrz_scanner.utils.config import OCRConfig
from mrz_scanner.utils.errors import OcrEngineError, OcrTimeoutError
from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)


class OcrEngine(Protocol):
    """Anything that turns a prepared bitmap into a text string."""

    def recognize(self, image: np.ndarray) -> str: ...


def build_tesseract_config(config: OCRConfig) -> str:
    """Build the Tesseract command-line options for an MRZ read.

    Args:
        config: OCR settings.

    Returns:
        Option string passed as ``config`` to pytesseract.
    """
    parts = [f"--psm {config.psm}", f"--oem {config.oem}"]
    if config.tessdata_dir:
        parts.append(f'--tessdata-dir "{config.tessdata_dir}"')
    parts.append(f"-c tessedit_char_whitelist={config.whitelist}")
    return " ".join(parts)


class TesseractMrzEngine:
    """Tesseract invocation bound to one immutable OCR configuration.

    Each ``recognize`` call spawns its own Tesseract process, so instances
    carry no state between calls.

    Args:
        config: OCR settings.
    """

    def __init__(self, config: OCRConfig) -> None:
        if config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = config.tesseract_cmd
        self.config = config
        self._options = build_tesseract_config(config)

    def is_available(self) -> bool:
        """Return whether the Tesseract binary can be found."""
        cmd = self.config.tesseract_cmd or "tesseract"
        return shutil.which(cmd) is not None

    def recognize(self, image: np.ndarray) -> str:
        """Read MRZ text from a normalized image.

        Args:
            image: Grayscale uint8 image.

        Returns:
            Raw text exactly as Tesseract returned it.

        Raises:
            OcrTimeoutError: If Tesseract exceeds ``config.timeout_s``.
            OcrEngineError: If Tesseract is missing, cannot be started, or fails.
        """
        pil_image = Image.fromarray(image)
        try:
            text = pytesseract.image_to_string(
                pil_image,
                lang=self.config.lang,
                config=self._options,
                timeout=self.config.timeout_s,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrEngineError("OCR engine not installed") from exc
        except OSError as exc:
            logger.error("Tesseract could not be started: %s", exc)
            raise OcrEngineError(f"OCR engine unavailable: {exc}") from exc
        except pytesseract.TesseractError as exc:
            logger.error("Tesseract failed: %s", exc)
            raise OcrEngineError(f"OCR engine failed: {exc.message}") from exc
        except RuntimeError as exc:
            # pytesseract signals its timeout with a bare RuntimeError
            if "timeout" in str(exc).lower():
                raise OcrTimeoutError("ocr timeout") from exc
            raise OcrEngineError(f"OCR engine failed: {exc}") from exc

        logger.info("Tesseract returned %d characters", len(text))
        return text
