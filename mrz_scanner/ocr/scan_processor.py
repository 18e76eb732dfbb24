"""End-to-end MRZ scan pipeline.

Sequences upload decoding, the quality gates, MRZ band extraction,
normalization, OCR, and TD3 parsing. Every outcome, including engine and
parser failures, is returned as a :data:`Diagnostic`; nothing raises out of
a scan.
"""

import re

import numpy as np

from mrz_scanner.extraction.mrz_parser import parse_mrz
from mrz_scanner.preprocessing.normalize import ImageNormalizer
from mrz_scanner.preprocessing.region import extract_mrz_region
from mrz_scanner.utils.config import AppConfig
from mrz_scanner.utils.errors import (
    ErrorKind,
    MrzParseError,
    MrzScanError,
    OcrEngineError,
)
from mrz_scanner.utils.logger import get_logger
from mrz_scanner.validation.quality_gate import QualityGate

from .debug_sink import DebugSink, sink_from_config
from .diagnostics import Diagnostic, ScanOk, ScanRejected
from .image_loader import decode_image
from .tesseract_engine import OcrEngine, TesseractMrzEngine

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Remove every whitespace character from OCR output."""
    return _WHITESPACE.sub("", text)


class MrzScanProcessor:
    """Runs one MRZ scan per call with no state kept between calls.

    Args:
        config: Application configuration.
        engine: OCR engine to use. When ``None`` a fresh
            :class:`TesseractMrzEngine` is built for every scan.
        debug_sink: Receiver for intermediate images. Defaults to the sink
            selected by ``config.debug``.
    """

    def __init__(
        self,
        config: AppConfig,
        engine: OcrEngine | None = None,
        debug_sink: DebugSink | None = None,
    ) -> None:
        self.config = config
        self.engine = engine
        self.debug_sink = debug_sink or sink_from_config(config.debug)
        self.gate = QualityGate(config.quality)
        self.normalizer = ImageNormalizer(config.normalization)

    def scan_bytes(self, data: bytes, filename: str = "upload") -> Diagnostic:
        """Decode uploaded image bytes and scan them.

        Args:
            data: Raw PNG/JPEG bytes.
            filename: Display name used in logs.

        Returns:
            Scan outcome.
        """
        logger.info("Scanning %s (%d bytes)", filename, len(data))
        try:
            image = decode_image(data)
        except MrzScanError as exc:
            return ScanRejected(str(exc), exc.kind)
        return self.scan_image(image)

    def scan_image(self, image: np.ndarray) -> Diagnostic:
        """Extract and decode the MRZ from a decoded document image.

        Args:
            image: Grayscale or RGB uint8 array.

        Returns:
            Scan outcome.
        """
        rejected = self.gate.check_resolution(image)
        if rejected is not None:
            return rejected
        self.debug_sink.emit("01_original", image)

        region = extract_mrz_region(image, self.config.region.height_fraction)
        self.debug_sink.emit("02_mrz_crop", region.pixels)
        logger.info("MRZ crop size: %dx%d", region.width, region.height)

        rejected = self.gate.check_crop(region)
        if rejected is not None:
            return rejected

        processed = self.normalizer.normalize(region)
        self.debug_sink.emit("03_mrz_processed", processed)

        try:
            raw_text = collapse_whitespace(self._engine().recognize(processed))
        except OcrEngineError as exc:
            logger.error("OCR failed: %s", exc)
            return ScanRejected(str(exc), exc.kind)
        except Exception as exc:
            logger.exception("OCR engine raised unexpectedly")
            return ScanRejected(f"OCR engine failed: {exc}", ErrorKind.ENGINE)
        logger.debug("OCR raw text: %s", raw_text)

        warning = self.gate.check_text(raw_text)
        if warning is not None:
            return warning

        try:
            record = parse_mrz(raw_text)
        except MrzParseError as exc:
            logger.warning("MRZ parse failed: %s", exc)
            return ScanRejected(str(exc), exc.kind)

        logger.info(
            "Decoded MRZ for document %s issued by %s",
            record.passport_number,
            record.issuing_country,
        )
        return ScanOk(record)

    def _engine(self) -> OcrEngine:
        if self.engine is not None:
            return self.engine
        return TesseractMrzEngine(self.config.ocr)
