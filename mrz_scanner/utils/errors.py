"""Exception hierarchy for the MRZ scanning pipeline.

Every exception carries the :class:`ErrorKind` it is reported under, so the
scan processor can turn it into a rejection without inspecting its type.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Category a rejected scan is reported under."""

    INPUT = "input"
    PARSE = "parse"
    ENGINE = "engine"


class MrzScanError(Exception):
    """Base class for all scanner errors."""

    kind: ErrorKind = ErrorKind.INPUT


class InputError(MrzScanError):
    """The submitted capture cannot be used."""

    kind = ErrorKind.INPUT


class ImageDecodeError(InputError):
    """Uploaded bytes are not a decodable image."""


class MrzParseError(MrzScanError):
    """OCR text does not fit the fixed-width TD3 layout."""

    kind = ErrorKind.PARSE


class OcrEngineError(MrzScanError):
    """The OCR engine is unavailable, misconfigured, or failed."""

    kind = ErrorKind.ENGINE


class OcrTimeoutError(OcrEngineError):
    """The OCR engine did not answer within the configured timeout."""
