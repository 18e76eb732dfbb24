"""Scan outcomes returned by the MRZ pipeline.

A scan ends in exactly one of three states: a decoded record, a warning
that carries whatever raw OCR text was read, or a rejection with a reason.
"""

from dataclasses import dataclass

from mrz_scanner.extraction.mrz_parser import MrzRecord
from mrz_scanner.utils.errors import ErrorKind


@dataclass(frozen=True)
class ScanOk:
    """The MRZ was read and decoded."""

    record: MrzRecord


@dataclass(frozen=True)
class ScanWarning:
    """OCR ran but the text does not look like a complete MRZ."""

    raw_text: str
    message: str


@dataclass(frozen=True)
class ScanRejected:
    """The scan stopped before producing usable text."""

    reason: str
    kind: ErrorKind = ErrorKind.INPUT


Diagnostic = ScanOk | ScanWarning | ScanRejected
