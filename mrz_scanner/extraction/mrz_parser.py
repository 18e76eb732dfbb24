"""Fixed-width decoding of ICAO 9303 TD3 machine-readable zones.

A TD3 MRZ is two 44-character lines. The OCR output is expected with all
whitespace removed, so line 2 simply starts at offset 44. Check digits at
line 2 offsets 9, 19, 27, 42 and 43 are not validated, and OCR confusables
such as ``0``/``O`` are passed through unchanged.
"""

import re
from dataclasses import asdict, dataclass

from mrz_scanner.utils.errors import MrzParseError
from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)

LINE_LENGTH = 44
TD3_LENGTH = 2 * LINE_LENGTH
FILLER = "<"
NAME_SEPARATOR = "<<"

# (line index, start, end) per field
_TD3_LAYOUT: dict[str, tuple[int, int, int]] = {
    "document_type": (0, 0, 1),
    "issuing_country": (0, 2, 5),
    "name": (0, 5, 44),
    "passport_number": (1, 0, 9),
    "nationality": (1, 10, 13),
    "birth_date": (1, 13, 19),
    "sex": (1, 20, 21),
    "expiry_date": (1, 21, 27),
    "personal_number": (1, 28, 42),
}

_FILLER_RUN = re.compile(f"{FILLER}+")
_CAMEL_KEYS = {
    "document_type": "documentType",
    "issuing_country": "issuingCountry",
    "last_name": "lastName",
    "first_name": "firstName",
    "passport_number": "passportNumber",
    "nationality": "nationality",
    "birth_date": "birthDate",
    "sex": "sex",
    "expiry_date": "expiryDate",
    "personal_number": "personalNumber",
    "raw_text": "rawText",
}


@dataclass(frozen=True)
class MrzRecord:
    """Identity fields decoded from a TD3 MRZ."""

    document_type: str
    issuing_country: str
    last_name: str
    first_name: str
    passport_number: str
    nationality: str
    birth_date: str
    sex: str
    expiry_date: str
    personal_number: str
    raw_text: str

    def to_dict(self) -> dict[str, str]:
        """Return the fields keyed by their camelCase wire names."""
        return {_CAMEL_KEYS[key]: value for key, value in asdict(self).items()}


def _clean_name(segment: str) -> str:
    return _FILLER_RUN.sub(" ", segment).strip()


def split_name(name_field: str) -> tuple[str, str]:
    """Split a TD3 name field into surname and given names.

    The field is split on the first ``<<``. Runs of filler inside either part
    become single spaces. Without a separator the whole field is the surname.

    Args:
        name_field: Raw name characters, e.g. ``SMITH<<JOHN<PAUL<<<<``.

    Returns:
        Tuple of (last_name, first_name).
    """
    surname, sep, given = name_field.partition(NAME_SEPARATOR)
    if not sep:
        return _clean_name(surname), ""
    return _clean_name(surname), _clean_name(given)


def _strip_filler(value: str) -> str:
    return value.replace(FILLER, "").strip()


def _check_precondition(text: str) -> None:
    if len(text) < TD3_LENGTH:
        raise MrzParseError(
            f"MRZ text has {len(text)} characters, {TD3_LENGTH} required"
        )
    if any(ch.isspace() for ch in text):
        raise MrzParseError("MRZ text must not contain whitespace")
    if not text[:TD3_LENGTH].isascii():
        raise MrzParseError("MRZ text contains non-ASCII characters")


def parse_mrz(text: str) -> MrzRecord:
    """Decode a whitespace-free TD3 character stream into an MrzRecord.

    Characters beyond the first 88 are ignored. Dates are kept as raw
    ``YYMMDD`` strings.

    Args:
        text: OCR output with whitespace removed.

    Returns:
        Decoded MRZ record, with ``raw_text`` set to ``text``.

    Raises:
        MrzParseError: If ``text`` is shorter than 88 characters, contains
            whitespace, or has non-ASCII characters in the MRZ span.
    """
    _check_precondition(text)

    lines = (text[:LINE_LENGTH], text[LINE_LENGTH:TD3_LENGTH])
    raw = {
        name: lines[line][start:end]
        for name, (line, start, end) in _TD3_LAYOUT.items()
    }

    last_name, first_name = split_name(raw["name"])

    record = MrzRecord(
        document_type=raw["document_type"],
        issuing_country=raw["issuing_country"],
        last_name=last_name,
        first_name=first_name,
        passport_number=_strip_filler(raw["passport_number"]),
        nationality=raw["nationality"],
        birth_date=raw["birth_date"],
        sex=raw["sex"],
        expiry_date=raw["expiry_date"],
        personal_number=_strip_filler(raw["personal_number"]),
        raw_text=text,
    )
    logger.debug(
        "Parsed MRZ: type=%s country=%s number=%s",
        record.document_type,
        record.issuing_country,
        record.passport_number,
    )
    return record
