"""Pydantic response schemas for the FastAPI endpoints.

Field names are camelCase on the wire to match the scan payload consumed by
the capture front end.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScanSuccessResponse(_CamelModel):
    """Decoded MRZ fields plus the raw OCR text."""

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


class ScanWarningResponse(_CamelModel):
    """OCR text that did not look like a complete MRZ."""

    raw_text: str
    warning: str


class ErrorResponse(BaseModel):
    """A rejected scan or request."""

    error: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
