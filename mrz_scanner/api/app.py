"""FastAPI application for the passport MRZ scanner.

Accepts a photographed passport data page and returns the decoded MRZ
fields, a warning with the raw OCR text, or an error message.
"""

from dataclasses import asdict
from typing import Annotated

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from mrz_scanner import __version__
from mrz_scanner.ocr.diagnostics import Diagnostic, ScanOk, ScanWarning
from mrz_scanner.ocr.scan_processor import MrzScanProcessor
from mrz_scanner.ocr.tesseract_engine import TesseractMrzEngine
from mrz_scanner.utils.config import load_config
from mrz_scanner.utils.errors import ErrorKind
from mrz_scanner.utils.logger import get_logger

from .schemas import (
    ErrorResponse,
    HealthResponse,
    ScanSuccessResponse,
    ScanWarningResponse,
)

logger = get_logger(__name__)

app = FastAPI(
    title="Passport MRZ Scanner API",
    description="Read the machine-readable zone of TD3 passports from photos",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_CONTENT_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "application/octet-stream",
}

_REJECTION_STATUS = {
    ErrorKind.INPUT: 400,
    ErrorKind.PARSE: 400,
    ErrorKind.ENGINE: 503,
}


def _get_processor() -> MrzScanProcessor:
    """Build a scan processor from the current configuration."""
    return MrzScanProcessor(load_config())


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorResponse(error=message).model_dump()
    )


def render_diagnostic(diagnostic: Diagnostic) -> JSONResponse:
    """Convert a scan outcome into its HTTP response.

    Args:
        diagnostic: Outcome returned by the scan processor.

    Returns:
        200 with fields or a warning, 400 for unusable input, 503 when the
        OCR engine itself failed.
    """
    if isinstance(diagnostic, ScanOk):
        body = ScanSuccessResponse(**asdict(diagnostic.record))
        return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))
    if isinstance(diagnostic, ScanWarning):
        body = ScanWarningResponse(
            raw_text=diagnostic.raw_text, warning=diagnostic.message
        )
        return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))
    return _error(_REJECTION_STATUS[diagnostic.kind], diagnostic.reason)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    engine = TesseractMrzEngine(load_config().ocr)
    return HealthResponse(
        status="healthy",
        version=__version__,
        tesseract_available=engine.is_available(),
    )


@app.post(
    "/api/scan/document",
    responses={
        200: {"model": ScanSuccessResponse},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def scan_document(file: Annotated[UploadFile, File(...)]) -> JSONResponse:
    """Scan the MRZ of an uploaded passport photo.

    Args:
        file: Uploaded PNG or JPEG image.

    Returns:
        Decoded fields, a warning with raw OCR text, or an error.
    """
    logger.info("Received file: %s", file.filename)

    if file.content_type and file.content_type not in _ALLOWED_CONTENT_TYPES:
        return _error(400, f"Unsupported file type: {file.content_type}")

    try:
        content = await file.read()
        processor = _get_processor()
        diagnostic = await run_in_threadpool(
            processor.scan_bytes, content, file.filename or "upload"
        )
    except Exception:
        logger.exception("Scan failed for %s", file.filename)
        return _error(500, "Internal error while scanning document")

    return render_diagnostic(diagnostic)
