"""Shared test fixtures for the MRZ scanner test suite."""

import io
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

MRZ_LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
MRZ_LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"


class FakeEngine:
    """OCR engine stand-in returning canned text and recording its inputs."""

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[np.ndarray] = []

    def recognize(self, image: np.ndarray) -> str:
        self.calls.append(image)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def mrz_text() -> str:
    """The ICAO 9303 specimen passport MRZ, both lines concatenated."""
    return MRZ_LINE1 + MRZ_LINE2


@pytest.fixture
def ocr_output() -> str:
    """Specimen MRZ as Tesseract prints it, with line breaks and padding."""
    return f"{MRZ_LINE1}\n{MRZ_LINE2}\n \n"


@pytest.fixture
def document_image() -> np.ndarray:
    """A synthetic 800x1000 RGB passport page with a dark MRZ band."""
    image = np.full((1000, 800, 3), 220, dtype=np.uint8)
    image[850:960, 40:760] = 30
    return image


@pytest.fixture
def make_engine():
    """Factory for fake OCR engines."""
    return FakeEngine


def _encode_png(array: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def encode_png():
    """Function encoding a numpy array as PNG bytes."""
    return _encode_png


@pytest.fixture
def document_png(document_image: np.ndarray) -> bytes:
    """The synthetic passport page encoded as PNG."""
    return _encode_png(document_image)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
