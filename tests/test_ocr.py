"""Tests for the Tesseract adapter, upload decoding, and debug sinks."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytesseract
import pytest
from PIL import Image

from mrz_scanner.ocr.debug_sink import (
    DirectoryDebugSink,
    NullDebugSink,
    sink_from_config,
)
from mrz_scanner.ocr.image_loader import decode_image
from mrz_scanner.ocr.tesseract_engine import TesseractMrzEngine, build_tesseract_config
from mrz_scanner.utils.config import DebugConfig, OCRConfig
from mrz_scanner.utils.errors import (
    ErrorKind,
    ImageDecodeError,
    OcrEngineError,
    OcrTimeoutError,
)


class TestBuildTesseractConfig:
    """Tests for the Tesseract option string."""

    def test_defaults(self) -> None:
        options = build_tesseract_config(OCRConfig())
        assert options == (
            '--psm 4 --oem 1 --tessdata-dir "/usr/local/share/tessdata" '
            "-c tessedit_char_whitelist=ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
        )

    def test_without_tessdata_dir(self) -> None:
        options = build_tesseract_config(OCRConfig(tessdata_dir=None, psm=6))
        assert "--tessdata-dir" not in options
        assert options.startswith("--psm 6 ")


class TestTesseractMrzEngine:
    """Tests for the TesseractMrzEngine class (mocked)."""

    @patch("mrz_scanner.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_recognize_passes_configuration(self, mock_ocr: MagicMock) -> None:
        mock_ocr.return_value = "P<UTO\n"
        engine = TesseractMrzEngine(OCRConfig(timeout_s=5))
        text = engine.recognize(np.zeros((30, 60), dtype=np.uint8))

        assert text == "P<UTO\n"
        args, kwargs = mock_ocr.call_args
        assert isinstance(args[0], Image.Image)
        assert kwargs["lang"] == "ocrb"
        assert kwargs["timeout"] == 5
        assert "--psm 4" in kwargs["config"]
        assert "tessedit_char_whitelist=" in kwargs["config"]

    @patch("mrz_scanner.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_timeout(self, mock_ocr: MagicMock) -> None:
        mock_ocr.side_effect = RuntimeError("Tesseract process timeout")
        engine = TesseractMrzEngine(OCRConfig())
        with pytest.raises(OcrTimeoutError, match="ocr timeout"):
            engine.recognize(np.zeros((30, 60), dtype=np.uint8))

    @patch("mrz_scanner.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_missing_binary(self, mock_ocr: MagicMock) -> None:
        mock_ocr.side_effect = pytesseract.TesseractNotFoundError()
        engine = TesseractMrzEngine(OCRConfig())
        with pytest.raises(OcrEngineError, match="not installed") as exc_info:
            engine.recognize(np.zeros((30, 60), dtype=np.uint8))
        assert exc_info.value.kind == ErrorKind.ENGINE

    @patch("mrz_scanner.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_tesseract_failure(self, mock_ocr: MagicMock) -> None:
        mock_ocr.side_effect = pytesseract.TesseractError(1, "Failed loading ocrb")
        engine = TesseractMrzEngine(OCRConfig())
        with pytest.raises(OcrEngineError, match="Failed loading ocrb"):
            engine.recognize(np.zeros((30, 60), dtype=np.uint8))

    @patch("mrz_scanner.ocr.tesseract_engine.pytesseract.image_to_string")
    def test_binary_not_executable(self, mock_ocr: MagicMock) -> None:
        mock_ocr.side_effect = PermissionError(13, "Permission denied")
        engine = TesseractMrzEngine(OCRConfig())
        with pytest.raises(OcrEngineError, match="unavailable") as exc_info:
            engine.recognize(np.zeros((30, 60), dtype=np.uint8))
        assert exc_info.value.kind == ErrorKind.ENGINE

    @patch("mrz_scanner.ocr.tesseract_engine.shutil.which")
    def test_is_available(self, mock_which: MagicMock) -> None:
        mock_which.return_value = "/usr/bin/tesseract"
        assert TesseractMrzEngine(OCRConfig()).is_available() is True
        mock_which.return_value = None
        assert TesseractMrzEngine(OCRConfig()).is_available() is False


class TestDecodeImage:
    """Tests for upload decoding."""

    def test_rgb_png(self, encode_png) -> None:
        array = np.zeros((20, 30, 3), dtype=np.uint8)
        array[:, :, 0] = 255
        decoded = decode_image(encode_png(array))
        assert decoded.shape == (20, 30, 3)
        np.testing.assert_array_equal(decoded, array)

    def test_grayscale_stays_single_channel(self, encode_png) -> None:
        decoded = decode_image(encode_png(np.full((20, 30), 7, dtype=np.uint8)))
        assert decoded.shape == (20, 30)

    def test_rgba_converted_to_rgb(self, encode_png) -> None:
        decoded = decode_image(encode_png(np.zeros((20, 30, 4), dtype=np.uint8)))
        assert decoded.shape == (20, 30, 3)

    def test_jpeg(self) -> None:
        import io

        buf = io.BytesIO()
        Image.new("RGB", (40, 20), (10, 20, 30)).save(buf, format="JPEG")
        assert decode_image(buf.getvalue()).shape == (20, 40, 3)

    @pytest.mark.parametrize("data", [b"", b"not an image", b"\x89PNG\r\n\x1a\n"])
    def test_corrupt_bytes_raise(self, data: bytes) -> None:
        with pytest.raises(ImageDecodeError, match="Unsupported or corrupt"):
            decode_image(data)


class TestDebugSinks:
    """Tests for debug snapshot sinks."""

    def test_directory_sink_writes_png(self, tmp_path: Path) -> None:
        sink = DirectoryDebugSink(tmp_path / "debug")
        sink.emit("02_mrz_crop", np.zeros((10, 20, 3), dtype=np.uint8))
        written = tmp_path / "debug" / "02_mrz_crop.png"
        assert written.exists()
        assert Image.open(written).size == (20, 10)

    def test_directory_sink_swallows_errors(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        sink = DirectoryDebugSink(blocker)
        sink.emit("01_original", np.zeros((10, 10), dtype=np.uint8))
        assert blocker.read_text() == "x"

    def test_null_sink(self) -> None:
        assert NullDebugSink().emit("x", np.zeros((1, 1), dtype=np.uint8)) is None

    def test_sink_from_config(self, tmp_path: Path) -> None:
        assert isinstance(sink_from_config(DebugConfig()), NullDebugSink)
        sink = sink_from_config(DebugConfig(enabled=True, directory=str(tmp_path)))
        assert isinstance(sink, DirectoryDebugSink)
        assert sink.directory == tmp_path
