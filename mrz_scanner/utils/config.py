"""Configuration management for the MRZ scanner.

Loads and validates YAML configuration with sensible defaults for MRZ
region extraction, normalization, quality gates, OCR, and debugging.
All sections are immutable so a single config can be shared safely
across concurrent scans.
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

MRZ_WHITELIST = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class RegionConfig(_FrozenModel):
    """Configuration for locating the MRZ band."""

    height_fraction: float = Field(default=0.18, gt=0.0, le=1.0)


class NormalizationConfig(_FrozenModel):
    """Configuration for preparing the MRZ crop for OCR."""

    gain: float = 3.0
    bias: float = -250.0
    scale_factor: int = Field(default=3, ge=1)
    interpolation: Literal["nearest", "bilinear"] = "nearest"


class QualityConfig(_FrozenModel):
    """Thresholds and messages for the pipeline quality gates."""

    min_image_side: int = 600
    min_crop_height: int = 120
    min_text_length: int = 80
    name_separator: str = "<<"
    resolution_message: str = (
        "Image resolution too low. Please upload a clearer photo."
    )
    crop_message: str = "MRZ area too small. Retake photo with full bottom visible."
    text_message: str = (
        "MRZ not detected clearly. Please retake image with better lighting."
    )


class OCRConfig(_FrozenModel):
    """Configuration for the Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    tessdata_dir: str | None = "/usr/local/share/tessdata"
    lang: str = "ocrb"
    psm: int = 4
    oem: int = 1
    whitelist: str = MRZ_WHITELIST
    timeout_s: float = Field(default=30.0, gt=0.0)


class DebugConfig(_FrozenModel):
    """Configuration for intermediate image snapshots."""

    enabled: bool = False
    directory: str = "/tmp/mrz-debug"


class ServerConfig(_FrozenModel):
    """Configuration for the HTTP server."""

    host: str = "0.0.0.0"
    port: int = 8080


class AppConfig(_FrozenModel):
    """Top-level application configuration."""

    region: RegionConfig = Field(default_factory=RegionConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    quality: QualityConfig = Field(default_factory=QualityConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
