"""Best-effort sinks for intermediate pipeline images.

A debug sink never affects the scan result: write errors are logged and
dropped.
"""

from pathlib import Path
from typing import Protocol

import cv2
import numpy as np

from mrz_scanner.utils.config import DebugConfig
from mrz_scanner.utils.logger import get_logger

logger = get_logger(__name__)


class DebugSink(Protocol):
    """Receives a named snapshot of each pipeline stage."""

    def emit(self, stage: str, image: np.ndarray) -> None: ...


class NullDebugSink:
    """Discards every snapshot."""

    def emit(self, stage: str, image: np.ndarray) -> None:
        return None


class DirectoryDebugSink:
    """Writes snapshots as ``<stage>.png`` into a directory.

    Args:
        directory: Target directory, created on first write.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def emit(self, stage: str, image: np.ndarray) -> None:
        path = self.directory / f"{stage}.png"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # arrays are RGB, cv2 writes BGR
            out = cv2.cvtColor(image, cv2.COLOR_RGB2BGR) if image.ndim == 3 else image
            if not cv2.imwrite(str(path), out):
                logger.warning("Could not write debug image %s", path)
                return
        except (OSError, cv2.error) as exc:
            logger.warning("Could not write debug image %s: %s", path, exc)
            return
        logger.debug("Wrote debug image %s", path)


def sink_from_config(config: DebugConfig) -> DebugSink:
    """Build the sink selected by the debug configuration."""
    if config.enabled:
        return DirectoryDebugSink(Path(config.directory))
    return NullDebugSink()
