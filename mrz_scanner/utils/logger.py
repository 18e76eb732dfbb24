"""Logging setup shared by the API server and the CLI."""

import logging
import sys

# Pillow logs every PNG chunk at DEBUG, which buries the scan trace.
_NOISY_LOGGERS = ("PIL", "multipart")


def setup_logging(level: str = "INFO") -> None:
    """Attach a stdout handler to the root logger.

    Does nothing if the root logger already has handlers, so the API server
    and the CLI can both call it without doubling output.

    Args:
        level: Logging level name. Unknown names fall back to INFO.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, usually called with ``__name__``."""
    return logging.getLogger(name)
