"""Application entry point for the MRZ scanner API server."""

import uvicorn

from mrz_scanner.api.app import app
from mrz_scanner.utils.config import load_config
from mrz_scanner.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
