"""Centralized logging configuration."""

import logging
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Library loggers routed through the root handler. None follows the service level.
# httpx logs request URLs at INFO, and Gemini URLs carry the API key.
LIBRARY_LEVELS: Dict[str, Optional[int]] = {
    "uvicorn": None,
    "uvicorn.access": None,
    "uvicorn.error": None,
    "fastapi": None,
    "geopy": None,
    "httpx": logging.WARNING,
}


def configure_logging(level: int = logging.INFO) -> None:
    """
    Install one console handler on the root logger and route library loggers through it.

    Args:
        level: Log level for the service and for libraries without a fixed level
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name, library_level in LIBRARY_LEVELS.items():
        library_logger = logging.getLogger(name)
        for existing in library_logger.handlers[:]:
            library_logger.removeHandler(existing)
        library_logger.propagate = True
        library_logger.setLevel(library_level if library_level is not None else level)
