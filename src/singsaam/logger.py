"""Logging helpers shared by the library and the CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger.

    No handlers are attached here; records propagate to whatever the root
    logger was configured with by :func:`setup_logging` (or by the host
    application when singsaam is used as a library).
    """
    return logging.getLogger(name)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stderr stream handler."""
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    root_logger.setLevel(getattr(logging, level.upper()))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)
