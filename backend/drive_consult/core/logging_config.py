"""
Logging configuration for drive-consult.

Modules log through ``logging.getLogger(__name__)``; this only installs the
handler on the package logger. Extractors stay silent apart from skip notices.
"""

import logging
import sys

logger = logging.getLogger("drive_consult")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
    """
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handler if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
