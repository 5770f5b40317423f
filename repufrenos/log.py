"""
Logging setup.

Modules log through ``get_logger(__name__)``. Handlers sit on the
``repufrenos`` package logger and are attached by ``configure_logging``
with the level and file from ``Settings``.
"""
import logging
from typing import Optional

PACKAGE_LOGGER = "repufrenos"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _level(value: Optional[str]) -> int:
    level = getattr(logging, (value or "").strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[str] = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Log the package to stdout, and to ``log_file`` when given.

    Calling it again replaces the previous handlers.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(_level(level))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError:
            logger.warning("Could not open log file %s, logging to stdout only", log_file)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
