"""
Logging configuration
"""
import logging
import sys

PACKAGE_LOGGER = "kix_gateway"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Setup the package logger with standard format

    Args:
        level: Log level name (DEBUG, INFO, ...)

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Console handler, added once even if the app is created repeatedly
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (child of the package logger when name is a module path)"""
    return logging.getLogger(name)
