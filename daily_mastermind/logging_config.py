"""
Logging setup for the service.

Modules log through logging.getLogger(__name__); this only decides where
the records go. Called once from main.py.
"""

import logging


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("daily_mastermind")
    logger.setLevel(level.upper())

    # Prevent duplicate handlers (reloads, repeated imports in tests)
    if logger.handlers:
        logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(handler)
    return logger
