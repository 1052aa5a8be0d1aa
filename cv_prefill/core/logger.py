# cv_prefill/core/logger.py
import logging
import os
import sys
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger writing to stdout; level defaults to LOG_LEVEL (INFO)."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        if level is None:
            level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
            if not isinstance(level, int):
                level = logging.INFO
    if level is not None:
        logger.setLevel(level)
    return logger
