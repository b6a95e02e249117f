"""Centralized logging configuration for the lineariser."""

import logging
import logging.handlers
import os
from pathlib import Path


def setup_logging(verbose: bool = False):
    """Configure console logging, plus a rotating log file when requested.

    - Console: INFO and above (DEBUG with `verbose`), message text only
    - LINEARISER_LOG_FILE: optional path of a rotating log file at LOG_LEVEL
    """
    log_level_str = os.getenv("LOG_LEVEL", "DEBUG" if verbose else "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace handlers from an earlier call in the same process
    for handler in [h for h in root_logger.handlers if getattr(h, "_lineariser", False)]:
        root_logger.removeHandler(handler)
        handler.close()
    console_handler._lineariser = True
    root_logger.addHandler(console_handler)

    log_file = os.getenv("LINEARISER_LOG_FILE")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        file_handler._lineariser = True
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to {log_file}, level {log_level_str}")
