"""
Centralized logging configuration for the autotile tools.

The library modules only create loggers; the command-line tools call
setup_logging() once at startup.

Usage:
    from autotile.logging_config import setup_logging
    setup_logging(verbose=True)            # console only
    setup_logging(log_dir="logs")          # console + rotating autotile.log
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "autotile.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

ROOT_LOGGER = "autotile"


def setup_logging(
    log_dir: Optional[Path | str] = None,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    verbose: bool = False,
) -> Optional[Path]:
    """
    Configure the autotile logger tree.

    Args:
        log_dir: Directory for the rotating log file. No file when None.
        log_level: Level for file logging
        console_level: Level for console output on stderr
        verbose: Shortcut for console_level=INFO

    Returns:
        Path to the log file, or None if only the console is used
    """
    if verbose:
        console_level = min(console_level, logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)

    # Re-initialization replaces earlier handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        logging.Formatter(fmt="%(levelname)-8s | %(name)-30s | %(message)s")
    )
    root_logger.addHandler(console_handler)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILE_NAME

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-30s | %(funcName)-20s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    return log_path
