"""
Centralized logging configuration for the generator.

Usage:
    from engine.logging_config import setup_logging
    setup_logging()              # stderr only
    setup_logging(Path("logs"))  # plus rotating file logs/wfcgen.log

All engine.* loggers go to stderr at console_level and, when a log
directory is given, to file at log_level.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


LOG_FILE_NAME = "wfcgen.log"
MAX_LOG_SIZE = 5 * 1024 * 1024  # 5 MB per file
BACKUP_COUNT = 3

ROOT_LOGGER = "engine"


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Optional[Path]:
    """
    Configure the engine logger hierarchy.

    Args:
        log_dir: Directory for the rotating log file (None for no file)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for stderr output (default: WARNING)

    Returns:
        Path to the log file, or None when logging to stderr only
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(min(log_level, console_level) if log_dir else console_level)

    # Re-initialization replaces handlers instead of stacking them
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    ))
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
        file_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-25s | %(funcName)-20s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    return log_path


def get_logger(name: str) -> logging.Logger:
    """Logger under the engine namespace, e.g. get_logger("propagation")."""
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
