"""Centralized Loguru logging configuration."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from loguru import logger


class InterceptHandler(logging.Handler):
    """Forward stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: object
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(
    level: str = "WARNING",
    logs_dir: Optional[str] = None,
    log_file_prefix: str = "jsonmend",
    third_party_levels: Optional[Dict[str, str]] = None,
) -> Optional[str]:
    """Configure Loguru stderr/file sinks and stdlib interception.

    stdout is left alone so repaired JSON can be piped.

    Returns:
        Path of the log file, or None when no ``logs_dir`` is given.
    """
    logger.remove()
    logger.enable("jsonmend")
    logger.add(sys.stderr, level=level, format="{level:<8} | {message}")

    log_file: Optional[Path] = None
    if logs_dir:
        log_path = Path(logs_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file = log_path / f"{log_file_prefix}_{timestamp}.log"
        logger.add(
            str(log_file),
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {name} | {message}",
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.DEBUG, force=True)

    if third_party_levels:
        for logger_name, level_name in third_party_levels.items():
            level_value = getattr(logging, level_name.upper(), logging.INFO)
            logging.getLogger(logger_name).setLevel(level_value)

    return str(log_file) if log_file else None
