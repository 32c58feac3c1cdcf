"""Logging setup for QRMeasure.

Every module logs through ``from loguru import logger``; this module only
configures loguru's sinks: a coloured console sink and, optionally, a
rotating file in the user's log directory.

Usage:
    from qrmeasure.core.logging import setup_logging
    setup_logging(config)
"""

import sys
from pathlib import Path

from loguru import logger
from platformdirs import user_log_dir

from qrmeasure.config.manager import ConfigManager

LOG_FILENAME = "qrmeasure.log"

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_LOG_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"


def get_log_dir() -> Path:
    """Return the directory where log files are stored."""
    return Path(user_log_dir("QRMeasure", "QRMeasure"))


def setup_logging(config: ConfigManager, log_dir: Path | None = None, level: str | None = None) -> Path | None:
    """Configure loguru sinks from the ``logging`` config group.

    ``level`` overrides the configured console level. Returns the log file
    path, or None when file logging is disabled.
    """
    level = (level or config.get("logging", "log_level", "INFO")).upper()
    log_to_file = config.get("logging", "log_to_file", True)
    console_output = config.get("logging", "log_console_output", True)
    retention_days = config.get("logging", "log_retention_days", 30)
    max_size_mb = config.get("logging", "log_max_size_mb", 50)

    logger.remove()

    if console_output:
        logger.add(sys.stderr, format=_LOG_FORMAT, level=level, colorize=True)

    log_path = None
    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILENAME
        logger.add(
            str(log_path),
            format=_LOG_FILE_FORMAT,
            level="DEBUG",
            rotation=f"{max_size_mb} MB",
            retention=f"{retention_days} days",
            encoding="utf-8",
        )
        logger.debug(f"Log file: {log_path}")

    logger.debug(f"Logging initialized (console={level}, file={'DEBUG' if log_to_file else 'off'})")
    return log_path
