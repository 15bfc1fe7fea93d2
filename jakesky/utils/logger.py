"""Logging configuration for JakeSky."""

import logging
import os
from pathlib import Path

import colorlog

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str,
    log_file: Path | None = None,
    console_level: int | None = None,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Set up a logger with a colored console handler and optional file output.

    Handlers live on the top-level package logger (``jakesky`` for
    ``jakesky.weather.http``), so module loggers propagate to a single
    console handler and every record is printed once.

    Args:
        name: Logger name (typically __name__ from calling module).
        log_file: Optional path to log file. If None, only logs to console.
        console_level: Logging level for console output. Defaults to INFO
            on first setup; when given later it replaces the current level.
        file_level: Logging level for file output (default: DEBUG).

    Returns:
        Configured logger instance.

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Fetching forecast")
    """
    package_logger = logging.getLogger(name.split(".")[0])

    if not package_logger.handlers:
        package_logger.setLevel(logging.DEBUG)  # Capture all levels, handlers filter

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(
            colorlog.ColoredFormatter(
                "%(log_color)s" + LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "red,bg_white",
                },
            )
        )
        package_logger.addHandler(console_handler)

    if console_level is not None:
        for handler in package_logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(console_level)

    if log_file is not None and not _has_file_handler(package_logger, log_file):
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(file_handler)

        package_logger.debug(f"File logging enabled: {log_file}")

    return logging.getLogger(name)


def _has_file_handler(logger: logging.Logger, log_file: Path) -> bool:
    target = os.path.abspath(log_file)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )
