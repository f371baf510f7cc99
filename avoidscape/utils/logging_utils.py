"""Logging setup for the avoidscape package and its demo."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name from a config file or command line into a number.

    Args:
        level: Numeric level or a name such as "debug" or "INFO"

    Returns:
        Numeric logging level
    """
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown logging level: {level}")
    return numeric


def setup_logger(
    name: str = "avoidscape",
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str | Path] = None,
    format_string: Optional[str] = None,
    console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Module loggers (``avoidscape.obstacles.obstaclescape`` and so on) hand
    their records to this logger, so one call sets the output for every
    flag change, assembly step and grid clamp. Handlers from an earlier
    call are replaced, and records stop here instead of reaching the root
    logger a second time.

    Args:
        name: Logger name
        level: Numeric level or level name
        log_file: Optional path to log file
        format_string: Custom format string for log messages
        console: Whether to write to stdout

    Returns:
        Configured logger instance
    """
    level = resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    handlers = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
