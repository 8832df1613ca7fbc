"""
Logging configuration using loguru.

Console output stays quiet (warnings and up) so it never mixes with a
report written to stdout; a saved snapshot gets the full debug trail.
"""

from pathlib import Path
from typing import Optional
from loguru import logger
import sys

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {name}:{function}:{line} | {message}"

# (file name, level, retention)
RUN_LOGS = (
    ("hostscope.log", "DEBUG", "30 days"),
    ("hostscope_errors.log", "ERROR", "90 days"),
)


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> logger:
    """
    Setup application logging.

    Args:
        log_dir: Snapshot directory for log files; console only when None
        verbose: Send debug output to the console too

    Returns:
        Configured logger instance
    """
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format=CONSOLE_FORMAT)

    if log_dir is None:
        return logger

    paths = []
    for name, level, retention in RUN_LOGS:
        path = log_dir / name
        logger.add(path, rotation="10 MB", retention=retention, level=level, format=FILE_FORMAT)
        paths.append(path)

    logger.info(f"Logging to {log_dir}")
    logger.debug(f"Log files: {', '.join(str(p) for p in paths)}")

    return logger
