"""
Logging setup for simulation drivers and example scripts.
"""

from pathlib import Path
import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: Path | str | None = None) -> None:
    """Configure root logging.

    Args:
        level: Level name, e.g. "DEBUG" or "INFO"
        log_file: Optional file to also write log records to
    """
    level_value = getattr(logging, level.upper(), None)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level!r}")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level_value,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
