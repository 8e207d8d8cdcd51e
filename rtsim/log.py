"""loguru setup for command-line use.

Library code logs through the global loguru ``logger`` and never touches
sinks; applications call :func:`setup_logging` once.
"""

import sys

from loguru import logger

from rtsim.errors import ConfigError

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


def validate_level(level: str) -> str:
    """Return ``level`` upper-cased if loguru knows it, else raise ConfigError."""
    name = str(level).upper()
    try:
        logger.level(name)
    except ValueError as e:
        raise ConfigError(f"Unknown log level {level!r}") from e
    return name


def setup_logging(level: str = "WARNING", sink=None) -> None:
    """Replace loguru's handlers with a single sink at ``level`` (stderr by default)."""
    level = validate_level(level)
    logger.remove()
    if sink is None:
        sink = sys.stderr
    logger.add(sink, level=level, format=LOG_FORMAT, backtrace=True, diagnose=False)
