import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr at the given level.

    Replaces the default sink so repeated calls (tests, reloads) do not
    duplicate lines.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
