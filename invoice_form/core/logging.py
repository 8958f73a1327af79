import sys

from loguru import logger

from .config import settings


def setup_logging(level: str | None = None):
    """
    Configure loguru for the service.

    Replaces the default handler with a single stderr sink at the configured
    level. Structured context passed as keyword arguments ends up in
    ``record["extra"]`` and is rendered after the message.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message} | {extra}",
        backtrace=False,
        diagnose=False,
    )
    return logger
