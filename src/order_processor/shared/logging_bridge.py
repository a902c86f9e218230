"""Loguru setup and the stdlib logging bridge"""

import logging
import sys

from loguru import logger

BRIDGED_LOGGERS = ("httpx", "httpcore")

_bridge_installed = False


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(
            level, record.getMessage()
        )


def install_logging_bridge() -> None:
    """Route stdlib loggers used by httpx into loguru once."""
    global _bridge_installed
    if _bridge_installed:
        return

    handler = _LoguruHandler()
    for name in BRIDGED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.setLevel(logging.WARNING)
        std_logger.addHandler(handler)
        std_logger.propagate = False

    _bridge_installed = True


def configure_logging(verbose: bool = False) -> None:
    """Replace loguru sinks with a single stdout sink.

    Args:
        verbose: Log at DEBUG instead of INFO
    """
    logger.remove()
    logger.add(sys.stdout, level="DEBUG" if verbose else "INFO")
    install_logging_bridge()
