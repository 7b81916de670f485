"""Logging for the watch service.

Everything logs through loguru. Records emitted with stdlib ``logging`` by the
server stack (uvicorn, fastapi) and by the httpx watch client are forwarded to
the same sink, so a rejected cursor and the request that carried it show up in
one stream.
"""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")
"""Per-request chatter of the HTTP layers, only warnings and above are kept."""


class _StdlibForwarder(logging.Handler):
    """Forward stdlib logging records to loguru, keeping the original call-site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Make loguru the only log sink of the process.

    :param level: minimum level written to stderr
    :param json_logs: write one JSON document per record instead of text
    """
    level = level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, serialize=json_logs)

    logging.basicConfig(handlers=[_StdlibForwarder()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("watch logging configured (level={}, json={})", level, json_logs)
