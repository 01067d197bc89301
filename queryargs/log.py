"""Package logger. The library only attaches a NullHandler; the CLI installs a stream handler."""

from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("queryargs")
logger.addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the queryargs namespace."""

    return logger.getChild(name)


def configure_stream_logging(level: int = logging.INFO) -> logging.Logger:
    if any(getattr(h, "_queryargs_stream", False) for h in logger.handlers):
        logger.setLevel(level)
        return logger
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler._queryargs_stream = True  # type: ignore[attr-defined]
    logger.addHandler(stream_handler)
    logger.setLevel(level)
    return logger
