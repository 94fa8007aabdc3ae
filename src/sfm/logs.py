"""
Logging helpers.

Modules get their logger through `get_logger(__name__)`. Nothing is
configured on import; applications call `setup_logging` once.
"""

import logging
import sys
from typing import Optional, TextIO


_STANDARD_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Plain formatter that appends `extra=` fields as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extras:
            line += " " + " ".join(f"{k}={v!r}" for k, v in sorted(extras.items()))
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package hierarchy.

    Args:
        name: Logger name (typically __name__).
    """
    return logging.getLogger(name)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Install a single key=value stream handler on the `sfm` logger."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(KeyValueFormatter())

    logger = logging.getLogger("sfm")
    logger.setLevel(level.upper())
    logger.handlers = [handler]
    # Root handlers would print every line a second time
    logger.propagate = False
    return logger
