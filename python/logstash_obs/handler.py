"""
Bridge from the stdlib `logging` module.

Lets code that already logs through `logging.getLogger(...)` emit the same
Logstash-style JSON lines as direct `Logger` calls.
"""

from __future__ import annotations

import logging
from typing import Optional

from .logging import RESERVED_FIELDS, Level, Logger

# Attributes every LogRecord has; anything else arrived through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message", "asctime", "taskName",
}


def level_for(levelno: int) -> Level:
    if levelno >= logging.CRITICAL:
        return Level.FATAL
    if levelno >= logging.ERROR:
        return Level.ERROR
    if levelno >= logging.WARNING:
        return Level.WARN
    if levelno >= logging.INFO:
        return Level.INFO
    return Level.DEBUG


class LogstashHandler(logging.Handler):
    """
    logging.Handler that writes each record as one JSON line.

    The logger name is carried in a `logger` field, `exc_info` becomes the
    record's stack_trace and fields passed with `extra=` are merged at the
    top level.
    """

    def __init__(self, logger: Optional[Logger] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.logger = logger or Logger()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = level_for(record.levelno)
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                rec = self.logger.build(level, message, record.exc_info[1])
            else:
                rec = self.logger.build(level, message)
            rec.setdefault("logger", record.name)
            for key, value in vars(record).items():
                if key in _RECORD_ATTRS or key in RESERVED_FIELDS or key.startswith("_"):
                    continue
                rec.setdefault(key, value)
            self.logger.write(level, rec)
        except Exception:
            self.handleError(record)


def setup_logging(level: str = "INFO", *, logger: Optional[Logger] = None) -> None:
    """
    Configure root logging to emit Logstash JSON lines.
    """

    logging.basicConfig(level=level.upper(), handlers=[LogstashHandler(logger)], force=True)
