__all__ = [
    "init", "shutdown", "get_logger",
    "Logger", "Level",
    "fatal", "error", "warn", "info", "debug", "verbose", "silly",
    "LogstashHandler", "setup_logging",
]
__version__ = "0.1.0"

from .logging import Level, Logger, get_logger, fatal, error, warn, info, debug, verbose, silly
from .bootstrap import init, shutdown
from .handler import LogstashHandler, setup_logging
