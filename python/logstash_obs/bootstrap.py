# Process-global logger setup.
from typing import IO, Mapping, Optional

from .logging import Logger, _GlobalLogger, _NopLogger, _set_logger, get_logger


def init(
    env: Optional[Mapping[str, str]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
    enable_logs: bool = True,
    trace_context: bool = True,
) -> _GlobalLogger:
    """Replace the global logger used by the module-level functions.

    With enable_logs=False every call becomes a no-op.
    """
    logger: _GlobalLogger
    if enable_logs:
        logger = Logger(env=env, stdout=stdout, stderr=stderr, trace_context=trace_context)
    else:
        logger = _NopLogger()
    _set_logger(logger)
    return logger


def shutdown() -> None:
    """Flush the global logger's streams."""
    get_logger().flush()
