# Logstash-style JSON line logger.
# One call -> one compact JSON record on stdout (WARN/INFO/DEBUG) or stderr (FATAL/ERROR).

from __future__ import annotations
import enum
import json, math, sys
from datetime import datetime, timezone
from typing import IO, Any, Callable, Dict, Mapping, Optional, Protocol

from .config import read_metadata
from .message import _safe_str, parse_args, render
from .tracing import current_trace_fields

SCHEMA_VERSION = 1


class Level(str, enum.Enum):
    FATAL = "FATAL"
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"


STREAM_BY_LEVEL: Dict[Level, str] = {
    Level.FATAL: "stderr",
    Level.ERROR: "stderr",
    Level.WARN: "stdout",
    Level.INFO: "stdout",
    Level.DEBUG: "stdout",
}

# Public method name -> emitted level. verbose/silly are DEBUG aliases.
METHOD_LEVELS: Dict[str, Level] = {
    "fatal": Level.FATAL,
    "error": Level.ERROR,
    "warn": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
    "verbose": Level.DEBUG,
    "silly": Level.DEBUG,
}

RESERVED_FIELDS = frozenset({
    "@timestamp", "@version", "application", "message", "level",
    "environment", "host", "stack_trace", "trace_id", "span_id",
})


class _GlobalLogger(Protocol):
    def fatal(self, *args: Any) -> None: ...
    def error(self, *args: Any) -> None: ...
    def warn(self, *args: Any) -> None: ...
    def info(self, *args: Any) -> None: ...
    def debug(self, *args: Any) -> None: ...
    def verbose(self, *args: Any) -> None: ...
    def silly(self, *args: Any) -> None: ...
    def flush(self) -> None: ...


class _NopLogger:
    def fatal(self, *args: Any) -> None: pass
    def error(self, *args: Any) -> None: pass
    def warn(self, *args: Any) -> None: pass
    def info(self, *args: Any) -> None: pass
    def debug(self, *args: Any) -> None: pass
    def verbose(self, *args: Any) -> None: pass
    def silly(self, *args: Any) -> None: pass
    def flush(self) -> None: pass


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(when: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2018-06-05T18:20:42.345Z."""
    when = when.astimezone(timezone.utc)
    return when.strftime("%Y-%m-%dT%H:%M:%S.") + f"{when.microsecond // 1000:03d}Z"


def _finite(value: Any, _seen: frozenset = frozenset()) -> Any:
    # NaN/Infinity are not JSON; they go out as null
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, (dict, list, tuple)):
        return value
    if id(value) in _seen:
        raise ValueError("Circular reference detected")
    _seen = _seen | {id(value)}
    if isinstance(value, dict):
        return {key: _finite(item, _seen) for key, item in value.items()}
    return [_finite(item, _seen) for item in value]


def _encode(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False, default=_safe_str)


def _encodable(value: Any) -> Any:
    try:
        cleaned = _finite(value)
        _encode(cleaned)
    except (TypeError, ValueError, RecursionError):
        return _safe_str(value)
    return cleaned


def _dumps(rec: Mapping[str, Any]) -> str:
    """Serialize a record to one JSON line without raising.

    Values json cannot take (non-str nested keys, circular references) are
    replaced by their str() form; every other field is kept as is.
    """
    try:
        rec = {key: _finite(value) for key, value in rec.items()}
        return _encode(rec)
    except (TypeError, ValueError, RecursionError):
        return _encode({key: _encodable(value) for key, value in rec.items()})


class Logger:
    """Builds and writes one record per call.

    env, stdout and stderr default to the live process state, looked up at
    call time so environment changes and swapped streams are picked up.
    """

    def __init__(
        self,
        env: Optional[Mapping[str, str]] = None,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        trace_context: bool = True,
    ) -> None:
        self._env = env
        self._stdout = stdout
        self._stderr = stderr
        self._clock = clock or _utc_now
        self._trace_context = trace_context

    def build(self, level: Level, *args: Any) -> Dict[str, Any]:
        meta = read_metadata(self._env)
        msg, extras = parse_args(args)
        message, stack = render(msg)
        rec: Dict[str, Any] = {
            "@timestamp": format_timestamp(self._clock()),
            "@version": SCHEMA_VERSION,
            "application": meta.application,
            "message": message,
            "level": level.value,
        }
        if meta.environment is not None:
            rec["environment"] = meta.environment
        if meta.host is not None:
            rec["host"] = meta.host
        if stack is not None:
            rec["stack_trace"] = stack
        if self._trace_context:
            rec.update(current_trace_fields())
        for key, value in extras.items():
            key = key if isinstance(key, str) else str(key)
            if key not in RESERVED_FIELDS:
                rec[key] = value
        return rec

    def stream_for(self, level: Level) -> IO[str]:
        if STREAM_BY_LEVEL[level] == "stderr":
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def log(self, level: Level, *args: Any) -> None:
        self.write(level, self.build(level, *args))

    def write(self, level: Level, rec: Mapping[str, Any]) -> None:
        _emit(self.stream_for(level), rec)

    def fatal(self, *args: Any) -> None: self.log(Level.FATAL, *args)
    def error(self, *args: Any) -> None: self.log(Level.ERROR, *args)
    def warn(self, *args: Any) -> None: self.log(Level.WARN, *args)
    def info(self, *args: Any) -> None: self.log(Level.INFO, *args)
    def debug(self, *args: Any) -> None: self.log(Level.DEBUG, *args)
    def verbose(self, *args: Any) -> None: self.log(Level.DEBUG, *args)
    def silly(self, *args: Any) -> None: self.log(Level.DEBUG, *args)

    def flush(self) -> None:
        self.stream_for(Level.INFO).flush()
        self.stream_for(Level.ERROR).flush()


def _emit(stream: IO[str], rec: Mapping[str, Any]) -> None:
    stream.write(_dumps(rec) + "\n")
    stream.flush()


_global_logger: _GlobalLogger = Logger()


def get_logger() -> _GlobalLogger:
    return _global_logger


def _set_logger(logger: _GlobalLogger) -> None:
    global _global_logger
    _global_logger = logger


def fatal(*args: Any) -> None: get_logger().fatal(*args)
def error(*args: Any) -> None: get_logger().error(*args)
def warn(*args: Any) -> None: get_logger().warn(*args)
def info(*args: Any) -> None: get_logger().info(*args)
def debug(*args: Any) -> None: get_logger().debug(*args)
def verbose(*args: Any) -> None: get_logger().verbose(*args)
def silly(*args: Any) -> None: get_logger().silly(*args)
