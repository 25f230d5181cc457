# Normalizes the loose positional arguments of a log call into one of a
# small set of message shapes plus optional extra fields.

from __future__ import annotations
import os
import traceback
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable


@runtime_checkable
class ErrorLike(Protocol):
    message: str
    stack: str


@dataclass(frozen=True)
class NoMessage:
    pass


@dataclass(frozen=True)
class TextMessage:
    text: str


@dataclass(frozen=True)
class ErrorMessage:
    text: str
    stack: str


@dataclass(frozen=True)
class TextWithError:
    text: str
    error_text: str
    error_stack: str


Message = Union[NoMessage, TextMessage, ErrorMessage, TextWithError]

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    try:
        return str(value)
    except Exception:
        return ""


def _is_error(value: Any) -> bool:
    try:
        return isinstance(value, (BaseException, ErrorLike))
    except Exception:
        return False


def _attr(obj: Any, name: str) -> str:
    try:
        return _safe_str(getattr(obj, name, ""))
    except Exception:
        return ""


def _call_site() -> str:
    # frames of the logging caller, without this package's own frames
    frames = [
        frame for frame in traceback.extract_stack()
        if not os.path.abspath(frame.filename).startswith(_PACKAGE_DIR)
    ]
    return "".join(traceback.StackSummary.from_list(frames).format())


def describe_error(err: Any) -> Tuple[str, str]:
    """Return (message, stack) for an exception or error-like object.

    Exceptions never raised have no traceback; their stack is the call site
    of the log call followed by the "<Type>: <message>" line.
    """
    if isinstance(err, BaseException):
        try:
            if err.__traceback__ is None:
                stack = "Stack (most recent call last):\n" + _call_site() + "".join(
                    traceback.format_exception_only(type(err), err))
            else:
                stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        except Exception:
            stack = ""
        return _safe_str(err), stack
    return _attr(err, "message"), _attr(err, "stack")


def parse_args(args: Sequence[Any]) -> Tuple[Message, Mapping[str, Any]]:
    """Resolve positional log arguments into (message, extras).

    Only the first two arguments are considered; anything else is ignored.
    """
    first = args[0] if len(args) > 0 else None
    second = args[1] if len(args) > 1 else None

    match first:
        case str():
            msg: Message = TextMessage(first)
        case _ if _is_error(first):
            msg = ErrorMessage(*describe_error(first))
        case _:
            msg = NoMessage()

    extras: Mapping[str, Any] = {}
    match msg, second:
        case TextMessage(text=text), _ if _is_error(second):
            msg = TextWithError(text, *describe_error(second))
        case _, Mapping():
            extras = second
    return msg, extras


def render(msg: Message) -> Tuple[str, Optional[str]]:
    """Flatten a message shape into (message, stack_trace)."""
    match msg:
        case TextMessage(text=text):
            return text, None
        case ErrorMessage(text=text, stack=stack):
            return text, stack
        case TextWithError(text=text, error_text=error_text, error_stack=error_stack):
            return f"{text}: {error_text}", error_stack
        case _:
            return "", None
