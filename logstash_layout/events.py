"""Log event model and conversion from stdlib logging records."""

import logging
import traceback
from dataclasses import dataclass
from typing import Optional

UNKNOWN_LOCATION = "?"


@dataclass(frozen=True)
class LocationInfo:
    file: Optional[str] = None
    class_name: str = UNKNOWN_LOCATION
    method: str = UNKNOWN_LOCATION
    line: Optional[int] = None


@dataclass(frozen=True)
class ThrowableInfo:
    type_name: str
    message: Optional[str] = None
    # First line is the exception header, the rest are frame entries
    stack_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class LogEvent:
    timestamp_ms: int
    level: str
    message: Optional[str]
    logger_name: str
    location: Optional[LocationInfo] = None
    throwable: Optional[ThrowableInfo] = None


def qualified_name(cls: type) -> str:
    """Fully-qualified class name, without the ``builtins.`` prefix."""
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", cls.__name__)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def throwable_from_exception(exc: BaseException, tb=None) -> ThrowableInfo:
    """Render an exception and its traceback as a ThrowableInfo."""
    if tb is None:
        tb = exc.__traceback__
    rendered = "".join(traceback.format_exception(type(exc), exc, tb))
    return ThrowableInfo(
        type_name=qualified_name(type(exc)),
        message=str(exc) if exc.args else None,
        stack_lines=tuple(rendered.rstrip("\n").splitlines()),
    )


def _record_message(record: logging.LogRecord) -> Optional[str]:
    try:
        return record.getMessage()
    except (TypeError, ValueError):
        # msg and args don't match; keep the unformatted template
        return None if record.msg is None else str(record.msg)


def event_from_record(record: logging.LogRecord) -> LogEvent:
    """Convert a stdlib LogRecord into a LogEvent.

    The record's module stands in for the calling class.
    """
    location = LocationInfo(
        file=record.filename or None,
        class_name=record.module or UNKNOWN_LOCATION,
        method=record.funcName or UNKNOWN_LOCATION,
        line=record.lineno if record.lineno else None,
    )

    throwable = None
    if record.exc_info and record.exc_info[1] is not None:
        _, exc, tb = record.exc_info
        throwable = throwable_from_exception(exc, tb)

    return LogEvent(
        timestamp_ms=int(record.created * 1000),
        level=record.levelname,
        message=_record_message(record),
        logger_name=record.name,
        location=location,
        throwable=throwable,
    )
