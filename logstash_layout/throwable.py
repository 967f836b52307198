"""Encode exception information as a nested field set."""

from logstash_layout.events import ThrowableInfo
from logstash_layout.fields import FieldSet, RawTextValue
from logstash_layout.serializer import escape_json

ESCAPED_TAB = "\\t"
ESCAPED_NEWLINE = "\\n"


def escape_frames(lines) -> list[str]:
    """Escape each stack trace line for use inside a JSON string.

    A frame line (index >= 1) starting with a tab gets that tab written as a
    literal ``\\t``; the rest of every line is JSON-escaped, so quotes and
    backslashes in Python ``File "..."`` lines stay valid.
    """
    escaped = []
    for i, line in enumerate(lines):
        if i > 0 and line.startswith("\t"):
            escaped.append(ESCAPED_TAB + escape_json(line[1:]))
        else:
            escaped.append(escape_json(line))
    return escaped


def join_lines(lines) -> str:
    """Join lines with a literal ``\\n`` separator."""
    return ESCAPED_NEWLINE.join(lines)


def encode_stack_trace(lines) -> str:
    """Flatten rendered stack trace lines into one JSON-safe string."""
    return join_lines(escape_frames(lines))


def build_exception_record(throwable: ThrowableInfo) -> FieldSet:
    record = FieldSet()
    record.put("class", throwable.type_name)
    record.put("message", throwable.message)
    record.put("stackTrace", RawTextValue(encode_stack_trace(throwable.stack_lines)))
    return record
