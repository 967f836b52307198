"""Compact JSON serializer for field sets.

Two escaping modes are supported:

* ``strict`` escapes quotes, backslashes and control characters in every
  text value, so the output is always valid JSON.
* ``compat`` writes text values verbatim. Callers must pre-escape anything
  that could break a JSON string; stack traces are always pre-escaped by
  the exception encoder, while messages, logger names and class names are
  assumed to be free of raw quotes, backslashes, tabs and newlines. This
  is a known limitation kept for consumers that rely on the unescaped
  output.

``RawTextValue`` is written verbatim in both modes.
"""

import io
import json
import math

from logstash_layout.fields import (
    FieldSet,
    NullValue,
    NumberValue,
    ObjectValue,
    RawTextValue,
    TextValue,
)

STRICT = "strict"
COMPAT = "compat"
ESCAPE_MODES = (STRICT, COMPAT)


def escape_json(text: str) -> str:
    """Escape a string for use between JSON double quotes."""
    return json.dumps(text, ensure_ascii=False)[1:-1]


def _write_number(buf, value):
    if isinstance(value, float):
        if not math.isfinite(value):
            # NaN and infinities have no JSON literal
            buf.write(f'"{value}"')
        else:
            buf.write(repr(value))
    else:
        buf.write(str(value))


def write_object(buf, fields: FieldSet, escape_mode: str = STRICT):
    """Write *fields* as a compact JSON object to the text buffer *buf*."""
    buf.write("{")
    first = True
    for key, value in fields.items():
        if not first:
            buf.write(",")
        first = False
        buf.write('"')
        buf.write(key if escape_mode == COMPAT else escape_json(key))
        buf.write('":')

        if isinstance(value, TextValue):
            text = value.value if escape_mode == COMPAT else escape_json(value.value)
            buf.write(f'"{text}"')
        elif isinstance(value, RawTextValue):
            buf.write(f'"{value.value}"')
        elif isinstance(value, NumberValue):
            _write_number(buf, value.value)
        elif isinstance(value, NullValue):
            buf.write("null")
        elif isinstance(value, ObjectValue):
            write_object(buf, value.fields, escape_mode)
        else:
            raise TypeError(f"Unsupported field value: {value!r}")
    buf.write("}")


def to_json(fields: FieldSet, escape_mode: str = STRICT) -> str:
    """Serialize *fields* to a JSON object string (no trailing newline)."""
    buf = io.StringIO()
    write_object(buf, fields, escape_mode)
    return buf.getvalue()
