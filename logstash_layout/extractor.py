"""Extract the Logstash v1 field set from a log event."""

from datetime import datetime, timezone

from logstash_layout.events import UNKNOWN_LOCATION, LogEvent
from logstash_layout.fields import FieldSet, ObjectValue
from logstash_layout.throwable import build_exception_record

FORMAT_VERSION = 1


def format_timestamp(timestamp_ms: int) -> str:
    """Format epoch milliseconds as ``YYYY-MM-DDThh:mm:ss.sssZ`` in UTC."""
    seconds, millis = divmod(int(timestamp_ms), 1000)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{millis:03d}Z"


def _text(value) -> str:
    return "null" if value is None else str(value)


def add_location(fields: FieldSet, event: LogEvent):
    location = event.location
    if location is None:
        fields.put("class", UNKNOWN_LOCATION)
        fields.put("method", UNKNOWN_LOCATION)
        return

    if location.file is not None:
        fields.put("file", location.file)
    fields.put("class", location.class_name or UNKNOWN_LOCATION)
    fields.put("method", location.method or UNKNOWN_LOCATION)
    if location.line is not None:
        fields.put("line", int(location.line))


def add_throwable(fields: FieldSet, event: LogEvent):
    if event.throwable is not None:
        fields.put("exception", ObjectValue(build_exception_record(event.throwable)))


def build_fields(event: LogEvent, host: str) -> FieldSet:
    """Build the ordered field set for *event*.

    Key order: @timestamp, @version, host, level, message, logger, [file],
    class, method, [line], [exception].
    """
    fields = FieldSet()
    # @timestamp and @version are the only required fields
    fields.put("@timestamp", format_timestamp(event.timestamp_ms))
    fields.put("@version", FORMAT_VERSION)

    fields.put("host", host)
    fields.put("level", _text(event.level))
    fields.put("message", _text(event.message))
    fields.put("logger", _text(event.logger_name))

    add_location(fields, event)
    add_throwable(fields, event)
    return fields
