"""Logstash v1 JSON formatter for the stdlib logging package."""

import logging
import sys
import threading
import time

from logstash_layout.buffer import DEFAULT_BUFFER_SIZE, DEFAULT_MAX_BUFFER_SIZE, OutputBuffer
from logstash_layout.config import Config
from logstash_layout.events import LogEvent, event_from_record
from logstash_layout.extractor import FORMAT_VERSION, build_fields, format_timestamp
from logstash_layout.fields import FieldSet
from logstash_layout.hostname import HostNameContext, default_context
from logstash_layout.serializer import ESCAPE_MODES, STRICT, to_json, write_object


class LogstashFormatter(logging.Formatter):
    """Formats each record as one Logstash-compatible JSON line.

    The exception, if any, is encoded inside the JSON document, so nothing
    is appended after it the way logging.Formatter does for tracebacks.

    One output buffer is reused across calls and guarded by a lock, so a
    formatter shared between handlers or threads formats one event at a time.
    """

    def __init__(self, hostname: str | None = None, escape_mode: str = STRICT,
                 initial_buffer_size: int = DEFAULT_BUFFER_SIZE,
                 max_buffer_size: int = DEFAULT_MAX_BUFFER_SIZE,
                 host_context: HostNameContext | None = None):
        super().__init__()
        if escape_mode not in ESCAPE_MODES:
            raise ValueError(f"escape_mode must be one of {ESCAPE_MODES}, got {escape_mode!r}")
        self.escape_mode = escape_mode
        self._hostname = hostname
        self._host_context = host_context or default_context
        self._buffer = OutputBuffer(initial_buffer_size, max_buffer_size)
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config) -> "LogstashFormatter":
        return cls(
            hostname=config.hostname,
            escape_mode=config.escape_mode,
            initial_buffer_size=config.initial_buffer_size,
            max_buffer_size=config.max_buffer_size,
        )

    @property
    def host(self) -> str:
        return self._hostname or self._host_context.get()

    def format(self, record: logging.LogRecord) -> str:
        try:
            event = event_from_record(record)
        except Exception as e:
            return self._fallback(getattr(record, "levelname", None),
                                  getattr(record, "name", None), e)
        return self.format_event(event)

    def format_event(self, event: LogEvent) -> str:
        """Render *event* as a JSON document terminated by a newline."""
        try:
            fields = build_fields(event, self.host)
            with self._lock:
                self._buffer.reset()
                write_object(self._buffer, fields, self.escape_mode)
                self._buffer.write("\n")
                return self._buffer.getvalue()
        except Exception as e:
            return self._fallback(event.level, event.logger_name, e)

    def _fallback(self, level, logger_name, error: Exception) -> str:
        # Logging from here could re-enter this formatter
        fields = FieldSet()
        fields.put("@timestamp", format_timestamp(int(time.time() * 1000)))
        fields.put("@version", FORMAT_VERSION)
        fields.put("level", "null" if level is None else str(level))
        fields.put("logger", "null" if logger_name is None else str(logger_name))
        fields.put("message", f"Failed to format log event: {type(error).__name__}: {error}")
        return to_json(fields, STRICT) + "\n"


def configure_logging(config: Config | None = None) -> logging.Handler:
    """Install a stream handler with a LogstashFormatter on the root logger."""
    config = config or Config()
    stream = sys.stdout if config.stream == "stdout" else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogstashFormatter.from_config(config))

    root = logging.getLogger()
    root.setLevel(config.level)
    root.handlers = [handler]
    return handler
