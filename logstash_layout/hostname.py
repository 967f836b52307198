"""Process-scoped host name context, resolved once and reused for every event."""

import logging
import socket
import threading

logger = logging.getLogger(__name__)

UNKNOWN_HOST = "unknown"


class HostNameContext:
    """Lazily resolves and memoizes the local host name.

    Two threads racing on the first ``get()`` may both resolve; whichever
    result is stored first wins and every later call returns it.
    """

    def __init__(self, resolver=None):
        self._resolver = resolver or socket.gethostname
        self._lock = threading.Lock()
        self._host: str | None = None

    def get(self) -> str:
        host = self._host
        if host is not None:
            return host
        resolved = self._resolve()
        with self._lock:
            if self._host is None:
                self._host = resolved
            return self._host

    def _resolve(self) -> str:
        try:
            host = self._resolver()
        except OSError as e:
            logger.warning("Host name resolution failed (%s), using %r", e, UNKNOWN_HOST)
            return UNKNOWN_HOST
        return host or UNKNOWN_HOST

    def reset(self):
        """Forget the memoized value so the next get() resolves again."""
        with self._lock:
            self._host = None


default_context = HostNameContext()
