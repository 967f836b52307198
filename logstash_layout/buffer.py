"""Reusable text output buffer for the formatter's hot path."""

import io
import logging

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 256
DEFAULT_MAX_BUFFER_SIZE = 4 * DEFAULT_BUFFER_SIZE


class OutputBuffer:
    """A StringIO that is truncated between uses instead of reallocated.

    If one write cycle grew the buffer past ``max_size`` characters, the next
    reset() drops it and starts over, so a single huge event (a long stack
    trace, say) does not pin that memory for the formatter's lifetime.

    The shrink rule compares the high-water mark (the most characters held
    since the last fresh StringIO) against ``max_size``. StringIO takes no
    capacity hint, so ``initial_size`` only anchors the default ratio
    (``max_size`` = 4 x ``initial_size``) and bounds the allowed ``max_size``.

    Not safe for concurrent use; callers hold one formatting call at a time.
    """

    def __init__(self, initial_size: int = DEFAULT_BUFFER_SIZE,
                 max_size: int = DEFAULT_MAX_BUFFER_SIZE):
        if initial_size <= 0:
            raise ValueError("initial_size must be positive")
        if max_size < initial_size:
            raise ValueError("max_size must be >= initial_size")
        self.initial_size = initial_size
        self.max_size = max_size
        self.reallocations = 0
        self._buf = io.StringIO()
        self._high_water = 0

    def reset(self):
        """Prepare the buffer for a new formatting call."""
        self._high_water = max(self._high_water, self._buf.tell())
        if self._high_water > self.max_size:
            logger.debug("Output buffer grew to %d chars, reallocating", self._high_water)
            self._buf = io.StringIO()
            self._high_water = 0
            self.reallocations += 1
        else:
            self._buf.seek(0)
            self._buf.truncate(0)

    def write(self, text: str) -> int:
        return self._buf.write(text)

    def getvalue(self) -> str:
        return self._buf.getvalue()

    @property
    def high_water(self) -> int:
        return max(self._high_water, self._buf.tell())

    def __len__(self) -> int:
        return self._buf.tell()
