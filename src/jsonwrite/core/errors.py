"""Error taxonomy for the writer.

Two classes, deliberately kept apart:

  ContractViolationError  caller misuse (bad nesting, key/value pairing,
                          second root value, stack overflow).  Not meant to
                          be caught and retried; fix the calling code.
  OutOfSpaceError         the destination buffer is too small.  Raised before
                          anything is written, so the caller can retry the
                          whole document with a larger buffer.
"""

from __future__ import annotations


class JsonWriteError(Exception):
    """Base class for every error raised by jsonwrite."""


class ContractViolationError(JsonWriteError):
    """An operation was called in a state that breaks the document structure."""


class OutOfSpaceError(JsonWriteError):
    """A write would exceed the remaining capacity of the buffer."""

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"buffer exhausted: need {needed} byte(s), {available} available"
        )
