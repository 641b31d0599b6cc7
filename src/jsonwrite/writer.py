"""JsonWriter — streaming JSON encoder over a caller-owned byte buffer.

The writer never builds a tree.  Each call checks the nesting stack, writes
its bytes straight into the buffer and updates the stack:

    buf = bytearray(64)
    w = JsonWriter(buf)
    w.open_object()
    w.write_key("a")
    w.write_int(1)
    w.close()
    n = w.finish()          # buf[:n] == b'{"a":1}'

String payloads are copied verbatim.  Quotes, backslashes and control
characters must be escaped by the caller.

One byte of the buffer is always kept free for the terminating ``\\0``
written by ``finish()``.

Pretty mode indents lazily: a line break is written before the first child
of a container, so empty containers stay ``[]`` and ``{}`` rather than a
bracket pair around a blank line.
"""

from __future__ import annotations

import logging
from typing import Union

from jsonwrite.core.config import WriterConfig
from jsonwrite.core.errors import ContractViolationError, OutOfSpaceError
from jsonwrite.model import FormatMode, FrameKind
from jsonwrite.model.frame import Frame

_logger = logging.getLogger(__name__)

Buffer = Union[bytearray, memoryview]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TERMINATOR = 0
_CLOSERS = {FrameKind.ARRAY: b"]", FrameKind.OBJECT: b"}"}


class JsonWriter:
    """Explicit writer context.

    Not safe for concurrent use; give each thread its own writer and buffer.
    In pretty mode an empty container is written as ``[]`` or ``{}`` with no
    line break inside.
    """

    def __init__(
        self,
        buffer: Buffer | None = None,
        capacity: int | None = None,
        *,
        config: WriterConfig | None = None,
    ) -> None:
        self._config = config or WriterConfig()
        self._frames = [Frame() for _ in range(self._config.stack_capacity)]
        self._top = 0
        self._depth = 0
        self._buf: memoryview | None = None
        self._size = 0
        self._pos = 0
        self._apply_config()
        if buffer is not None:
            self.init(buffer, capacity)

    # ── session ─────────────────────────────────────────────────────

    def init(
        self,
        buffer: Buffer,
        capacity: int | None = None,
        *,
        config: WriterConfig | None = None,
    ) -> None:
        """(Re)bind the writer to *buffer* and reset to the root frame.

        *capacity* defaults to ``len(buffer)`` and may not exceed it.  Passing
        *config* switches the formatting for this and later sessions.
        """
        view = memoryview(buffer)
        if view.readonly:
            raise ContractViolationError("destination buffer is read-only")
        view = view.cast("B")
        size = len(view) if capacity is None else capacity
        if size < 0 or size > len(view):
            raise ContractViolationError(
                f"capacity {size} outside buffer of {len(view)} byte(s)"
            )

        if config is not None and config != self._config:
            if config.stack_capacity != self._config.stack_capacity:
                self._frames = [Frame() for _ in range(config.stack_capacity)]
            self._config = config
            self._apply_config()

        self._buf = view
        self._size = size
        self._pos = 0
        self._top = 0
        self._depth = 0
        self._frames[0].reset(FrameKind.ROOT)
        _logger.debug(
            "writer bound to %d byte buffer (mode=%s)", size, self._config.mode.value
        )

    def finish(self) -> int:
        """Terminate the document and return its length in bytes.

        The length excludes the ``\\0`` marker written after the document.
        """
        root = self._top_frame()
        if self._top != 0:
            raise ContractViolationError(
                f"cannot finish with open frames: {self._stack_tags()}"
            )
        if not root.emitted:
            raise ContractViolationError("cannot finish an empty document")
        self._buf[self._pos] = _TERMINATOR
        _logger.debug("document finished: %d byte(s)", self._pos)
        return self._pos

    # ── containers ──────────────────────────────────────────────────

    def open_array(self) -> None:
        self._open(FrameKind.ARRAY, b"[")

    def open_object(self) -> None:
        self._open(FrameKind.OBJECT, b"{")

    def close(self) -> None:
        """Close the innermost array or object."""
        frame = self._top_frame()
        if frame.kind is FrameKind.KEY:
            raise ContractViolationError("cannot close an object with a dangling key")
        if frame.kind is FrameKind.ROOT:
            raise ContractViolationError("close() without an open array or object")

        closer = _CLOSERS[frame.kind]
        if self._pretty and frame.emitted:
            closer = self._newline(self._depth - 1) + closer
        self._raw(closer)
        self._top -= 1
        self._depth -= 1
        self._consume_key()

    def write_key(self, name: str | bytes) -> None:
        """Write an object key.  The next value written belongs to it."""
        frame = self._top_frame()
        if frame.kind is FrameKind.KEY:
            raise ContractViolationError("two keys in a row: the previous key has no value")
        if frame.kind is not FrameKind.OBJECT:
            raise ContractViolationError(
                f"keys are only valid inside an object, not in {frame.kind.value}"
            )
        self._check_push()
        self._raw(self._separator(frame) + b'"' + _as_bytes(name) + b'"' + self._colon)
        frame.emitted = True
        self._push(FrameKind.KEY)

    # ── scalars ─────────────────────────────────────────────────────

    def write_string(self, value: str | bytes) -> None:
        self._value(b'"' + _as_bytes(value) + b'"')

    def write_int(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ContractViolationError(
                f"write_int() expects an int, got {type(value).__name__}"
            )
        if not INT64_MIN <= value <= INT64_MAX:
            raise ContractViolationError(f"{value} does not fit in a signed 64-bit integer")
        self._value(b"%d" % value)

    def write_bool(self, value: bool) -> None:
        self._value(b"true" if value else b"false")

    def write_null(self) -> None:
        self._value(b"null")

    # ── introspection ───────────────────────────────────────────────

    @property
    def config(self) -> WriterConfig:
        return self._config

    @property
    def position(self) -> int:
        return self._pos

    @property
    def size(self) -> int:
        return self._size

    @property
    def remaining(self) -> int:
        """Bytes still available for content (terminator slot excluded)."""
        return max(self._size - self._pos - 1, 0)

    @property
    def depth(self) -> int:
        """Number of currently open arrays and objects."""
        return self._depth

    def getvalue(self) -> bytes:
        """Copy of the bytes written so far."""
        if self._buf is None:
            return b""
        return bytes(self._buf[: self._pos])

    def dump(self) -> str:
        """Render the written text and the stack, e.g. ``{"a":[1\\n[#oka]``.

        Tags: ``#`` root, ``A`` array, ``O`` object, ``K`` key; lowercase once
        the frame has received a child.
        """
        text = self.getvalue().decode("utf-8", errors="replace")
        out = f"{text}\n{self._stack_tags()}"
        _logger.debug("-- dump --\n%s", out)
        return out

    # ── internals ───────────────────────────────────────────────────

    def _apply_config(self) -> None:
        mode = self._config.mode
        self._pretty = mode is FormatMode.PRETTY
        self._colon = b":" if mode is FormatMode.COMPACT else b": "
        self._gap = b" " if mode is FormatMode.NORMAL else b""

    def _top_frame(self) -> Frame:
        if self._buf is None:
            raise ContractViolationError("writer has no buffer; call init() first")
        return self._frames[self._top]

    def _stack_tags(self) -> str:
        return "[" + "".join(f.tag for f in self._frames[: self._top + 1]) + "]"

    def _newline(self, depth: int) -> bytes:
        return b"\n" + b" " * (self._config.indent_unit * depth)

    def _separator(self, frame: Frame) -> bytes:
        """Bytes that must precede the next child of *frame*.

        Pure: the frame's ``emitted`` flag is only set by the caller once the
        write went through.
        """
        if frame.kind is FrameKind.ROOT:
            if frame.emitted:
                raise ContractViolationError("document already has a top-level value")
            return b""
        if frame.kind is FrameKind.KEY:
            return b""
        if frame.emitted:
            if self._pretty:
                return b"," + self._newline(self._depth)
            return b"," + self._gap
        if self._pretty:
            return self._newline(self._depth)
        return b""

    def _raw(self, data: bytes) -> None:
        end = self._pos + len(data)
        if end >= self._size:
            _logger.debug(
                "out of space at offset %d: %d byte(s) requested, %d left",
                self._pos, len(data), self.remaining,
            )
            raise OutOfSpaceError(len(data), self.remaining)
        self._buf[self._pos:end] = data
        self._pos = end

    def _check_push(self) -> None:
        if self._top + 1 >= len(self._frames):
            raise ContractViolationError(
                f"nesting deeper than the stack capacity of {len(self._frames)} frames"
            )

    def _push(self, kind: FrameKind) -> None:
        self._top += 1
        self._frames[self._top].reset(kind)

    def _consume_key(self) -> None:
        # A key frame holds exactly one value; drop it once that is written.
        if self._frames[self._top].kind is FrameKind.KEY:
            self._top -= 1

    def _open(self, kind: FrameKind, bracket: bytes) -> None:
        frame = self._top_frame()
        if frame.kind is FrameKind.OBJECT:
            raise ContractViolationError(f"{kind.value} inside an object needs a key first")
        self._check_push()
        self._raw(self._separator(frame) + bracket)
        frame.emitted = True
        self._push(kind)
        self._depth += 1

    def _value(self, payload: bytes) -> None:
        frame = self._top_frame()
        if frame.kind is FrameKind.OBJECT:
            raise ContractViolationError("value inside an object needs a key first")
        self._raw(self._separator(frame) + payload)
        frame.emitted = True
        self._consume_key()


def _as_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        try:
            return value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ContractViolationError(f"string is not encodable as UTF-8: {e.reason}") from e
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ContractViolationError(f"expected str or bytes, got {type(value).__name__}")
