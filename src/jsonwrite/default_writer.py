"""Process-wide writer for call sites that do not want to pass a context.

    from jsonwrite import default_writer as jw

    jw.init(buf)
    jw.open_array()
    jw.write_int(1)
    jw.close()
    n = jw.finish()

Single-threaded only.  The thread that calls ``init()`` owns the writer until
the next ``init()``; calls from any other thread raise
``ContractViolationError``.  Use ``JsonWriter`` directly for anything
concurrent.
"""

from __future__ import annotations

import threading

from jsonwrite.core.config import WriterConfig
from jsonwrite.core.errors import ContractViolationError
from jsonwrite.writer import Buffer, JsonWriter

# Module-level state (set by init)
_writer = JsonWriter()
_owner: int | None = None


def _current() -> JsonWriter:
    if _owner is None:
        raise ContractViolationError("default writer not initialised; call init() first")
    if threading.get_ident() != _owner:
        raise ContractViolationError(
            "default writer used from a thread other than the one that called init()"
        )
    return _writer


def init(
    buffer: Buffer,
    capacity: int | None = None,
    *,
    config: WriterConfig | None = None,
) -> None:
    """Bind the global writer to *buffer* and claim it for the calling thread.

    Every session starts from *config*, or the default ``WriterConfig()``;
    nothing carries over from the previous caller.
    """
    global _owner
    _writer.init(buffer, capacity, config=config or WriterConfig())
    _owner = threading.get_ident()


def get_writer() -> JsonWriter:
    """Return the underlying ``JsonWriter`` (for introspection)."""
    return _current()


def finish() -> int:
    return _current().finish()


def open_array() -> None:
    _current().open_array()


def open_object() -> None:
    _current().open_object()


def close() -> None:
    _current().close()


def write_key(name: str | bytes) -> None:
    _current().write_key(name)


def write_string(value: str | bytes) -> None:
    _current().write_string(value)


def write_int(value: int) -> None:
    _current().write_int(value)


def write_bool(value: bool) -> None:
    _current().write_bool(value)


def write_null() -> None:
    _current().write_null()


def dump() -> str:
    return _current().dump()
