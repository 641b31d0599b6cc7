"""Drive a ``JsonWriter`` from an in-memory Python value.

Conversion rules:
  - ``None``/``bool``/``int``/``str``/``bytes`` map to the matching emitter
  - ``Path`` objects → POSIX strings
  - Dataclasses → objects (via ``dataclasses.asdict``)
  - Mappings → objects, keys converted with ``str()``
  - Lists/tuples → arrays; sets → arrays in ``repr`` order

There is no float emitter, so floats (and anything else) raise ``TypeError``.
Strings are still written verbatim: escape them before handing them over.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Mapping

from jsonwrite.core.config import WriterConfig
from jsonwrite.writer import JsonWriter

DEFAULT_RENDER_SIZE = 4096


def emit_value(writer: JsonWriter, value: Any) -> None:
    """Write *value* as the next value of *writer*."""
    if value is None:
        writer.write_null()
    elif isinstance(value, bool):
        writer.write_bool(value)
    elif isinstance(value, int):
        writer.write_int(value)
    elif isinstance(value, (str, bytes)):
        writer.write_string(value)
    elif isinstance(value, Path):
        writer.write_string(value.as_posix())
    elif is_dataclass(value) and not isinstance(value, type):
        emit_value(writer, asdict(value))
    elif isinstance(value, Mapping):
        writer.open_object()
        for key, item in value.items():
            writer.write_key(str(key))
            emit_value(writer, item)
        writer.close()
    elif isinstance(value, (list, tuple)):
        writer.open_array()
        for item in value:
            emit_value(writer, item)
        writer.close()
    elif isinstance(value, (set, frozenset)):
        emit_value(writer, sorted(value, key=repr))
    else:
        raise TypeError(f"cannot encode {type(value).__name__} value {value!r}")


def render(
    value: Any,
    *,
    size: int = DEFAULT_RENDER_SIZE,
    config: WriterConfig | None = None,
) -> bytes:
    """Encode *value* into a fresh *size*-byte buffer and return the document.

    Raises ``OutOfSpaceError`` when *size* is too small.
    """
    buf = bytearray(size)
    writer = JsonWriter(buf, config=config)
    emit_value(writer, value)
    length = writer.finish()
    return bytes(buf[:length])
