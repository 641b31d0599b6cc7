"""Operation scripts — replay a writer session from YAML or JSON.

A script lists writer calls in order::

    size: 256
    config: {mode: normal}
    ops:
      - open_object
      - {key: a}
      - {int: 1}
      - {key: b}
      - open_array
      - {bool: true}
      - null
      - close
      - close

Bare words name the zero-argument calls (``open_array``, ``open_object``,
``close``, ``null``); a YAML/JSON ``null`` item is also ``write_null()``.
Single-key mappings carry the argument of ``key``, ``string``, ``int`` or
``bool``.  Scripts are checked against ``op_script.schema.json`` before use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from jsonwrite.contracts.load import validate_instance
from jsonwrite.core.config import WriterConfig
from jsonwrite.writer import Buffer, JsonWriter

SCRIPT_SCHEMA = "op_script.schema.json"
DEFAULT_SCRIPT_SIZE = 4096

_NULLARY = {
    "open_array": "open_array",
    "open_object": "open_object",
    "close": "close",
    "null": "write_null",
}

_UNARY = {
    "key": "write_key",
    "string": "write_string",
    "int": "write_int",
    "bool": "write_bool",
}


@dataclass(frozen=True)
class Script:
    """A validated operation script."""

    ops: tuple[Any, ...]
    size: int = DEFAULT_SCRIPT_SIZE
    config: WriterConfig = field(default_factory=WriterConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Script":
        """Validate *data* against the script schema and build a ``Script``.

        Raises ``jsonschema.ValidationError`` for malformed scripts.
        """
        validate_instance(data, SCRIPT_SCHEMA)
        # The schema's "integer" also admits integral floats such as 1.0.
        for index, op in enumerate(data["ops"]):
            if isinstance(op, Mapping) and "int" in op and not isinstance(op["int"], int):
                raise ValueError(f"ops[{index}]: int operation needs an integer, got {op['int']!r}")
        return cls(
            ops=tuple(data["ops"]),
            size=data.get("size", DEFAULT_SCRIPT_SIZE),
            config=WriterConfig.from_mapping(data.get("config")),
        )


def load_script(path: Path) -> Script:
    """Read a YAML (or JSON) script file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return Script.from_mapping(data)


def apply_op(writer: JsonWriter, op: Any) -> None:
    """Issue the writer call described by a single script item."""
    if op is None:
        writer.write_null()
        return
    if isinstance(op, str):
        try:
            method = _NULLARY[op]
        except KeyError:
            raise ValueError(f"unknown operation {op!r}") from None
        getattr(writer, method)()
        return
    if isinstance(op, Mapping) and len(op) == 1:
        (name, arg), = op.items()
        try:
            method = _UNARY[name]
        except KeyError:
            raise ValueError(f"unknown operation {name!r}") from None
        getattr(writer, method)(arg)
        return
    raise ValueError(f"malformed operation {op!r}")


def run_script(script: Script, buffer: Buffer | None = None) -> bytes:
    """Replay *script* and return the finished document.

    A buffer of ``script.size`` bytes is allocated unless *buffer* is given.
    Writer errors propagate unchanged.
    """
    if buffer is None:
        buffer = bytearray(script.size)
    writer = JsonWriter(buffer, config=script.config)
    for op in script.ops:
        apply_op(writer, op)
    length = writer.finish()
    return bytes(memoryview(buffer)[:length])
