"""Writer configuration dataclass."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from jsonwrite.model import FormatMode

# Nesting stack capacity in frames, root frame included.  Keys take a frame
# too, so ``{"a": [1]}`` needs four: root, object, key, array.
STACK_CAPACITY = 32

DEFAULT_INDENT_UNIT = 2


@dataclass(frozen=True)
class WriterConfig:
    """Immutable writer configuration.

    ``indent_unit`` is only consulted in ``FormatMode.PRETTY``.
    """

    mode: FormatMode = FormatMode.COMPACT
    indent_unit: int = DEFAULT_INDENT_UNIT
    stack_capacity: int = STACK_CAPACITY

    def __post_init__(self) -> None:
        try:
            mode = FormatMode(self.mode)
        except ValueError:
            choices = ", ".join(m.value for m in FormatMode)
            raise ValueError(
                f"unknown format mode {self.mode!r} (expected one of: {choices})"
            ) from None
        object.__setattr__(self, "mode", mode)
        for name in ("indent_unit", "stack_capacity"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.indent_unit < 0:
            raise ValueError(f"indent_unit must be >= 0, got {self.indent_unit}")
        if self.stack_capacity < 1:
            raise ValueError(
                f"stack_capacity must be >= 1 (room for the root frame), "
                f"got {self.stack_capacity}"
            )

    @classmethod
    def compact(cls, **kwargs: Any) -> "WriterConfig":
        return cls(mode=FormatMode.COMPACT, **kwargs)

    @classmethod
    def normal(cls, **kwargs: Any) -> "WriterConfig":
        return cls(mode=FormatMode.NORMAL, **kwargs)

    @classmethod
    def pretty(cls, indent_unit: int = DEFAULT_INDENT_UNIT, **kwargs: Any) -> "WriterConfig":
        return cls(mode=FormatMode.PRETTY, indent_unit=indent_unit, **kwargs)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "WriterConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown writer config key(s): {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> "WriterConfig":
        """Load configuration from a YAML file."""
        import yaml

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ValueError(f"{path}: expected a mapping at top level")
        return cls.from_mapping(data)
