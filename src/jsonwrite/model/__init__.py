"""Enums shared across the writer and its configuration."""

from __future__ import annotations

from enum import Enum


class FrameKind(str, Enum):
    """Kind of a nesting-stack frame."""

    ROOT = "root"
    ARRAY = "array"
    OBJECT = "object"
    KEY = "key"


class FormatMode(str, Enum):
    """Output style, fixed for the lifetime of a writer session."""

    COMPACT = "compact"
    NORMAL = "normal"
    PRETTY = "pretty"
