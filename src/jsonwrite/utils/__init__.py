"""Shared utilities for jsonwrite."""

from jsonwrite.utils.exit_codes import ExitCode
from jsonwrite.utils.tree import emit_value, render

__all__ = [
    "ExitCode",
    "emit_value",
    "render",
]
