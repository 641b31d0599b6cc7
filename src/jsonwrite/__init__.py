"""jsonwrite — streaming JSON encoder over a fixed-size byte buffer."""

__all__ = [
    "__version__",
    "JsonWriter",
    "WriterConfig",
    "FormatMode",
    "STACK_CAPACITY",
    # Errors
    "JsonWriteError",
    "ContractViolationError",
    "OutOfSpaceError",
    # Helpers
    "emit_value",
    "render",
]
__version__ = "0.1.0"

from jsonwrite.core.config import STACK_CAPACITY, WriterConfig  # noqa: E402
from jsonwrite.core.errors import (  # noqa: E402
    ContractViolationError,
    JsonWriteError,
    OutOfSpaceError,
)
from jsonwrite.model import FormatMode  # noqa: E402
from jsonwrite.utils.tree import emit_value, render  # noqa: E402
from jsonwrite.writer import JsonWriter  # noqa: E402
