"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — document rendered / script valid
  1   Violation — contract violation or script schema failure
  2   Error — buffer too small, missing file, usage error
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
