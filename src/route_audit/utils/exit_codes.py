"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — routes extracted and written / artifact valid
  1   Error — root routing file missing, extraction failure, invalid artifact

Bad command-line arguments exit with argparse's own status (2).
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
