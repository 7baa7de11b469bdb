"""Environment variables read by mdrun."""

from __future__ import annotations

import os

CONFIG_ENV = "MDRUN_CONFIG"
COMPILER_ENV = "MDRUN_CC"
RUN_ID_ENV = "MDRUN_RUN_ID"


def getenv(name: str) -> str | None:
    """Return the variable's value; unset and empty both read as None."""
    return os.environ.get(name) or None
