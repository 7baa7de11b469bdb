"""The single exception type for failures reported to the user.

``kind`` names the failure (``unopened_close``, ``missing_source``,
``command_failed``, ``config_invalid``, ...); ``code`` is the process exit
status the CLI returns for it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message

    def as_row(self) -> dict[str, object]:
        return {"code": self.code, "kind": self.kind, "message": self.message}
