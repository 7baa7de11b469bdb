from __future__ import annotations

import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ScriptError
from .exit_codes import ERR_FAILURE
from .logging import log_event
from .result import Err, Ok, Result

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    command: str
    code: int
    duration_ms: int

    @property
    def ok(self) -> bool:
        return self.code == 0


def run_command(command: str, cwd: Path, ctx: RunContext | None = None) -> CommandResult:
    """Run ``command`` through the shell, passing its output straight through."""
    sys.stdout.flush()
    sys.stderr.write(f"$ {command}\n")
    sys.stderr.flush()
    started = time.monotonic()
    proc = subprocess.run(command, shell=True, cwd=cwd, check=False)
    result = CommandResult(
        command=command,
        code=proc.returncode,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    log_event(
        ctx,
        "info" if result.ok else "error",
        "process",
        "run-command",
        command=command,
        cwd=str(cwd),
        code=result.code,
        duration_ms=result.duration_ms,
    )
    return result


def run_step(command: str, cwd: Path, ctx: RunContext | None = None) -> Result[CommandResult, ScriptError]:
    result = run_command(command, cwd, ctx)
    if result.ok:
        return Ok(result)
    return Err(ScriptError(f"rc={result.code}", ERR_FAILURE, kind="command_failed"))
