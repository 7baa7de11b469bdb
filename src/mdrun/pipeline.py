"""Command plans for the two document variants.

``run`` compiles every extracted ``.c`` file and runs the binary.
``check`` compiles the last source block, captures the program's output,
diffs it against the expected-output block when there is one, and removes
the temporary and extracted files. Steps run in order and the first failing
step ends the run.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Callable, Literal

from .core.config import Settings
from .core.context import RunContext
from .core.errors import ScriptError
from .core.exit_codes import ERR_FAILURE
from .core.logging import log_event
from .core.process import CommandResult, run_step
from .core.result import Err, Ok, Result
from .core.scan import ScanResult

Variant = Literal["run", "check"]
StepName = Literal["compile", "execute", "diff", "cleanup"]


@dataclass(frozen=True)
class Step:
    name: StepName
    command: str

    def as_dict(self) -> dict[str, str]:
        return {"step": self.name, "command": self.command}


def _binary_invocation(settings: Settings) -> str:
    binary = shlex.quote(settings.binary)
    return binary if "/" in settings.binary else f"./{binary}"


def compile_command(settings: Settings, sources: list[str]) -> str:
    parts = [settings.compiler, f"-o{shlex.quote(settings.binary)}", *(shlex.quote(s) for s in sources), *settings.libs]
    return " ".join(parts)


def execute_command(settings: Settings, capture: bool = False) -> str:
    cmd = _binary_invocation(settings)
    if capture:
        return f"{cmd} > {shlex.quote(settings.temp_log)}"
    return cmd


def diff_command(settings: Settings, log: str) -> str:
    return f"{settings.diff} {shlex.quote(log)} - < {shlex.quote(settings.temp_log)}"


def cleanup_command(settings: Settings, source: str, log: str | None) -> str:
    # the log operand slot is always emitted, left empty when there is no log block
    operands = [shlex.quote(settings.temp_log), shlex.quote(source), shlex.quote(log) if log else ""]
    return " ".join([settings.remove, *operands])


def _missing_source() -> ScriptError:
    return ScriptError("no source", ERR_FAILURE, kind="missing_source")


def plan_run(scan: ScanResult, settings: Settings) -> list[Step]:
    sources = scan.sources
    if not sources:
        raise _missing_source()
    return [
        Step("compile", compile_command(settings, sources)),
        Step("execute", execute_command(settings)),
    ]


def plan_check(scan: ScanResult, settings: Settings) -> list[Step]:
    source = scan.source
    if source is None:
        raise _missing_source()
    steps = [
        Step("compile", compile_command(settings, [source])),
        Step("execute", execute_command(settings, capture=True)),
    ]
    if scan.log is not None:
        steps.append(Step("diff", diff_command(settings, scan.log)))
    # TODO: a diff reporting differences aborts before cleanup; decide whether cleanup should always run.
    steps.append(Step("cleanup", cleanup_command(settings, source, scan.log)))
    return steps


PLANNERS: dict[Variant, Callable[[ScanResult, Settings], list[Step]]] = {
    "run": plan_run,
    "check": plan_check,
}


def plan(ctx: RunContext, variant: Variant, scan: ScanResult) -> list[Step]:
    steps = PLANNERS[variant](scan, ctx.settings)
    log_event(ctx, "info", "pipeline", "plan", variant=variant, steps=",".join(s.name for s in steps))
    return steps


def run_steps(ctx: RunContext, steps: list[Step]) -> Result[list[CommandResult], ScriptError]:
    done: list[CommandResult] = []
    for step in steps:
        outcome = run_step(step.command, ctx.workdir, ctx)
        if isinstance(outcome, Err):
            return outcome
        done.append(outcome.value)
    return Ok(done)
