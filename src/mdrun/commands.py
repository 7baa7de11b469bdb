from __future__ import annotations

import argparse
import fileinput
from pathlib import Path
from typing import Iterable, Iterator

from . import __version__
from .cli.output import emit_json
from .core.context import RunContext
from .core.errors import ScriptError
from .core.exit_codes import ERR_FAILURE, OK
from .core.fs import DiscardingMaterializer, FileMaterializer, Materializer
from .core.scan import ScanResult, scan
from .pipeline import Variant, plan, run_steps


def decode_lines(stream: Iterable[bytes]) -> Iterator[str]:
    """Decode raw input lines, carrying undecodable bytes through as surrogates."""
    for raw in stream:
        yield raw.decode("utf-8", errors="surrogateescape")


def scan_inputs(ctx: RunContext, inputs: list[str], materializer: Materializer, *, recognize_log: bool) -> ScanResult:
    """Scan the named files in order, or stdin when none (or ``-``) are given."""
    for name in inputs:
        if name != "-" and not Path(name).is_file():
            raise ScriptError(f"input not found: {name}", ERR_FAILURE, kind="input_unreadable")
    # binary mode keeps \r\n and reads stdin through sys.stdin.buffer
    with fileinput.FileInput(files=inputs or ("-",), mode="rb") as stream:
        return scan(decode_lines(stream), materializer, recognize_log=recognize_log, ctx=ctx)


def run_extract_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    result = scan_inputs(ctx, ns.inputs, FileMaterializer(ctx.workdir), recognize_log=True)
    if ctx.as_json:
        emit_json(
            "mdrun.extract.v1",
            {
                "schema_name": "mdrun.extract.v1",
                "schema_version": 1,
                "tool": "mdrun",
                "status": "ok",
                "run_id": ctx.run_id,
                "blocks": [block.as_dict() for block in result.blocks],
                "source": result.source,
                "log": result.log,
            },
        )
        return OK
    for block in result.blocks:
        print(f"{block.kind} {block.path} {block.line_count}")
    return OK


def run_pipeline_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    variant: Variant = ns.cmd
    materializer: Materializer = DiscardingMaterializer() if ns.dry_run else FileMaterializer(ctx.workdir)
    result = scan_inputs(ctx, ns.inputs, materializer, recognize_log=(variant == "check"))
    steps = plan(ctx, variant, result)
    if ns.dry_run:
        if ctx.as_json:
            emit_json(
                "mdrun.plan.v1",
                {
                    "schema_name": "mdrun.plan.v1",
                    "schema_version": 1,
                    "tool": "mdrun",
                    "status": "ok",
                    "run_id": ctx.run_id,
                    "variant": variant,
                    "commands": [step.as_dict() for step in steps],
                },
            )
        else:
            for step in steps:
                print(f"$ {step.command}")
        return OK
    run_steps(ctx, steps).unwrap()
    return OK


def run_version_command(ctx: RunContext) -> int:
    if ctx.as_json:
        emit_json(None, {"schema_version": 1, "tool": "mdrun", "status": "ok", "version": __version__})
    else:
        print(f"mdrun {__version__}")
    return OK
