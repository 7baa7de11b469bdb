from __future__ import annotations

import argparse
import sys

from .. import __version__, commands
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL
from ..core.logging import log_event
from .output import render_error

DESCRIPTION = "Extract fenced C blocks from a document, then compile, run and check them."


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mdrun", description=DESCRIPTION)
    p.add_argument("--version", action="version", version=f"mdrun {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--cwd", help="write extracted files and run commands in this directory")
    p.add_argument("--config", help="YAML settings file (default: $MDRUN_CONFIG or ./.mdrun.yaml)")
    p.add_argument("--verbose", action="store_true", help="emit structured log events on stderr")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    sub = p.add_subparsers(dest="cmd", required=True)

    run_p = sub.add_parser("run", help="compile every ```c: block together and run the binary")
    run_p.add_argument("--dry-run", action="store_true", help="print planned commands without writing or running")
    run_p.add_argument("inputs", nargs="*", metavar="FILE", help="input documents (default: stdin)")

    check_p = sub.add_parser("check", help="compile the last ```c: block, run it and diff against ```text:")
    check_p.add_argument("--dry-run", action="store_true", help="print planned commands without writing or running")
    check_p.add_argument("inputs", nargs="*", metavar="FILE", help="input documents (default: stdin)")

    extract_p = sub.add_parser("extract", help="write fenced blocks to their files and list them")
    extract_p.add_argument("inputs", nargs="*", metavar="FILE", help="input documents (default: stdin)")

    sub.add_parser("version", help="print the tool version")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    run_id = ns.run_id or ""
    try:
        ctx = RunContext.from_args(
            run_id=ns.run_id,
            cwd=ns.cwd,
            config=ns.config,
            output_format="json" if ns.json else "text",
            verbose=ns.verbose,
            log_json=ns.log_json,
        )
        run_id = ctx.run_id
        log_event(
            ctx,
            "info",
            "config",
            "load",
            path=str(ctx.config_path) if ctx.config_path else "<defaults>",
            workdir=str(ctx.workdir),
            compiler=ctx.settings.compiler,
        )
        if ns.cmd == "version":
            return commands.run_version_command(ctx)
        if ns.cmd == "extract":
            return commands.run_extract_command(ctx, ns)
        if ns.cmd in {"run", "check"}:
            return commands.run_pipeline_command(ctx, ns)
        return 2
    except ScriptError as exc:
        print(render_error(exc, as_json=ns.json, run_id=run_id), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        internal = ScriptError(f"internal error: {exc}", ERR_INTERNAL, kind="internal_error")
        print(render_error(internal, as_json=ns.json, run_id=run_id), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
