from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .clock import utc_now
from .config import Settings, load_settings
from .env import RUN_ID_ENV, getenv
from .errors import ScriptError
from .exit_codes import ERR_CONFIG

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    workdir: Path
    output_format: OutputFormat
    verbose: bool
    log_json: bool
    settings: Settings
    config_path: Path | None

    @property
    def as_json(self) -> bool:
        return self.output_format == "json"

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        cwd: str | None = None,
        config: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        workdir = Path(cwd).resolve() if cwd else Path.cwd()
        if not workdir.is_dir():
            raise ScriptError(f"working directory not found: {workdir}", ERR_CONFIG, kind="config_invalid")
        default_run = f"mdrun-{utc_now().strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv(RUN_ID_ENV) or default_run
        settings, config_path = load_settings(workdir, config)
        return cls(
            run_id=resolved_run_id,
            workdir=workdir,
            output_format=output_format,
            verbose=verbose,
            log_json=log_json,
            settings=settings,
            config_path=config_path,
        )
