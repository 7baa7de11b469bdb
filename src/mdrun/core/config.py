"""Tool settings: built-in defaults, an optional YAML file, then env overrides."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from ..contracts import validate
from .env import COMPILER_ENV, CONFIG_ENV, getenv
from .errors import ScriptError
from .exit_codes import ERR_CONFIG

DEFAULT_CONFIG_NAME = ".mdrun.yaml"


@dataclass(frozen=True)
class Settings:
    compiler: str = "gcc"
    binary: str = "a.out"
    libs: tuple[str, ...] = ("-lm",)
    temp_log: str = "z-log.txt"
    diff: str = "diff -u"
    remove: str = "rm -f"

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "Settings":
        fields = dict(raw)
        if "libs" in fields:
            fields["libs"] = tuple(fields["libs"])
        return cls(**fields)

    def as_dict(self) -> dict[str, object]:
        return {
            "compiler": self.compiler,
            "binary": self.binary,
            "libs": list(self.libs),
            "temp_log": self.temp_log,
            "diff": self.diff,
            "remove": self.remove,
        }


def resolve_config_path(workdir: Path, explicit: str | None) -> Path | None:
    requested = explicit or getenv(CONFIG_ENV)
    if requested:
        path = Path(requested)
        if not path.is_file():
            raise ScriptError(f"config file not found: {path}", ERR_CONFIG, kind="config_invalid")
        return path.resolve()
    default = workdir / DEFAULT_CONFIG_NAME
    return default if default.is_file() else None


def read_config(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid YAML in {path}: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    except OSError as exc:
        raise ScriptError(f"unable to read config {path}: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    if data is None:
        return {}
    validate("mdrun.config.v1", data, code=ERR_CONFIG, kind="config_invalid")
    return data


def load_settings(workdir: Path, explicit: str | None = None) -> tuple[Settings, Path | None]:
    path = resolve_config_path(workdir, explicit)
    settings = Settings.from_mapping(read_config(path)) if path is not None else Settings()
    compiler = getenv(COMPILER_ENV)
    if compiler:
        settings = replace(settings, compiler=compiler)
    return settings, path
