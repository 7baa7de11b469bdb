"""CLI payload output helpers."""

from __future__ import annotations

import json

from ..contracts import validate
from ..core.errors import ScriptError


def dumps_json(payload: object) -> str:
    return json.dumps(payload, sort_keys=True)


def emit_json(schema_name: str | None, payload: dict[str, object]) -> None:
    if schema_name is not None:
        validate(schema_name, payload)
    print(dumps_json(payload))


def render_error(exc: ScriptError, *, as_json: bool, run_id: str = "") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "mdrun.error.v1",
                "schema_version": 1,
                "tool": "mdrun",
                "run_id": run_id,
                "status": "error",
                "errors": [exc.as_row()],
            }
        )
    return exc.message
