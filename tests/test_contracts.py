from __future__ import annotations

import pytest

from mdrun.contracts import load_catalog, schema_path_for, validate
from mdrun.core.errors import ScriptError


def test_catalog_entries_point_at_bundled_schemas() -> None:
    catalog = load_catalog()
    assert sorted(catalog) == ["mdrun.config.v1", "mdrun.extract.v1", "mdrun.plan.v1"]
    for name in catalog:
        assert schema_path_for(name).is_file()


def test_unknown_schema_is_an_error() -> None:
    with pytest.raises(ScriptError) as err:
        schema_path_for("mdrun.nope.v1")
    assert err.value.kind == "schema_validation"


def test_plan_payload_validation_reports_location() -> None:
    payload = {
        "schema_name": "mdrun.plan.v1",
        "schema_version": 1,
        "tool": "mdrun",
        "status": "ok",
        "run_id": "r",
        "variant": "check",
        "commands": [{"step": "link", "command": "ld"}],
    }
    with pytest.raises(ScriptError) as err:
        validate("mdrun.plan.v1", payload)
    assert "at commands/0/step" in str(err.value)
    payload["commands"] = [{"step": "compile", "command": "gcc -oa.out a.c -lm"}]
    validate("mdrun.plan.v1", payload)
