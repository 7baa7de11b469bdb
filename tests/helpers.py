from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

HELLO_DOC = """# Hello

Some prose that is not extracted.

```c:hello.c
#include <stdio.h>
int main(void) { printf("hi\\n"); return 0; }
```
"""


def check_doc(printed: str, expected: str | None) -> str:
    doc = (
        "The program:\n\n"
        "```c:answer.c\n"
        "#include <stdio.h>\n"
        f'int main(void) {{ printf("{printed}\\n"); return 0; }}\n'
        "```\n"
    )
    if expected is not None:
        doc += f"\nIts output:\n\n```text:expect.txt\n{expected}\n```\n"
    return doc


def write_doc(directory: Path, text: str, name: str = "doc.md") -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


def run_mdrun(*args: str, cwd: Path, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(ROOT / "src")
    env.setdefault("MDRUN_RUN_ID", "pytest-run")
    env.pop("MDRUN_CONFIG", None)
    env.pop("MDRUN_CC", None)
    return subprocess.run(
        [sys.executable, "-m", "mdrun", *args],
        cwd=cwd,
        env=env,
        input=stdin,
        text=True,
        capture_output=True,
        check=False,
    )


requires_toolchain = pytest.mark.skipif(
    shutil.which("gcc") is None or shutil.which("diff") is None,
    reason="gcc and diff are required",
)
