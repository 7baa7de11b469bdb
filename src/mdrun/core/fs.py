"""Block file materializers.

`FileMaterializer` creates or truncates each block's file under a root
directory. `DiscardingMaterializer` hands out in-memory buffers so a scan can
run without touching the filesystem (dry runs).
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .errors import ScriptError
from .exit_codes import ERR_FAILURE


@dataclass(frozen=True)
class FileMaterializer:
    root: Path

    def resolve(self, name: str) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.root / path

    def open(self, name: str) -> TextIO:
        path = self.resolve(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" and surrogateescape write the input bytes back unchanged
            return path.open("w", encoding="utf-8", errors="surrogateescape", newline="")
        except OSError as exc:
            raise ScriptError(f"unable to write {path}: {exc.strerror}", ERR_FAILURE, kind="output_unwritable") from exc

    def close(self, handle: TextIO) -> None:
        handle.flush()
        handle.close()


class DiscardingMaterializer:
    def open(self, name: str) -> TextIO:
        return io.StringIO()

    def close(self, handle: TextIO) -> None:
        handle.close()


Materializer = FileMaterializer | DiscardingMaterializer
