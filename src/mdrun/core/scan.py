"""Fence scanner for literate C documents.

A block opens on a line such as ```` ```c:hello.c ```` (source) or
```` ```text:expect.txt ```` (expected output) and closes on a bare
```` ``` ````. Lines inside a block are copied verbatim to the named file;
lines outside any block are ignored.

The scan state is either ``None`` (no block open) or an immutable
`OpenBlock`; `advance` maps one input line to the next state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Iterable, Literal, TextIO

from .errors import ScriptError
from .exit_codes import ERR_FAILURE
from .fs import Materializer
from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext

BlockKind = Literal["source", "log"]
MarkerAction = Literal["open", "close", "content"]

_SOURCE_OPEN_RE = re.compile(r"^```c:(\S+\.c)\s*$")
_LOG_OPEN_RE = re.compile(r"^```text:(\S+)\s*$")
_CLOSE_RE = re.compile(r"^```\s*$")


@dataclass(frozen=True)
class Marker:
    action: MarkerAction
    kind: BlockKind | None = None
    name: str | None = None


CONTENT = Marker("content")
CLOSE = Marker("close")


@dataclass(frozen=True)
class OpenBlock:
    kind: BlockKind
    name: str
    handle: TextIO
    start_line: int
    line_count: int = 0


@dataclass(frozen=True)
class ExtractedBlock:
    kind: BlockKind
    path: str
    start_line: int
    line_count: int
    closed: bool = True

    def as_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind,
            "path": self.path,
            "start_line": self.start_line,
            "line_count": self.line_count,
            "closed": self.closed,
        }


@dataclass(frozen=True)
class ScanResult:
    blocks: tuple[ExtractedBlock, ...] = ()

    def _last(self, kind: BlockKind) -> str | None:
        paths = [block.path for block in self.blocks if block.kind == kind]
        return paths[-1] if paths else None

    @property
    def source(self) -> str | None:
        return self._last("source")

    @property
    def log(self) -> str | None:
        return self._last("log")

    @property
    def sources(self) -> list[str]:
        seen: dict[str, None] = {}
        for block in self.blocks:
            if block.kind == "source":
                seen.setdefault(block.path, None)
        return list(seen)


def classify(line: str, *, recognize_log: bool = True) -> Marker:
    """Classify a line as a fence marker or ordinary content."""
    match = _SOURCE_OPEN_RE.match(line)
    if match:
        return Marker("open", "source", match.group(1))
    if recognize_log:
        match = _LOG_OPEN_RE.match(line)
        if match:
            return Marker("open", "log", match.group(1))
    if _CLOSE_RE.match(line):
        return CLOSE
    return CONTENT


def _finish(block: OpenBlock, closed: bool) -> ExtractedBlock:
    return ExtractedBlock(block.kind, block.name, block.start_line, block.line_count, closed)


def advance(
    state: OpenBlock | None,
    line: str,
    lineno: int,
    materializer: Materializer,
    *,
    recognize_log: bool = True,
) -> tuple[OpenBlock | None, ExtractedBlock | None]:
    """Consume one line; return the next state and the block it closed, if any."""
    marker = classify(line, recognize_log=recognize_log)
    if state is not None:
        if marker is CLOSE:
            materializer.close(state.handle)
            return None, _finish(state, closed=True)
        # open markers inside a block are plain content
        state.handle.write(line)
        return replace(state, line_count=state.line_count + 1), None
    if marker.action == "open" and marker.kind and marker.name:
        return OpenBlock(marker.kind, marker.name, materializer.open(marker.name), lineno), None
    if marker is CLOSE:
        raise ScriptError(f"closing un-opened file at line {lineno}", ERR_FAILURE, kind="unopened_close")
    return None, None


def scan(
    lines: Iterable[str],
    materializer: Materializer,
    *,
    recognize_log: bool = True,
    ctx: RunContext | None = None,
) -> ScanResult:
    """Extract every fenced block in ``lines`` through ``materializer``.

    A block still open at end of input is closed implicitly and reported
    with ``closed=False``.
    """
    blocks: list[ExtractedBlock] = []
    state: OpenBlock | None = None
    try:
        for lineno, line in enumerate(lines, start=1):
            was_open = state is not None
            state, finished = advance(state, line, lineno, materializer, recognize_log=recognize_log)
            if finished is not None:
                blocks.append(finished)
                log_event(ctx, "info", "scan", "close-block", path=finished.path, lines=finished.line_count)
            elif not was_open and state is not None:
                log_event(ctx, "info", "scan", "open-block", kind=state.kind, path=state.name, start_line=lineno)
    finally:
        if state is not None:
            materializer.close(state.handle)
    if state is not None:
        blocks.append(_finish(state, closed=False))
        log_event(ctx, "warning", "scan", "implicit-close", path=state.name, lines=state.line_count)
    return ScanResult(tuple(blocks))
