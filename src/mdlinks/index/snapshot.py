"""Persisted hash snapshot state."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from mdlinks.index.models import FileHash

_TEMP_PREFIX = ".mdlinks-"


@dataclass(slots=True, frozen=True)
class SnapshotFormatError(Exception):
    """Raised when a persisted snapshot line is not '<hash> <path>'."""

    line_number: int
    line: str

    def __str__(self) -> str:
        return f"invalid snapshot line {self.line_number}: {self.line!r}"


def parse_snapshot_line(line: str, line_number: int) -> FileHash:
    """Split a line on its first whitespace run into hash and path."""
    fields = line.strip().split(maxsplit=1)
    if len(fields) != 2:
        raise SnapshotFormatError(line_number=line_number, line=line)
    digest, name = fields[0], fields[1].strip()
    if not digest or not name:
        raise SnapshotFormatError(line_number=line_number, line=line)
    return FileHash(name=name, hash=digest)


def load_snapshot(path: Path) -> list[FileHash]:
    """Load a snapshot; FileNotFoundError signals there is no prior state."""
    records: list[FileHash] = []
    with path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as handle:
        for line_number, raw_line in enumerate(handle, start=1):
            records.append(parse_snapshot_line(raw_line.rstrip("\r\n"), line_number))
    return records


def save_snapshot(records: list[FileHash], path: Path) -> None:
    """Write a snapshot through a temp file renamed over path."""
    directory = path.parent if str(path.parent) else Path(".")
    fd, tmp_name = tempfile.mkstemp(prefix=_TEMP_PREFIX, dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as handle:
            for record in records:
                handle.write(record.to_line())
                handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
