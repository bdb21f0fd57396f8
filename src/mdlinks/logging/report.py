"""Structured JSONL findings report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from mdlinks.logging.diagnostics import Finding


@dataclass(slots=True, frozen=True)
class ReportEvent:
    """One finding stamped with its run."""

    timestamp: str
    run_id: str
    command: str
    path: str
    severity: str
    code: str
    message: str
    destination: str | None


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_run_id(command: str, timestamp: str) -> str:
    """Return a run id stable for one command invocation."""
    return f"{command}-{timestamp}"


class JsonlFindingsReport:
    """Append-only JSONL findings report and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def append_findings(self, command: str, findings: tuple[Finding, ...]) -> int:
        """Append findings of one run sharing a single run id."""
        timestamp = utc_timestamp()
        run_id = build_run_id(command, timestamp)
        with self._path.open("a", encoding="utf-8") as handle:
            for finding in findings:
                event = ReportEvent(
                    timestamp=timestamp,
                    run_id=run_id,
                    command=command,
                    path=finding.path,
                    severity=finding.severity,
                    code=finding.code,
                    message=finding.message,
                    destination=finding.destination,
                )
                _write_event(handle, event)
        return len(findings)

    def read(self, limit: int = 50) -> list[dict[str, object]]:
        """Read the most recent events."""
        if limit < 1:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                entries.append(record)
        if len(entries) <= limit:
            return entries
        return entries[-limit:]


def _write_event(handle: TextIO, event: ReportEvent) -> None:
    handle.write(json.dumps(asdict(event), sort_keys=True))
    handle.write("\n")
