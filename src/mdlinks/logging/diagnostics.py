"""Append-only findings sink shared by validation and reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Literal

Severity = Literal["error", "warning", "advisory", "info"]

EMPTY_URL: Final[str] = "empty_url"
PARSE_ERROR: Final[str] = "parse_error"
BROKEN_LINK: Final[str] = "broken_link"
BROKEN_FRAGMENT: Final[str] = "broken_fragment"
UNSTABLE_ANCHOR: Final[str] = "unstable_anchor"
UNKNOWN_FORMER_NAME: Final[str] = "unknown_former_name"
DOCUMENT_MISSING: Final[str] = "document_missing"
RELATIVE_PATH_FAILED: Final[str] = "relative_path_failed"
REPLACEMENT: Final[str] = "replacement"
STATE: Final[str] = "state"
FATAL: Final[str] = "fatal"


@dataclass(slots=True, frozen=True)
class Finding:
    """One reportable observation about a document or the run."""

    path: str
    severity: Severity
    code: str
    message: str
    destination: str | None = None

    def format(self) -> str:
        """Render as a single diagnostic line."""
        if not self.path:
            return self.message
        if self.destination is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}: {_quote(self.destination)}: {self.message}"


@dataclass(slots=True)
class Diagnostics:
    """Collects findings in emission order."""

    _findings: list[Finding] = field(default_factory=list)

    def add(self, finding: Finding) -> None:
        """Append a finding."""
        self._findings.append(finding)

    def error(self, path: str, code: str, message: str, destination: str | None = None) -> None:
        self.add(Finding(path, "error", code, message, destination))

    def warning(
        self, path: str, code: str, message: str, destination: str | None = None
    ) -> None:
        self.add(Finding(path, "warning", code, message, destination))

    def advisory(
        self, path: str, code: str, message: str, destination: str | None = None
    ) -> None:
        self.add(Finding(path, "advisory", code, message, destination))

    def info(self, path: str, code: str, message: str, destination: str | None = None) -> None:
        self.add(Finding(path, "info", code, message, destination))

    @property
    def findings(self) -> tuple[Finding, ...]:
        """Return every finding so far."""
        return tuple(self._findings)

    def errors(self) -> tuple[Finding, ...]:
        """Return findings that make a run dirty."""
        return tuple(item for item in self._findings if item.severity == "error")

    def by_code(self, code: str) -> tuple[Finding, ...]:
        """Return findings with the given code."""
        return tuple(item for item in self._findings if item.code == code)

    def format_lines(self, include_advisories: bool = True) -> list[str]:
        """Render findings; advisories and info lines can be left out."""
        lines: list[str] = []
        for item in self._findings:
            if not include_advisories and item.severity in ("advisory", "info"):
                continue
            lines.append(item.format())
        return lines

    def __len__(self) -> int:
        return len(self._findings)


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
