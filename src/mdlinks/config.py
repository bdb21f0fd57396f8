"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "mdlinks.toml"
DEFAULT_DOCUMENT_EXTENSIONS = (".md",)
HIDDEN_PREFIX = "."


class ConfigError(ValueError):
    """Raised when configuration values are invalid."""


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Tree walking and document selection settings."""

    document_extensions: tuple[str, ...] = DEFAULT_DOCUMENT_EXTENSIONS
    skip_hidden_files: bool = True

    def is_document(self, name: str) -> bool:
        """Return True when name carries a document extension."""
        return name.endswith(self.document_extensions)


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    document_extensions: tuple[str, ...] | None = None
    skip_hidden_files: bool | None = None


def default_config() -> ScanConfig:
    """Build the default configuration."""
    return ScanConfig()


def load_config_file(path: Path) -> dict[str, object]:
    """Load a TOML config file; a missing file yields an empty payload."""
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        try:
            payload = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: invalid TOML: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{key}' must be a table.")
    return value


def _extensions(value: object, name: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not value:
        raise ConfigError(f"Config field '{name}' must be a non-empty list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip("."):
            raise ConfigError(f"Config field '{name}' must contain only extensions like '.md'.")
        output.append(normalize_extension(item))
    return tuple(output)


def normalize_extension(extension: str) -> str:
    """Return extension with exactly one leading dot."""
    stripped = extension.strip()
    if not stripped.startswith("."):
        return f".{stripped}"
    return stripped


def merge_config(
    base: ScanConfig, payload: dict[str, object], overrides: CliOverrides
) -> ScanConfig:
    """Merge defaults, config file, then CLI overrides."""
    scan_payload = _get_table(payload, "scan")

    document_extensions = base.document_extensions
    if "document_extensions" in scan_payload:
        document_extensions = _extensions(
            scan_payload["document_extensions"], "scan.document_extensions"
        )

    skip_hidden_files = base.skip_hidden_files
    if "skip_hidden_files" in scan_payload:
        raw_skip = scan_payload["skip_hidden_files"]
        if not isinstance(raw_skip, bool):
            raise ConfigError("Config field 'scan.skip_hidden_files' must be a boolean.")
        skip_hidden_files = raw_skip

    merged = ScanConfig(
        document_extensions=document_extensions,
        skip_hidden_files=skip_hidden_files,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ScanConfig, overrides: CliOverrides) -> ScanConfig:
    """Apply startup overrides at highest precedence."""
    document_extensions = config.document_extensions
    if overrides.document_extensions:
        document_extensions = _extensions(
            list(overrides.document_extensions), "overrides.document_extensions"
        )
    skip_hidden_files = config.skip_hidden_files
    if overrides.skip_hidden_files is not None:
        skip_hidden_files = overrides.skip_hidden_files
    return ScanConfig(
        document_extensions=document_extensions,
        skip_hidden_files=skip_hidden_files,
    )


def load_effective_config(
    config_path: Path | None = None,
    root: Path | None = None,
    overrides: CliOverrides | None = None,
) -> ScanConfig:
    """Load config using merge order defaults -> config file -> overrides.

    An explicit config_path must exist; otherwise ``mdlinks.toml`` under root
    is picked up when present.
    """
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        payload = load_config_file(config_path)
    elif root is not None:
        payload = load_config_file(root / CONFIG_FILENAME)
    else:
        payload = {}
    return merge_config(default_config(), payload, overrides or CliOverrides())


def is_hidden_name(name: str) -> bool:
    """Return True for hidden entries, never for "." and ".."."""
    return name.startswith(HIDDEN_PREFIX) and name not in (".", "..")
