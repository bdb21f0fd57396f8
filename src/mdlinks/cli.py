"""Command line entrypoint for link checks and rename reconciliation."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from mdlinks.config import CliOverrides, ConfigError, ScanConfig, load_effective_config
from mdlinks.index.snapshot import SnapshotFormatError
from mdlinks.links.validator import validate_paths
from mdlinks.logging.diagnostics import FATAL, Diagnostics
from mdlinks.logging.report import JsonlFindingsReport
from mdlinks.reconcile.engine import reconcile

EXIT_OK = 0
EXIT_DIRTY = 1
EXIT_FATAL = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for both subcommands."""
    parser = argparse.ArgumentParser(
        prog="mdlinks",
        description="Check and repair relative links between Markdown documents.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", required=False, default=None, help="TOML config file")
    common.add_argument(
        "--extension",
        action="append",
        default=None,
        help="document extension, repeatable (default: .md)",
    )
    common.add_argument("--report", required=False, default=None, help="append findings as JSONL")
    common.add_argument(
        "-q", "--quiet", action="store_true", help="print errors and warnings only"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    check = subparsers.add_parser(
        "check",
        parents=[common],
        help="report broken relative links, images and fragments",
    )
    check.add_argument("paths", nargs="+", metavar="PATH", help="document file or directory")

    move = subparsers.add_parser(
        "reconcile",
        parents=[common],
        help="record file hashes, or rewrite links broken by renames since the last record",
    )
    move.add_argument("-f", "--file", dest="state_file", default=None, help="file to save state")
    move.add_argument("--dir", dest="root", default=".", help="directory to scan")
    return parser


def main(argv: list[str] | None = None, err_stream: TextIO | None = None) -> int:
    """Entrypoint for the mdlinks process."""
    stream = err_stream if err_stream is not None else sys.stderr
    args = build_arg_parser().parse_args(argv)
    diagnostics = Diagnostics()
    try:
        if args.command == "check":
            config = _load_config(args, root=Path.cwd())
            code = _run_check(args.paths, diagnostics, config)
        else:
            config = _load_config(args, root=Path(args.root))
            code = _run_reconcile(args.state_file, args.root, diagnostics, config)
    except (OSError, SnapshotFormatError, ConfigError) as exc:
        diagnostics.error("", FATAL, str(exc))
        code = EXIT_FATAL
    if args.report is not None:
        try:
            JsonlFindingsReport(Path(args.report)).append_findings(
                args.command, diagnostics.findings
            )
        except OSError as exc:
            diagnostics.error("", FATAL, f"cannot write report: {exc}")
            code = EXIT_FATAL
    _emit(diagnostics, stream, quiet=args.quiet)
    return code


def _load_config(args: argparse.Namespace, root: Path) -> ScanConfig:
    extensions = tuple(args.extension) if args.extension else None
    config_path = Path(args.config) if args.config is not None else None
    return load_effective_config(
        config_path=config_path,
        root=root,
        overrides=CliOverrides(document_extensions=extensions),
    )


def _run_check(paths: list[str], diagnostics: Diagnostics, config: ScanConfig) -> int:
    run = validate_paths(paths, diagnostics, config)
    if run.dirty:
        return EXIT_DIRTY
    return EXIT_OK


def _run_reconcile(
    state_file: str | None,
    root: str,
    diagnostics: Diagnostics,
    config: ScanConfig,
) -> int:
    if not state_file:
        diagnostics.error("", FATAL, "state file should be set")
        return EXIT_FATAL
    if not root:
        diagnostics.error("", FATAL, "directory to scan should be set")
        return EXIT_FATAL
    reconcile(Path(state_file), root, diagnostics, config)
    return EXIT_OK


def _emit(diagnostics: Diagnostics, stream: TextIO, quiet: bool) -> None:
    for line in diagnostics.format_lines(include_advisories=not quiet):
        stream.write(f"{line}\n")
    stream.flush()


if __name__ == "__main__":
    raise SystemExit(main())
