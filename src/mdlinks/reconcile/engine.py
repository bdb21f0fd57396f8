"""Rename reconciliation across two hash snapshots.

Run once to record a snapshot, move or rename files without editing them,
then run again: links broken by the moves are rewritten to the files' new
locations. Both a document and the files it links to may have moved, since
identity is recovered through content hashes rather than paths. That only
holds while file content stays byte-identical between the two snapshots.

Only inline ``[text](destination)`` links and images are rewritten; the
rewrite is a literal substring substitution and reference-style links
cannot be disambiguated that way. The operation is not atomic across files,
so run it on a version-controlled tree and review the result.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from mdlinks.config import ScanConfig
from mdlinks.document.models import Document
from mdlinks.document.parser import parse_document
from mdlinks.index.discovery import build_snapshot, sha256_bytes
from mdlinks.index.models import FileHash, SnapshotLookups
from mdlinks.index.snapshot import load_snapshot, save_snapshot
from mdlinks.links.destination import DestinationParseError, format_destination, parse_destination
from mdlinks.links.resolver import document_dir, join_clean, relative_destination_path
from mdlinks.links.validator import exists_fn_for
from mdlinks.logging import diagnostics as codes
from mdlinks.logging.diagnostics import Diagnostics
from mdlinks.reconcile.patcher import Replacement, patch_file


@dataclass(slots=True)
class ReconcileOutcome:
    """Summary of one reconcile invocation."""

    initialized: bool = False
    updated_documents: list[str] = field(default_factory=list)
    replacements: int = 0
    snapshot_saved: bool = False

    @property
    def did_updates(self) -> bool:
        return bool(self.updated_documents)


def plan_replacements(
    path: str,
    former_path: str,
    document: Document,
    lookups: SnapshotLookups,
    diagnostics: Diagnostics,
) -> list[Replacement]:
    """Infer new destinations for links that no longer resolve from path."""
    current_dir = document_dir(path)
    former_dir = document_dir(former_path)
    replacements: list[Replacement] = []
    for node in document.references():
        destination = node.destination
        if not destination:
            continue
        try:
            parsed = parse_destination(destination)
        except DestinationParseError:
            continue
        if not parsed.is_relative_path:
            continue
        if exists_fn_for(node)(join_clean(current_dir, parsed.path)):
            continue
        former_target = join_clean(former_dir, parsed.path)
        content_hash = lookups.old_name_to_hash.get(former_target)
        if content_hash is None:
            continue
        candidate = lookups.new_hash_to_name.get(content_hash)
        if candidate is None:
            continue
        try:
            new_path = relative_destination_path(current_dir, candidate)
        except ValueError as exc:
            diagnostics.warning(
                path,
                codes.RELATIVE_PATH_FAILED,
                f"cannot compute path from {current_dir!r} to {candidate!r}: {exc}",
                destination,
            )
            continue
        new_destination = format_destination(new_path, parsed.fragment)
        replacements.append(Replacement(destination, new_destination))
        diagnostics.info(
            path,
            codes.REPLACEMENT,
            f"broken link replacement: {destination!r} -> {new_destination!r}",
        )
    return replacements


def reconcile_document(
    path: str,
    lookups: SnapshotLookups,
    diagnostics: Diagnostics,
) -> int:
    """Repair one document in place; return the number of replacements applied."""
    try:
        data = Path(path).read_bytes()
    except FileNotFoundError:
        diagnostics.warning(path, codes.DOCUMENT_MISSING, "document vanished, skipping")
        return 0
    self_hash = sha256_bytes(data)
    former_path = lookups.old_hash_to_name.get(self_hash)
    if not former_path:
        diagnostics.warning(
            path,
            codes.UNKNOWN_FORMER_NAME,
            f"cannot figure out old name ({self_hash}), skipping",
        )
        return 0
    replacements = plan_replacements(path, former_path, parse_document(data), lookups, diagnostics)
    if not replacements:
        return 0
    if not patch_file(Path(path), replacements):
        return 0
    return len(replacements)


def fix_documents(
    old: list[FileHash],
    new: list[FileHash],
    diagnostics: Diagnostics,
    config: ScanConfig,
    outcome: ReconcileOutcome | None = None,
) -> bool:
    """Reconcile every document of the new snapshot; return True on any update."""
    lookups = SnapshotLookups.build(old, new)
    result = outcome if outcome is not None else ReconcileOutcome()
    for record in new:
        if not config.is_document(record.name):
            continue
        applied = reconcile_document(record.name, lookups, diagnostics)
        if applied:
            result.updated_documents.append(record.name)
            result.replacements += applied
    return result.did_updates


def reconcile(
    state_file: Path,
    root: str,
    diagnostics: Diagnostics,
    config: ScanConfig,
) -> ReconcileOutcome:
    """Record a first snapshot, or repair links against the recorded one.

    Updated documents change content, so the snapshot is rebuilt before it
    is saved.
    """
    outcome = ReconcileOutcome()
    try:
        old = load_snapshot(state_file)
    except FileNotFoundError:
        diagnostics.info("", codes.STATE, f"file {os.fspath(state_file)!r} not found, building one")
        save_snapshot(build_snapshot(root, config), state_file)
        outcome.initialized = True
        outcome.snapshot_saved = True
        diagnostics.info(
            "",
            codes.STATE,
            "state saved, move some files around and then run program with the same flags",
        )
        return outcome

    new = build_snapshot(root, config)
    if not fix_documents(old, new, diagnostics, config, outcome=outcome):
        return outcome
    save_snapshot(build_snapshot(root, config), state_file)
    outcome.snapshot_saved = True
    diagnostics.info(
        "",
        codes.STATE,
        "state updated; run program with the same flags next time you move files "
        "around without modifying them",
    )
    return outcome
