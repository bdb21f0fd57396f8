"""Per-document link validation and multi-path validation runs."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from mdlinks.anchors.cache import AnchorCache
from mdlinks.anchors.extractor import extract_anchors, is_unstable_anchor
from mdlinks.config import ScanConfig
from mdlinks.document.models import Document, Image, Link
from mdlinks.document.parser import parse_document
from mdlinks.index.discovery import iter_documents
from mdlinks.links.destination import DestinationParseError, parse_destination
from mdlinks.links.resolver import (
    ExistsFn,
    file_exists,
    file_or_dir_exists,
    resolve_destination_path,
)
from mdlinks.logging import diagnostics as codes
from mdlinks.logging.diagnostics import Diagnostics

MSG_EMPTY_URL = "empty url"
MSG_BROKEN_LINK = "broken link"
MSG_BROKEN_FRAGMENT = "broken link (fragment points to non-existent id)"
MSG_UNSTABLE_ANCHOR = "unstable slug reference, may become incorrect on unrelated header changes"


@dataclass(slots=True)
class ValidationRun:
    """Outcome of validating one or more input paths."""

    documents_checked: int = 0
    dirty_documents: list[str] = field(default_factory=list)

    @property
    def dirty(self) -> bool:
        """True when at least one document had a reportable error."""
        return bool(self.dirty_documents)


def exists_fn_for(node: Link | Image) -> ExistsFn:
    """Links may target directories, images must target regular files."""
    if isinstance(node, Image):
        return file_exists
    return file_or_dir_exists


def validate_document(
    path: str,
    document: Document,
    cache: AnchorCache,
    diagnostics: Diagnostics,
    config: ScanConfig,
) -> bool:
    """Check every link and image of a parsed document; return True if dirty."""
    own_anchors = extract_anchors(document)
    dirty = False
    for node in document.references():
        destination = node.destination
        if not destination:
            diagnostics.warning(path, codes.EMPTY_URL, MSG_EMPTY_URL)
            continue
        try:
            parsed = parse_destination(destination)
        except DestinationParseError as exc:
            diagnostics.error(path, codes.PARSE_ERROR, exc.reason, destination)
            dirty = True
            continue

        if parsed.is_anchor_only:
            if parsed.fragment not in own_anchors:
                diagnostics.error(path, codes.BROKEN_LINK, MSG_BROKEN_LINK, destination)
                dirty = True
            elif is_unstable_anchor(parsed.fragment, own_anchors):
                diagnostics.advisory(path, codes.UNSTABLE_ANCHOR, MSG_UNSTABLE_ANCHOR, destination)
            continue
        if not parsed.is_relative_path:
            continue

        filename = resolve_destination_path(path, parsed.path)
        if not exists_fn_for(node)(filename):
            diagnostics.error(path, codes.BROKEN_LINK, MSG_BROKEN_LINK, destination)
            dirty = True
        if not parsed.fragment or not config.is_document(filename):
            continue
        if not cache.lookup(filename, parsed.fragment):
            diagnostics.error(path, codes.BROKEN_FRAGMENT, MSG_BROKEN_FRAGMENT, destination)
            dirty = True
            continue
        target_anchors = cache.anchors_for(filename) or frozenset()
        if is_unstable_anchor(parsed.fragment, target_anchors):
            diagnostics.advisory(path, codes.UNSTABLE_ANCHOR, MSG_UNSTABLE_ANCHOR, destination)
    return dirty


def validate_file(
    path: str,
    cache: AnchorCache,
    diagnostics: Diagnostics,
    config: ScanConfig,
) -> bool:
    """Read, parse and validate one document; OSError propagates."""
    document = parse_document(Path(path).read_bytes())
    return validate_document(path, document, cache, diagnostics, config)


def validate_path(
    path: str,
    cache: AnchorCache,
    diagnostics: Diagnostics,
    config: ScanConfig,
    run: ValidationRun | None = None,
) -> bool:
    """Validate a document file or every document under a directory.

    Dirty documents do not stop the walk; I/O errors do.
    """
    outcome = run if run is not None else ValidationRun()
    os.stat(path)
    candidates: Iterable[str] = [path]
    if os.path.isdir(path):
        candidates = iter_documents(path, config)
    dirty = False
    for candidate in candidates:
        outcome.documents_checked += 1
        if validate_file(candidate, cache, diagnostics, config):
            outcome.dirty_documents.append(candidate)
            dirty = True
    return dirty


def validate_paths(
    paths: list[str],
    diagnostics: Diagnostics,
    config: ScanConfig,
    cache: AnchorCache | None = None,
) -> ValidationRun:
    """Validate every input path sharing one anchor cache."""
    shared_cache = cache if cache is not None else AnchorCache()
    run = ValidationRun()
    for path in paths:
        validate_path(path, shared_cache, diagnostics, config, run=run)
    return run
