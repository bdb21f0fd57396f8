"""Deterministic tree walking and content hashing."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterator
from pathlib import Path

from mdlinks.config import ScanConfig, is_hidden_name
from mdlinks.index.models import FileHash

_HASH_CHUNK_BYTES = 1024 * 128


def walk_tree(root: str) -> Iterator[os.DirEntry[str]]:
    """Yield non-directory entries under root depth-first in lexical order.

    Hidden directories are pruned, including root itself when hidden.
    Symlinked directories are not followed. Listing errors propagate.
    """
    normalized = os.path.normpath(root)
    if is_hidden_name(os.path.basename(normalized)):
        return
    stack: list[os.DirEntry[str]] = list(reversed(_sorted_entries(normalized)))
    while stack:
        entry = stack.pop()
        if entry.is_dir(follow_symlinks=False):
            if is_hidden_name(entry.name):
                continue
            stack.extend(reversed(_sorted_entries(entry.path)))
            continue
        yield entry


def entry_path(entry: os.DirEntry[str]) -> str:
    """Return the normalized path of an entry, without a leading "./"."""
    return os.path.normpath(entry.path)


def _sorted_entries(directory: str) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda item: item.name)


def iter_documents(root: str, config: ScanConfig) -> Iterator[str]:
    """Yield document paths under root in walk order."""
    for entry in walk_tree(root):
        if config.is_document(entry.name):
            yield entry_path(entry)


def build_snapshot(root: str, config: ScanConfig) -> list[FileHash]:
    """Hash every regular file under root in walk order."""
    if not root:
        raise ValueError("Snapshot root must not be empty.")
    records: list[FileHash] = []
    for entry in walk_tree(root):
        if not entry.is_file(follow_symlinks=False):
            continue
        if config.skip_hidden_files and is_hidden_name(entry.name):
            continue
        records.append(FileHash(name=entry_path(entry), hash=sha256_file(Path(entry.path))))
    return records


def sha256_file(path: Path) -> str:
    """Compute SHA-256 hash in deterministic chunked reads."""
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        while True:
            chunk = handle.read(_HASH_CHUNK_BYTES)
            if not chunk:
                break
            digest.update(chunk)
    return digest.hexdigest()


def sha256_bytes(data: bytes) -> str:
    """Compute SHA-256 hash of in-memory content."""
    return hashlib.sha256(data).hexdigest()
