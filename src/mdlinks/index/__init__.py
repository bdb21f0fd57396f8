"""Tree walking, content hashing and hash snapshots."""

from .discovery import build_snapshot, iter_documents, sha256_bytes, sha256_file, walk_tree
from .models import FileHash, SnapshotLookups
from .snapshot import SnapshotFormatError, load_snapshot, parse_snapshot_line, save_snapshot

__all__ = [
    "FileHash",
    "SnapshotFormatError",
    "SnapshotLookups",
    "build_snapshot",
    "iter_documents",
    "load_snapshot",
    "parse_snapshot_line",
    "save_snapshot",
    "sha256_bytes",
    "sha256_file",
    "walk_tree",
]
