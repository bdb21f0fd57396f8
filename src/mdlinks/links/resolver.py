"""Filesystem resolution of relative destinations."""

from __future__ import annotations

import os
from collections.abc import Callable

ExistsFn = Callable[[str], bool]


def join_clean(base_dir: str, relative: str) -> str:
    """Join a slash-separated relative path onto base_dir and normalize it.

    A leading slash does not make the path absolute: it is still taken
    relative to base_dir.
    """
    native = relative.replace("/", os.sep)
    joined = os.path.join(base_dir or ".", native.lstrip(os.sep))
    return os.path.normpath(joined)


def document_dir(document_path: str) -> str:
    """Return the directory holding document_path, "." for a bare name."""
    return os.path.dirname(document_path) or "."


def resolve_destination_path(document_path: str, url_path: str) -> str:
    """Resolve url_path against the directory of the referencing document."""
    return join_clean(document_dir(document_path), url_path)


def file_exists(path: str) -> bool:
    """Return True for an existing regular file."""
    return os.path.isfile(path)


def file_or_dir_exists(path: str) -> bool:
    """Return True for an existing regular file or directory."""
    return os.path.isfile(path) or os.path.isdir(path)


def relative_destination_path(from_dir: str, target: str) -> str:
    """Return target relative to from_dir using forward slashes."""
    relative = os.path.relpath(target, from_dir)
    return relative.replace(os.sep, "/")
