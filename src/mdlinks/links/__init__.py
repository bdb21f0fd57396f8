"""Destination parsing, path resolution and link validation."""

from .destination import Destination, DestinationParseError, format_destination, parse_destination
from .resolver import (
    document_dir,
    file_exists,
    file_or_dir_exists,
    join_clean,
    relative_destination_path,
    resolve_destination_path,
)
from .validator import ValidationRun, validate_document, validate_file, validate_path, validate_paths

__all__ = [
    "Destination",
    "DestinationParseError",
    "ValidationRun",
    "document_dir",
    "file_exists",
    "file_or_dir_exists",
    "format_destination",
    "join_clean",
    "parse_destination",
    "relative_destination_path",
    "resolve_destination_path",
    "validate_document",
    "validate_file",
    "validate_path",
    "validate_paths",
]
