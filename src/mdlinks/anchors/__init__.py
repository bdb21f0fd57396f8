"""Anchor extraction and cross-document anchor cache."""

from .cache import AnchorCache, AnchorLoader, load_file_anchors
from .extractor import MAX_DUPLICATE_SUFFIX, extract_anchors, is_unstable_anchor, unique_heading_id

__all__ = [
    "AnchorCache",
    "AnchorLoader",
    "MAX_DUPLICATE_SUFFIX",
    "extract_anchors",
    "is_unstable_anchor",
    "load_file_anchors",
    "unique_heading_id",
]
