"""Anchor set derivation and unstable anchor detection."""

from __future__ import annotations

import re

from mdlinks.document.html import extract_html_anchors
from mdlinks.document.models import Document, Heading, RawMarkupBlock, RawMarkupSpan

# Duplicate headings get "-1" .. "-99" appended, matching the heading id
# generator; a heading past that bound gets no anchor at all.
MAX_DUPLICATE_SUFFIX = 99

_UNSTABLE_ANCHOR_RE = re.compile(r"(?P<base>[^/]+)-[1-9]")


def extract_anchors(document: Document) -> frozenset[str]:
    """Return every anchor a fragment may target in the document."""
    anchors: set[str] = set()
    for node in document.nodes:
        if isinstance(node, (RawMarkupBlock, RawMarkupSpan)):
            anchors.update(extract_html_anchors(node.data))
            continue
        if isinstance(node, Heading) and node.id:
            unique = unique_heading_id(node.id, anchors)
            if unique is not None:
                anchors.add(unique)
    return frozenset(anchors)


def unique_heading_id(candidate: str, taken: set[str] | frozenset[str]) -> str | None:
    """Return candidate or its first free numbered variant, None when exhausted."""
    if candidate not in taken:
        return candidate
    for suffix in range(1, MAX_DUPLICATE_SUFFIX + 1):
        numbered = f"{candidate}-{suffix}"
        if numbered not in taken:
            return numbered
    return None


def is_unstable_anchor(fragment: str, anchors: frozenset[str] | set[str]) -> bool:
    """Return True when fragment looks like a numbered duplicate of a known anchor.

    Such references silently retarget when an unrelated heading with the
    same text is added, removed or reordered.
    """
    match = _UNSTABLE_ANCHOR_RE.fullmatch(fragment)
    if match is None:
        return False
    return match.group("base") in anchors
