"""Read-through cache of anchor sets for fragment checks across documents."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from mdlinks.anchors.extractor import extract_anchors
from mdlinks.document.parser import read_document

AnchorLoader = Callable[[str], frozenset[str]]


def load_file_anchors(filename: str) -> frozenset[str]:
    """Parse a document from disk and return its anchors."""
    return extract_anchors(read_document(filename))


@dataclass(slots=True)
class AnchorCache:
    """Anchor sets keyed by target filename, filled once per run.

    Documents are assumed not to change during one run, so an entry is never
    recomputed after it is stored. Lookups distinguish a file that was never
    loaded from a loaded file that lacks the requested anchor.
    """

    _entries: dict[str, frozenset[str]] = field(default_factory=dict)

    def has_entry(self, filename: str) -> bool:
        """Return True when anchors for filename were stored."""
        return filename in self._entries

    def has_anchor(self, filename: str, anchor: str) -> tuple[bool, bool]:
        """Return (file known, anchor known) without loading anything."""
        anchors = self._entries.get(filename)
        if anchors is None:
            return False, False
        return True, anchor in anchors

    def store(self, filename: str, anchors: frozenset[str]) -> None:
        """Remember anchors for filename."""
        self._entries[filename] = anchors

    def anchors_for(self, filename: str) -> frozenset[str] | None:
        """Return stored anchors, or None for an unknown file."""
        return self._entries.get(filename)

    def lookup(
        self,
        filename: str,
        anchor: str,
        loader: AnchorLoader = load_file_anchors,
    ) -> bool:
        """Return whether anchor exists in filename, loading it on a miss.

        A loader failure leaves the cache untouched and reports the anchor
        as unknown.
        """
        file_known, anchor_known = self.has_anchor(filename, anchor)
        if file_known:
            return anchor_known
        try:
            anchors = loader(filename)
        except OSError:
            return False
        self.store(filename, anchors)
        return anchor in anchors

    def __len__(self) -> int:
        return len(self._entries)
