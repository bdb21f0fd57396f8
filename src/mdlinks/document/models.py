"""Typed document model consumed by anchor extraction and link checks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Link:
    """Inline, reference or autolink destination."""

    destination: str


@dataclass(slots=True, frozen=True)
class Image:
    """Image source destination."""

    destination: str


@dataclass(slots=True, frozen=True)
class Heading:
    """Heading with its derived anchor id, empty when none was derived."""

    id: str


@dataclass(slots=True, frozen=True)
class RawMarkupBlock:
    """Block of embedded HTML, kept as raw bytes."""

    data: bytes


@dataclass(slots=True, frozen=True)
class RawMarkupSpan:
    """Inline span of embedded HTML, kept as raw bytes."""

    data: bytes


Node = Link | Image | Heading | RawMarkupBlock | RawMarkupSpan


@dataclass(slots=True, frozen=True)
class Document:
    """Nodes of one parsed document in pre-order."""

    nodes: tuple[Node, ...]

    def references(self) -> list[Link | Image]:
        """Return link and image nodes in document order."""
        return [node for node in self.nodes if isinstance(node, (Link, Image))]
