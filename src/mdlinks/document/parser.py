"""Markdown to document model conversion backed by markdown-it-py."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from markdown_it import MarkdownIt
from markdown_it.token import Token

from mdlinks.document.headings import heading_id
from mdlinks.document.models import (
    Document,
    Heading,
    Image,
    Link,
    Node,
    RawMarkupBlock,
    RawMarkupSpan,
)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def decode_text(data: bytes) -> str:
    """Decode document bytes so that encode_text restores them exactly."""
    return data.decode(TEXT_ENCODING, errors=TEXT_ERRORS)


def encode_text(text: str) -> bytes:
    """Inverse of decode_text."""
    return text.encode(TEXT_ENCODING, errors=TEXT_ERRORS)


def _keep_destination(url: str) -> str:
    return url


@lru_cache(maxsize=1)
def _markdown() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])
    # Destinations are compared against the text as written, so skip
    # percent-encoding normalization.
    md.normalizeLink = _keep_destination
    return md


def parse_document(data: bytes) -> Document:
    """Parse raw Markdown bytes into a document model."""
    tokens = _markdown().parse(decode_text(data))
    nodes: list[Node] = []
    for index, token in enumerate(tokens):
        if token.type == "heading_open":
            nodes.append(Heading(id=_heading_id_at(tokens, index)))
            continue
        if token.type == "html_block":
            nodes.append(RawMarkupBlock(data=encode_text(token.content)))
            continue
        if token.type == "inline" and token.children:
            nodes.extend(_inline_nodes(token.children))
    return Document(nodes=tuple(nodes))


def read_document(path: str | Path) -> Document:
    """Read and parse a Markdown file; OSError propagates to the caller."""
    return parse_document(Path(path).read_bytes())


def _heading_id_at(tokens: list[Token], index: int) -> str:
    following = index + 1
    if following >= len(tokens) or tokens[following].type != "inline":
        return heading_id("")
    return heading_id(tokens[following].content)


def _inline_nodes(children: list[Token]) -> list[Node]:
    output: list[Node] = []
    for child in children:
        if child.type == "link_open":
            output.append(Link(destination=_attr(child, "href")))
        elif child.type == "image":
            output.append(Image(destination=_attr(child, "src")))
        elif child.type == "html_inline":
            output.append(RawMarkupSpan(data=encode_text(child.content)))
    return output


def _attr(token: Token, name: str) -> str:
    value = token.attrGet(name)
    if value is None:
        return ""
    return str(value)
