"""Anchor attribute extraction from embedded HTML fragments."""

from __future__ import annotations

from html.parser import HTMLParser

_ANCHOR_ATTRIBUTES = frozenset({"id", "name"})


class _AnchorAttributeParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.values: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        for key, value in attrs:
            if not value:
                continue
            if key in _ANCHOR_ATTRIBUTES:
                self.values.append(value)


def extract_html_anchors(data: bytes) -> list[str]:
    """Return ``id``/``name`` attribute values of start and self-closing tags.

    Payloads that are not valid UTF-8 yield no values. Markup the tokenizer
    rejects stops extraction; values seen before it are kept.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return []
    parser = _AnchorAttributeParser()
    try:
        parser.feed(text)
        parser.close()
    except AssertionError:
        # html.parser asserts on unknown marked sections such as "<![foo[".
        return parser.values
    return parser.values
