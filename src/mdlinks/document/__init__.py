"""Document model and Markdown parsing."""

from .headings import heading_id, sanitize_heading_id, split_explicit_id
from .html import extract_html_anchors
from .models import Document, Heading, Image, Link, Node, RawMarkupBlock, RawMarkupSpan
from .parser import decode_text, encode_text, parse_document, read_document

__all__ = [
    "Document",
    "Heading",
    "Image",
    "Link",
    "Node",
    "RawMarkupBlock",
    "RawMarkupSpan",
    "decode_text",
    "encode_text",
    "extract_html_anchors",
    "heading_id",
    "parse_document",
    "read_document",
    "sanitize_heading_id",
    "split_explicit_id",
]
