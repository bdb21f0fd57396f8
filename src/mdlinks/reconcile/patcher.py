"""Literal substitution of inline link destinations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from mdlinks.document.parser import decode_text, encode_text

_PAREN_ESCAPES = str.maketrans({"(": r"\(", ")": r"\)"})


@dataclass(slots=True, frozen=True)
class Replacement:
    """Old and new destination of one inline link or image."""

    old_destination: str
    new_destination: str

    @property
    def search(self) -> str:
        """Parenthesized, escaped text as it appears after ``](``."""
        return f"({escape_destination(self.old_destination)})"

    @property
    def substitute(self) -> str:
        return f"({escape_destination(self.new_destination)})"


def escape_destination(text: str) -> str:
    """Backslash-escape parentheses so they cannot close the link syntax."""
    return text.translate(_PAREN_ESCAPES)


def apply_replacements(text: str, replacements: list[Replacement]) -> str:
    """Replace every search string in one left-to-right literal pass.

    At a given position the earliest listed replacement wins; replaced text
    is never scanned again. Only inline ``[text](destination)`` forms match.
    """
    if not replacements:
        return text
    table: dict[str, str] = {}
    for item in replacements:
        table.setdefault(item.search, item.substitute)
    pattern = re.compile("|".join(re.escape(search) for search in table))
    return pattern.sub(lambda match: table[match.group(0)], text)


def patch_file(path: Path, replacements: list[Replacement]) -> bool:
    """Rewrite path in place; return True when its content changed."""
    original = path.read_bytes()
    patched = encode_text(apply_replacements(decode_text(original), replacements))
    if patched == original:
        return False
    path.write_bytes(patched)
    return True
