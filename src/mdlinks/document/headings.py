"""Heading anchor id derivation."""

from __future__ import annotations

import re

_EXPLICIT_ID_RE = re.compile(r"\s*\{#([^{}\s]*)\}\s*$")


def sanitize_heading_id(text: str) -> str:
    """Derive an anchor id from heading text.

    Letters and digits are kept lowercased; any other run of characters
    between two kept runs becomes a single dash. Text without letters or
    digits yields ``"empty"``.
    """
    output: list[str] = []
    pending_dash = False
    for char in text:
        if char.isalpha() or char.isnumeric():
            if pending_dash and output:
                output.append("-")
            pending_dash = False
            output.append(char.lower())
            continue
        pending_dash = True
    if not output:
        return "empty"
    return "".join(output)


def split_explicit_id(text: str) -> tuple[str, str | None]:
    """Split a trailing ``{#custom-id}`` marker off heading text."""
    match = _EXPLICIT_ID_RE.search(text)
    if match is None:
        return text, None
    return text[: match.start()], match.group(1)


def heading_id(text: str) -> str:
    """Return the explicit id when non-empty, else the sanitized one."""
    stripped, explicit = split_explicit_id(text)
    if explicit:
        return explicit
    return sanitize_heading_id(stripped)
