"""Parsing and classification of link and image destinations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final
from urllib.parse import quote, unquote, urlsplit

_CONTROL_CHAR_RE: Final[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")
_INVALID_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"%(?![0-9A-Fa-f]{2})(.{0,2})", re.DOTALL)
_PATH_SAFE: Final[str] = "/!$&'()*+,;=:@-._~"
_FRAGMENT_SAFE: Final[str] = "/?!$&'()*+,;=:@-._~"


class DestinationParseError(ValueError):
    """Raised when a destination is not a well-formed URL reference."""

    def __init__(self, destination: str, reason: str) -> None:
        super().__init__(f"parse {destination!r}: {reason}")
        self.destination = destination
        self.reason = reason


@dataclass(slots=True, frozen=True)
class Destination:
    """Decoded URL reference parts of a destination."""

    raw: str
    scheme: str
    host: str
    path: str
    fragment: str

    @property
    def is_external(self) -> bool:
        """Scheme or host present; never resolved on disk."""
        return bool(self.scheme or self.host)

    @property
    def is_anchor_only(self) -> bool:
        """Only a fragment, targeting the referencing document itself."""
        return not self.scheme and not self.host and not self.path and bool(self.fragment)

    @property
    def is_relative_path(self) -> bool:
        """A path relative to the referencing document, maybe with a fragment."""
        return not self.is_external and bool(self.path)


def parse_destination(raw: str) -> Destination:
    """Split a destination into decoded scheme, host, path and fragment."""
    if _CONTROL_CHAR_RE.search(raw):
        raise DestinationParseError(raw, "invalid control character in URL")
    bad_escape = _INVALID_ESCAPE_RE.search(raw)
    if bad_escape is not None:
        raise DestinationParseError(raw, f"invalid URL escape {bad_escape.group(0)!r}")
    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise DestinationParseError(raw, str(exc)) from exc
    port = _port_text(parts.netloc)
    if port and not (port.isascii() and port.isdigit()):
        raise DestinationParseError(raw, f"invalid port ':{port}' after host")
    if not parts.scheme and not parts.netloc:
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise DestinationParseError(raw, "first path segment in URL cannot contain colon")
    return Destination(
        raw=raw,
        scheme=parts.scheme,
        host=parts.netloc,
        path=unquote(parts.path, errors="surrogateescape"),
        fragment=unquote(parts.fragment, errors="surrogateescape"),
    )


def _port_text(netloc: str) -> str:
    """Return the text after the port colon of netloc, empty when absent."""
    hostinfo = netloc.rpartition("@")[2]
    if hostinfo.startswith("["):
        hostinfo = hostinfo.partition("]")[2]
    return hostinfo.rpartition(":")[2] if ":" in hostinfo else ""


def format_destination(path: str, fragment: str = "") -> str:
    """Build a relative destination from a decoded path and fragment."""
    encoded = quote(path, safe=_PATH_SAFE, errors="surrogateescape")
    first_segment = encoded.split("/", 1)[0]
    if ":" in first_segment:
        # Keep a colon in the first segment from reading as a scheme.
        encoded = f"./{encoded}"
    if not fragment:
        return encoded
    return f"{encoded}#{quote(fragment, safe=_FRAGMENT_SAFE, errors='surrogateescape')}"
