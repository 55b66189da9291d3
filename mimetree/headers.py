"""Header block handling: split a raw message into headers and body, then
parse the header lines into a lowercase-keyed mapping.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .models import HeaderMap

RawMessage = str | bytes | Sequence[str]

_HEADER_START = re.compile(r"^([A-Za-z][A-Za-z0-9\-_]+):")
# Lone surrogates that surrogateescape cannot map back to a byte.
_STRAY_SURROGATE = re.compile(r"[\ud800-\udc7f\udd00-\udfff]")


def to_lines(raw: RawMessage) -> list[str]:
    """Normalise a raw message into a list of lines split on ``\\n``.

    Bytes are decoded with ``surrogateescape`` so 8-bit payloads survive a
    later round trip back to bytes unchanged.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", "surrogateescape")
    if isinstance(raw, str):
        return raw.split("\n")
    return list(raw)


def to_bytes(value: str) -> bytes:
    """Encode text from :func:`to_lines` back to the bytes it came from.

    Surrogates outside the escape range (only possible in caller-supplied
    ``str``) become U+FFFD first.
    """
    return _STRAY_SURROGATE.sub("\ufffd", value).encode("utf-8", "surrogateescape")


def clean_text(value: str) -> str:
    """Replace undecodable bytes smuggled in by :func:`to_lines` with U+FFFD."""
    return to_bytes(value).decode("utf-8", "replace")


def split_message(raw: RawMessage) -> tuple[list[str], str]:
    """Split a message on the first blank line.

    Returns ``(header_lines, body)``. Without a blank line every line is a
    header line and the body is empty.
    """
    lines = to_lines(raw)
    for index, line in enumerate(lines):
        if line.rstrip("\r") == "":
            return lines[:index], "\n".join(lines[index + 1 :])
    return lines, ""


def parse_headers(lines: Sequence[str]) -> HeaderMap:
    """Parse header lines, unfolding continuations.

    A repeated header name overwrites the earlier value; only continuation
    lines accumulate.
    """
    headers: HeaderMap = {}
    previous: str | None = None

    for line in lines:
        match = _HEADER_START.match(line)
        if match:
            name = match.group(1)
            previous = name.lower()
            headers[previous] = clean_text(line[len(name) + 1 :].strip())
        elif previous is not None:
            headers[previous] = f"{headers[previous]} {clean_text(line.strip())}"

    return headers
