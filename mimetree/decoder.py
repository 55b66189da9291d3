"""Transfer-encoding and charset decoding for message bodies."""

from __future__ import annotations

import base64
import quopri
import re

import structlog

from .headers import to_bytes
from .models import HeaderMap

logger = structlog.get_logger()

_PASSTHROUGH = frozenset({"", "7bit", "8bit"})
_QUOTED_PRINTABLE = frozenset({"quoted-printable", "quoted_printable"})
_CHARSET = re.compile(r"""charset\s*=\s*["']?([^"';\s]+)""", re.IGNORECASE)
_NON_BASE64 = re.compile(rb"[^A-Za-z0-9+/]")


def content_charset(headers: HeaderMap) -> str | None:
    """Return the ``charset`` parameter of the Content-Type header."""
    match = _CHARSET.search(headers.get("content-type", ""))
    return match.group(1).lower() if match else None


def decode_body(headers: HeaderMap, body: str) -> bytes:
    """Reverse the declared Content-Transfer-Encoding of *body*.

    Unknown encodings are passed through unchanged and logged; decoding
    never raises on malformed input.
    """
    raw = to_bytes(body)
    encoding = headers.get("content-transfer-encoding", "").strip().lower()

    if encoding in _PASSTHROUGH:
        return raw
    if encoding == "base64":
        return _b64decode_lenient(raw)
    if encoding in _QUOTED_PRINTABLE:
        return quopri.decodestring(raw)

    logger.warning("unknown_transfer_encoding", encoding=encoding)
    return raw


def decode_text(headers: HeaderMap, body: str) -> str:
    """Decode *body* to text using the declared charset.

    Falls back to UTF-8 when the charset is unknown or names a codec that
    does not decode bytes to text (``base64``, ``rot13``, ...).
    """
    data = decode_body(headers, body)
    charset = content_charset(headers) or "utf-8"
    try:
        return data.decode(charset, errors="replace")
    except (LookupError, UnicodeError):
        logger.debug("unknown_charset", charset=charset)
        return data.decode("utf-8", errors="replace")


def _b64decode_lenient(raw: bytes) -> bytes:
    # Padding is stripped along with whitespace and restored below.
    cleaned = _NON_BASE64.sub(b"", raw)
    remainder = len(cleaned) % 4
    if remainder == 1:
        cleaned = cleaned[:-1]
    elif remainder:
        cleaned += b"=" * (4 - remainder)
    return base64.b64decode(cleaned)
