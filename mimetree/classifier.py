"""Content classification from a parsed header map."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .models import HeaderMap

_ATTACHMENT = re.compile(r'attachment; filename="(.*?)"')
_TEXT = re.compile(r"text/(plain|html)")
_MULTIPART = re.compile(r'multipart/.*?; boundary="(.*?)"')


class ContentKind(str, Enum):
    """What a message segment holds, in classification priority order."""

    ATTACHMENT = "attachment"
    TEXT = "text"
    HTML = "html"
    MULTIPART = "multipart"
    BODY = "body"
    EMPTY = "empty"


@dataclass(frozen=True)
class Classification:
    kind: ContentKind
    filename: str | None = None
    boundary: str | None = None
    content_type: str | None = None


def bare_content_type(headers: HeaderMap) -> str | None:
    """Return the Content-Type value up to the first ``;``, if present."""
    value = headers.get("content-type")
    if not value:
        return None
    return value.split(";", 1)[0].strip() or None


def classify(headers: HeaderMap, body: str = "") -> Classification:
    """Decide what kind of part the headers describe.

    Disposition wins over type: an attached ``text/plain`` file is still an
    attachment.
    """
    disposition = headers.get("content-disposition", "")
    content_type = headers.get("content-type", "")

    match = _ATTACHMENT.search(disposition)
    if match:
        return Classification(
            kind=ContentKind.ATTACHMENT,
            filename=match.group(1),
            content_type=bare_content_type(headers),
        )

    match = _TEXT.search(content_type)
    if match:
        kind = ContentKind.HTML if match.group(1) == "html" else ContentKind.TEXT
        return Classification(kind=kind, content_type=bare_content_type(headers))

    match = _MULTIPART.search(content_type)
    if match and match.group(1):
        return Classification(
            kind=ContentKind.MULTIPART,
            boundary=match.group(1),
            content_type=bare_content_type(headers),
        )

    return Classification(kind=ContentKind.BODY if body else ContentKind.EMPTY)
