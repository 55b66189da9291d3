"""Recursive MIME tree builder: raw message → typed ``MessagePart`` tree.

Incoming mail is untrusted, so nothing here raises on malformed input.
Missing boundaries, truncated encodings and unknown encodings all degrade
to a best-effort part.
"""

from __future__ import annotations

import re

import structlog

from .classifier import Classification, ContentKind, classify
from .config import ParserConfig
from .decoder import content_charset, decode_body, decode_text
from .headers import RawMessage, clean_text, parse_headers, split_message
from .models import (
    AttachmentPart,
    EmptyPart,
    HeaderMap,
    HtmlPart,
    MessagePart,
    MultipartPart,
    OpaqueBody,
    TextPart,
    TooDeepPart,
)

logger = structlog.get_logger()


def split_multipart(body: str, boundary: str) -> list[str]:
    """Split a multipart body into its raw segments.

    A delimiter is a whole line of ``--boundary`` (or the closing
    ``--boundary--``), so a boundary that merely prefixes another one never
    matches.  The preamble and anything after the closing delimiter are
    discarded.  Segments are returned stripped.
    """
    delimiter = re.compile(
        rf"^--{re.escape(boundary)}(--)?[ \t]*\r?$",
        re.MULTILINE,
    )

    segments: list[str] = []
    start: int | None = None
    for match in delimiter.finditer(body):
        if start is not None:
            segments.append(body[start : match.start()].strip())
        if match.group(1):
            return segments
        start = match.end()

    if start is not None:
        segments.append(body[start:].strip())
    return segments


class MessageTreeBuilder:
    """Stateless builder: raw message → :data:`~mimetree.models.MessagePart`."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config or ParserConfig()

    def build(self, raw: RawMessage) -> MessagePart:
        return self._build(raw, depth=0)

    # ------------------------------------------------------------------
    # Single segment
    # ------------------------------------------------------------------

    def _build(self, raw: RawMessage, depth: int) -> MessagePart:
        header_lines, body = split_message(raw)
        headers = parse_headers(header_lines)
        body = body.strip()
        found = classify(headers, body)

        if found.kind is ContentKind.ATTACHMENT:
            return AttachmentPart(
                filename=found.filename or "",
                content_type=found.content_type,
                data=decode_body(headers, body),
                headers=headers,
            )

        if found.kind is ContentKind.TEXT:
            return TextPart(
                content=decode_text(headers, body),
                charset=content_charset(headers),
                headers=headers,
            )

        if found.kind is ContentKind.HTML:
            return HtmlPart(
                content=decode_text(headers, body),
                charset=content_charset(headers),
                headers=headers,
            )

        if found.kind is ContentKind.MULTIPART:
            return self._build_multipart(headers, body, found, depth)

        if found.kind is ContentKind.BODY:
            return OpaqueBody(content=clean_text(body), headers=headers)

        return EmptyPart(headers=headers)

    # ------------------------------------------------------------------
    # Multipart folding
    # ------------------------------------------------------------------

    def _build_multipart(
        self,
        headers: HeaderMap,
        body: str,
        found: Classification,
        depth: int,
    ) -> MessagePart:
        boundary = found.boundary or ""

        if depth >= self._config.max_depth:
            logger.warning("mime_nesting_too_deep", depth=depth, boundary=boundary)
            return TooDeepPart(boundary=boundary, depth=depth, content=clean_text(body), headers=headers)

        children: list[MessagePart] = []
        slots: dict[str, list] = {"text": [], "html": [], "attachments": [], "bodies": [], "parts": []}

        for segment in split_multipart(body, boundary):
            child = self._build(segment, depth + 1)
            if _is_degenerate(child):
                continue

            children.append(child)
            if isinstance(child, TextPart):
                slots["text"].append(child.content)
            elif isinstance(child, HtmlPart):
                slots["html"].append(child.content)
            elif isinstance(child, AttachmentPart):
                slots["attachments"].append(child.to_attachment())
            elif isinstance(child, OpaqueBody):
                slots["bodies"].append(child.content)
            else:
                slots["parts"].append(child)

        promoted_text, promoted_html = _promote(slots)

        return MultipartPart(
            boundary=boundary,
            headers=headers,
            children=children,
            promoted_text=promoted_text,
            promoted_html=promoted_html,
            **slots,
        )


def _is_degenerate(part: MessagePart) -> bool:
    if isinstance(part, EmptyPart):
        return True
    return isinstance(part, MultipartPart) and not part.children


def _promote(slots: dict[str, list]) -> tuple[str | None, str | None]:
    """Lift text/html out of the first nested part into an empty parent.

    Mutates *slots* in place and returns the promoted ``(text, html)``
    values.  The nested part is replaced by a copy, never modified.
    """
    if slots["text"] or slots["html"] or not slots["parts"]:
        return None, None

    first = slots["parts"][0]
    if not isinstance(first, MultipartPart):
        return None, None

    update: dict[str, list] = {}
    promoted_text = promoted_html = None
    if first.text:
        slots["text"] = list(first.text)
        promoted_text = first.text[0]
        update["text"] = []
    if first.html:
        slots["html"] = list(first.html)
        promoted_html = first.html[0]
        update["html"] = []

    if not update:
        return None, None

    remaining = first.model_copy(update=update)
    if remaining.has_payload():
        slots["parts"][0] = remaining
    else:
        del slots["parts"][0]

    return promoted_text, promoted_html


def parse_message(raw: RawMessage, config: ParserConfig | None = None) -> MessagePart:
    """Build the part tree for *raw* with a one-off builder."""
    return MessageTreeBuilder(config).build(raw)
