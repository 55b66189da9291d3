"""Message part tree: the typed result of parsing a raw email message.

Every node is a pydantic model tagged by ``kind`` so a whole tree can be
dumped with ``model_dump()`` / ``model_dump_json()`` and validated back.
"""

from __future__ import annotations

import base64
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, ValidationInfo

HeaderMap = dict[str, str]


def _from_base64(value: Any, info: ValidationInfo) -> Any:
    if info.mode == "json" and isinstance(value, str):
        return base64.b64decode(value)
    return value


# Standard (not URL-safe) base64 in JSON.
Payload = Annotated[
    bytes,
    BeforeValidator(_from_base64),
    PlainSerializer(lambda data: base64.b64encode(data).decode("ascii"), return_type=str, when_used="json"),
]


class Attachment(BaseModel):
    """An attachment folded into its multipart parent (headers dropped)."""

    filename: str = Field(description="Filename from the Content-Disposition header")
    content_type: str | None = Field(
        default=None,
        description="Bare MIME type (e.g. application/pdf)",
    )
    data: Payload = Field(description="Fully decoded attachment payload")


class TextPart(BaseModel):
    """A ``text/plain`` leaf."""

    kind: Literal["text"] = "text"
    content: str
    charset: str | None = None
    headers: HeaderMap = Field(default_factory=dict)


class HtmlPart(BaseModel):
    """A ``text/html`` leaf."""

    kind: Literal["html"] = "html"
    content: str
    charset: str | None = None
    headers: HeaderMap = Field(default_factory=dict)


class AttachmentPart(BaseModel):
    """A leaf carrying ``Content-Disposition: attachment``."""

    kind: Literal["attachment"] = "attachment"
    filename: str
    content_type: str | None = None
    data: Payload
    headers: HeaderMap = Field(default_factory=dict)

    def to_attachment(self) -> Attachment:
        return Attachment(filename=self.filename, content_type=self.content_type, data=self.data)


class OpaqueBody(BaseModel):
    """Body with no recognizable type or disposition."""

    kind: Literal["body"] = "body"
    content: str
    headers: HeaderMap = Field(default_factory=dict)


class EmptyPart(BaseModel):
    """Headers only, with no body and no recognizable type."""

    kind: Literal["empty"] = "empty"
    headers: HeaderMap = Field(default_factory=dict)


class TooDeepPart(BaseModel):
    """A multipart segment left unsplit because it exceeds the nesting limit."""

    kind: Literal["too_deep"] = "too_deep"
    boundary: str
    depth: int = Field(description="Nesting depth at which splitting stopped")
    content: str = Field(description="The raw, unsplit multipart body")
    headers: HeaderMap = Field(default_factory=dict)


class MultipartPart(BaseModel):
    """A multipart container.

    ``children`` holds every non-degenerate child in boundary order. The
    remaining list fields are the folded view: leaf payloads grouped by type,
    with nested containers collected in ``parts``.
    """

    kind: Literal["multipart"] = "multipart"
    boundary: str
    headers: HeaderMap = Field(default_factory=dict)
    children: list[MessagePart] = Field(default_factory=list)

    text: list[str] = Field(default_factory=list)
    html: list[str] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    bodies: list[str] = Field(default_factory=list)
    parts: list[NestedPart] = Field(default_factory=list)

    promoted_text: str | None = None
    promoted_html: str | None = None

    def has_payload(self) -> bool:
        """True if any folded slot is populated."""
        return bool(self.text or self.html or self.attachments or self.bodies or self.parts)


NestedPart = Annotated[Union[MultipartPart, TooDeepPart], Field(discriminator="kind")]

MessagePart = Annotated[
    Union[TextPart, HtmlPart, AttachmentPart, OpaqueBody, EmptyPart, MultipartPart, TooDeepPart],
    Field(discriminator="kind"),
]

MultipartPart.model_rebuild()
