"""mimetree: email address validation and recursive MIME message trees.

Public API re-exported here for convenience::

    from mimetree import MessageTreeBuilder, validate
"""

from .address import AddressError, InvalidAddressError, is_valid, validate, validate_with_config
from .builder import MessageTreeBuilder, parse_message, split_multipart
from .classifier import Classification, ContentKind, classify
from .config import AddressConfig, MimetreeConfig, ParserConfig
from .decoder import decode_body, decode_text
from .headers import parse_headers, split_message
from .logging import setup_logging
from .models import (
    Attachment,
    AttachmentPart,
    EmptyPart,
    HtmlPart,
    MessagePart,
    MultipartPart,
    OpaqueBody,
    TextPart,
    TooDeepPart,
)
from .recipients import RecipientList
from .resolver import DnsResolver

__all__ = [
    "AddressConfig",
    "AddressError",
    "Attachment",
    "AttachmentPart",
    "Classification",
    "ContentKind",
    "DnsResolver",
    "EmptyPart",
    "HtmlPart",
    "InvalidAddressError",
    "MessagePart",
    "MessageTreeBuilder",
    "MimetreeConfig",
    "MultipartPart",
    "OpaqueBody",
    "ParserConfig",
    "RecipientList",
    "TextPart",
    "TooDeepPart",
    "classify",
    "decode_body",
    "decode_text",
    "is_valid",
    "parse_headers",
    "parse_message",
    "setup_logging",
    "split_message",
    "split_multipart",
    "validate",
    "validate_with_config",
]
