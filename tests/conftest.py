"""Shared test fixtures for the mimetree test suite."""

from __future__ import annotations

from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import pytest
import structlog

from mimetree.builder import MessageTreeBuilder
from mimetree.config import AddressConfig, ParserConfig


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any ``setup_logging`` call so ``capture_logs`` keeps working."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def parser_config() -> ParserConfig:
    return ParserConfig(max_depth=32)


@pytest.fixture
def address_config() -> AddressConfig:
    return AddressConfig(use_dns=False, dns_timeout_seconds=2.0, nameservers=["192.0.2.53"])


@pytest.fixture
def builder(parser_config: ParserConfig) -> MessageTreeBuilder:
    return MessageTreeBuilder(parser_config)


# ------------------------------------------------------------------
# Sample EML builders
# ------------------------------------------------------------------


def _build_plain_email(
    *,
    subject: str = "Test Subject",
    from_addr: str = "sender@example.com",
    to_addr: str = "recipient@example.com",
    body: str = "Hello, World!",
) -> bytes:
    """Build a simple plain-text email as raw bytes."""
    msg = MIMEText(body, "plain")
    msg["Subject"] = subject
    msg["From"] = from_addr
    msg["To"] = to_addr
    msg["Message-ID"] = "<test-001@example.com>"
    msg["Date"] = "Mon, 01 Jun 2025 12:00:00 +0000"
    return msg.as_bytes()


def _build_html_email(*, body_html: str = "<p>Hello</p>") -> bytes:
    msg = MIMEText(body_html, "html")
    msg["Subject"] = "HTML Email"
    msg["From"] = "sender@example.com"
    msg["To"] = "recipient@example.com"
    return msg.as_bytes()


def _build_multipart_email(
    *,
    body_text: str = "Plain body",
    body_html: str = "<p>HTML body</p>",
    attachments: list[tuple[str, str, bytes]] | None = None,
) -> bytes:
    """Build a multipart email with text, HTML, and optional attachments."""
    msg = MIMEMultipart("mixed")
    msg["Subject"] = "Multipart Email"
    msg["From"] = "sender@example.com"
    msg["To"] = "recipient@example.com"

    # Text + HTML alternative
    alt = MIMEMultipart("alternative")
    alt.attach(MIMEText(body_text, "plain"))
    alt.attach(MIMEText(body_html, "html"))
    msg.attach(alt)

    for filename, content_type, payload in attachments or []:
        maintype, subtype = content_type.split("/", 1)
        part = MIMEBase(maintype, subtype)
        part.set_payload(payload)
        encoders.encode_base64(part)
        part.add_header("Content-Disposition", "attachment", filename=filename)
        msg.attach(part)

    return msg.as_bytes()


def _raw_multipart(boundary: str, *segments: str, preamble: str = "", epilogue: str = "") -> str:
    """Assemble a hand-written multipart message with boundary *boundary*."""
    lines = [
        "From: sender@example.com",
        f'Content-Type: multipart/mixed; boundary="{boundary}"',
        "",
    ]
    if preamble:
        lines.append(preamble)
    for segment in segments:
        lines.append(f"--{boundary}")
        lines.append(segment)
    lines.append(f"--{boundary}--")
    if epilogue:
        lines.append(epilogue)
    return "\n".join(lines)


def _text_segment(content: str, subtype: str = "plain") -> str:
    return f"Content-Type: text/{subtype}; charset=utf-8\n\n{content}"


def _attachment_segment(filename: str, encoded: str, content_type: str = "application/octet-stream") -> str:
    return (
        f"Content-Type: {content_type}; name=\"{filename}\"\n"
        "Content-Transfer-Encoding: base64\n"
        f'Content-Disposition: attachment; filename="{filename}"\n'
        "\n"
        f"{encoded}"
    )


@pytest.fixture
def plain_eml_bytes() -> bytes:
    return _build_plain_email()


@pytest.fixture
def html_eml_bytes() -> bytes:
    return _build_html_email()


@pytest.fixture
def multipart_eml_bytes() -> bytes:
    return _build_multipart_email(
        attachments=[
            ("report.pdf", "application/pdf", b"%PDF-1.4 fake pdf content"),
            ("data.csv", "text/csv", b"col1,col2\na,b\n"),
        ],
    )
