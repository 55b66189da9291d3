"""Email address validation against a local grammar.

No network access by default; an MX/A existence check can be switched on
and is delegated to an injected callable.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from .config import AddressConfig
from .resolver import DnsResolver

DnsCheck = Callable[[str], bool]

LOCAL_MAX_LENGTH = 64
DOMAIN_MAX_LENGTH = 255

_DISPLAY_FORM = re.compile(r".*?<(.*?)>")
_DOMAIN_CHARS = re.compile(r"^[A-Za-z0-9\-.]+$")
_LOCAL_CHARS = re.compile(r"^(\\.|[A-Za-z0-9!#%&`_=/$'*+?^{}|~.-])+$")
_LOCAL_QUOTED = re.compile(r'^"(\\"|[^"])+"$')


class AddressError(str, Enum):
    """Reason an address failed validation, one per rule."""

    EMPTY = "empty"
    CONTAINS_SPACE = "contains_space"
    MISSING_AT_SIGN = "missing_at_sign"
    LOCAL_EMPTY = "local_empty"
    LOCAL_TOO_LONG = "local_too_long"
    DOMAIN_EMPTY = "domain_empty"
    DOMAIN_TOO_LONG = "domain_too_long"
    LOCAL_STARTS_WITH_DOT = "local_starts_with_dot"
    LOCAL_ENDS_WITH_DOT = "local_ends_with_dot"
    LOCAL_DOUBLE_DOT = "local_double_dot"
    DOMAIN_INVALID_CHARS = "domain_invalid_chars"
    DOMAIN_DOUBLE_DOT = "domain_double_dot"
    LOCAL_INVALID_CHARS = "local_invalid_chars"
    NO_DNS_RECORD = "no_dns_record"


_MESSAGES: dict[AddressError, str] = {
    AddressError.EMPTY: "Email address is empty",
    AddressError.CONTAINS_SPACE: "Email address is not allowed to have spaces in it",
    AddressError.MISSING_AT_SIGN: "Email address does not contain an 'at sign' (@)",
    AddressError.LOCAL_EMPTY: "The 'local' part of the email address is empty",
    AddressError.LOCAL_TOO_LONG: "The 'local' part of the email address is too long",
    AddressError.DOMAIN_EMPTY: "The 'domain' part of the email address is empty",
    AddressError.DOMAIN_TOO_LONG: "The 'domain' part of the email address is too long",
    AddressError.LOCAL_STARTS_WITH_DOT: "The 'local' part of the email address starts with a dot (.)",
    AddressError.LOCAL_ENDS_WITH_DOT: "The 'local' part of the email address ends with a dot (.)",
    AddressError.LOCAL_DOUBLE_DOT: "The 'local' part of the email address has two consecutive dots (..)",
    AddressError.DOMAIN_INVALID_CHARS: "The 'domain' part of the email address contains invalid characters",
    AddressError.DOMAIN_DOUBLE_DOT: "The 'domain' part of the email address has two consecutive dots (..)",
    AddressError.LOCAL_INVALID_CHARS: "The 'local' part of the email address contains invalid characters",
    AddressError.NO_DNS_RECORD: "The 'domain' part of the email address has no valid DNS",
}


class InvalidAddressError(ValueError):
    """Raised by :func:`validate`; ``reason`` names the failing rule."""

    def __init__(self, address: str, reason: AddressError) -> None:
        super().__init__(_MESSAGES[reason])
        self.address = address
        self.reason = reason


def extract_address(address: str) -> str:
    """Return the bracketed part of ``Display Name <addr>``, else *address*."""
    match = _DISPLAY_FORM.search(address)
    return match.group(1) if match else address


def validate(address: str, use_dns: bool = False, dns_check: DnsCheck | None = None) -> None:
    """Validate a single email address.

    Raises :class:`InvalidAddressError` for the first rule that fails.  When
    *use_dns* is set the domain must have an MX or A record according to
    *dns_check*, which defaults to a :class:`~mimetree.resolver.DnsResolver`.
    """
    working = extract_address(address)

    def fail(reason: AddressError) -> InvalidAddressError:
        return InvalidAddressError(address, reason)

    # A bare "0" is treated as no address at all.
    if not working or working == "0":
        raise fail(AddressError.EMPTY)
    if " " in working:
        raise fail(AddressError.CONTAINS_SPACE)

    local, at, domain = working.rpartition("@")
    if not at:
        raise fail(AddressError.MISSING_AT_SIGN)

    local_length = len(local.encode("utf-8"))
    if local_length < 1:
        raise fail(AddressError.LOCAL_EMPTY)
    if local_length > LOCAL_MAX_LENGTH:
        raise fail(AddressError.LOCAL_TOO_LONG)

    domain_length = len(domain.encode("utf-8"))
    if domain_length < 1:
        raise fail(AddressError.DOMAIN_EMPTY)
    if domain_length > DOMAIN_MAX_LENGTH:
        raise fail(AddressError.DOMAIN_TOO_LONG)

    if local.startswith("."):
        raise fail(AddressError.LOCAL_STARTS_WITH_DOT)
    if local.endswith("."):
        raise fail(AddressError.LOCAL_ENDS_WITH_DOT)
    if ".." in local:
        raise fail(AddressError.LOCAL_DOUBLE_DOT)

    if not _DOMAIN_CHARS.match(domain):
        raise fail(AddressError.DOMAIN_INVALID_CHARS)
    if ".." in domain:
        raise fail(AddressError.DOMAIN_DOUBLE_DOT)

    # Escaped backslashes are legal anywhere in the local part.
    unescaped = local.replace("\\\\", "")
    if not _LOCAL_CHARS.match(unescaped) and not _LOCAL_QUOTED.match(unescaped):
        raise fail(AddressError.LOCAL_INVALID_CHARS)

    if use_dns:
        if dns_check is None:
            dns_check = DnsResolver()
        if not dns_check(domain):
            raise fail(AddressError.NO_DNS_RECORD)


def is_valid(address: str, use_dns: bool = False, dns_check: DnsCheck | None = None) -> bool:
    """Boolean form of :func:`validate`."""
    try:
        validate(address, use_dns=use_dns, dns_check=dns_check)
    except InvalidAddressError:
        return False
    return True


def validate_with_config(address: str, config: AddressConfig, dns_check: DnsCheck | None = None) -> None:
    """Validate using the DNS policy from *config*."""
    if config.use_dns and dns_check is None:
        dns_check = DnsResolver(config)
    validate(address, use_dns=config.use_dns, dns_check=dns_check)
