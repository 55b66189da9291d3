"""Recipient lists that keep only valid, unique addresses."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from .address import DnsCheck, InvalidAddressError, validate

logger = structlog.get_logger()


class RecipientList:
    """Order-preserving set of validated addresses.

    Invalid addresses are dropped at :meth:`add` time; the caller decides
    the policy, the validator only judges.
    """

    def __init__(
        self,
        addresses: str | Iterable[str] = (),
        *,
        use_dns: bool = False,
        dns_check: DnsCheck | None = None,
    ) -> None:
        self._addresses: dict[str, None] = {}
        self._use_dns = use_dns
        self._dns_check = dns_check
        self.add(addresses)

    def add(self, addresses: str | Iterable[str]) -> list[str]:
        """Add one or many addresses; return the ones that were rejected."""
        if isinstance(addresses, str):
            addresses = [addresses]

        rejected: list[str] = []
        for address in addresses:
            address = address.strip()
            try:
                validate(address, use_dns=self._use_dns, dns_check=self._dns_check)
            except InvalidAddressError as exc:
                logger.debug("recipient_dropped", address=address, reason=exc.reason.value)
                rejected.append(address)
                continue
            self._addresses.setdefault(address, None)
        return rejected

    def __iter__(self) -> Iterator[str]:
        return iter(self._addresses)

    def __len__(self) -> int:
        return len(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __str__(self) -> str:
        return ", ".join(self._addresses)
