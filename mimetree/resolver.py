"""DNS existence check for address domains, built on dnspython."""

from __future__ import annotations

import dns.exception
import dns.resolver
import structlog

from .config import AddressConfig

logger = structlog.get_logger()


class DnsResolver:
    """Answers whether a domain can receive mail (has an MX or A record).

    Instances are plain callables over a domain name so they can be passed
    wherever a ``Callable[[str], bool]`` DNS check is expected.
    """

    def __init__(self, config: AddressConfig | None = None) -> None:
        config = config or AddressConfig()
        if config.nameservers:
            self._resolver = dns.resolver.Resolver(configure=False)
            self._resolver.nameservers = list(config.nameservers)
        else:
            try:
                self._resolver = dns.resolver.Resolver()
            except dns.resolver.NoResolverConfiguration:
                logger.warning("dns_no_system_config")
                self._resolver = dns.resolver.Resolver(configure=False)
        self._resolver.timeout = config.dns_timeout_seconds
        self._resolver.lifetime = config.dns_timeout_seconds

    def __call__(self, domain: str) -> bool:
        return self.has_mx_or_a(domain)

    def has_mx_or_a(self, domain: str) -> bool:
        """True if *domain* resolves to at least one MX or A record."""
        return self._has_record(domain, "MX") or self._has_record(domain, "A")

    def _has_record(self, domain: str, rdtype: str) -> bool:
        try:
            answer = self._resolver.resolve(domain, rdtype)
        except dns.exception.DNSException as exc:
            # NXDOMAIN, NoAnswer, timeouts: all mean "no usable record".
            logger.debug("dns_lookup_failed", domain=domain, rdtype=rdtype, error=type(exc).__name__)
            return False
        return len(answer) > 0
