"""
Resolver Builder Module

Builds the DNS resolution capability used by the resolution engine, either
from the operating system configuration or from one or more well-known
public nameserver groups.
"""

import logging
from typing import Dict, List, Optional, Sequence

import dns.asyncresolver
import dns.exception
import dns.rdatatype
import dns.resolver

from domain_recon.errors import LookupFailedError, ResolveError
from domain_recon.schemas import DnsResolverGroup, ResolutionRecord

logger = logging.getLogger(__name__)

NAMESERVER_GROUPS: Dict[DnsResolverGroup, List[str]] = {
    DnsResolverGroup.GOOGLE: [
        "8.8.8.8",
        "8.8.4.4",
        "2001:4860:4860::8888",
        "2001:4860:4860::8844",
    ],
    DnsResolverGroup.CLOUDFLARE: [
        "1.1.1.1",
        "1.0.0.1",
        "2606:4700:4700::1111",
        "2606:4700:4700::1001",
    ],
    DnsResolverGroup.QUAD9: [
        "9.9.9.9",
        "149.112.112.112",
        "2620:fe::fe",
        "2620:fe::9",
    ],
}


class ResolverHandle:
    """
    Read-only wrapper around a dnspython async resolver.

    Safe to share between concurrent lookups.
    """

    def __init__(self, resolver: dns.asyncresolver.Resolver):
        self.resolver = resolver

    @property
    def nameservers(self) -> List[str]:
        # dnspython >= 2.4 stores Nameserver objects instead of plain addresses
        return [str(getattr(ns, "address", ns)) for ns in self.resolver.nameservers]

    async def lookup_ip(self, name: str) -> ResolutionRecord:
        """
        Resolve a name to its addresses, trying A first and then AAAA.

        Args:
            name: Hostname to resolve

        Returns:
            ResolutionRecord with the answering record type

        Raises:
            LookupFailedError: If neither record type yields an answer.
        """
        try:
            try:
                answer = await self.resolver.resolve(name, "A")
            except dns.resolver.NoAnswer:
                answer = await self.resolver.resolve(name, "AAAA")
        except dns.resolver.NXDOMAIN:
            raise LookupFailedError(name, "NXDOMAIN") from None
        except dns.resolver.NoAnswer:
            raise LookupFailedError(name, "no A or AAAA records") from None
        except dns.exception.Timeout:
            raise LookupFailedError(name, "timeout") from None
        except dns.exception.DNSException as exc:
            raise LookupFailedError(name, str(exc)) from exc

        return ResolutionRecord(
            name=name,
            record_type=dns.rdatatype.to_text(answer.rdtype),
            addresses=[rdata.to_text() for rdata in answer],
        )


def build_resolver(
    use_system_resolver: bool,
    resolver_groups: Sequence[DnsResolverGroup],
    timeout: float = 5.0,
    lifetime: Optional[float] = None,
) -> ResolverHandle:
    """
    Build a resolver handle.

    Nameserver lists of multiple groups are concatenated in order, without
    deduplication.

    Args:
        use_system_resolver: Read the OS resolver configuration
        resolver_groups: Public nameserver groups to combine otherwise
        timeout: Per-nameserver query timeout in seconds
        lifetime: Total time budget per lookup (defaults to 2 x timeout)

    Raises:
        ResolveError: If the system configuration cannot be read or the
            custom resolver cannot be built.
    """
    if use_system_resolver:
        logger.info("Using system DNS resolver configuration")
        try:
            resolver = dns.asyncresolver.Resolver()
        except (dns.exception.DNSException, OSError) as exc:
            raise ResolveError(f"Could not read system resolver configuration: {exc}") from exc
    else:
        if not resolver_groups:
            raise ResolveError("No DNS resolver groups selected")

        nameservers: List[str] = []
        for group in resolver_groups:
            nameservers.extend(NAMESERVER_GROUPS[group])

        logger.info(
            "Using nameservers from %s (%d endpoints)",
            ", ".join(group.value for group in resolver_groups),
            len(nameservers),
        )
        try:
            resolver = dns.asyncresolver.Resolver(configure=False)
            resolver.nameservers = nameservers
        except (dns.exception.DNSException, ValueError) as exc:
            raise ResolveError(f"Could not build resolver: {exc}") from exc

    resolver.timeout = timeout
    resolver.lifetime = lifetime if lifetime is not None else timeout * 2
    return ResolverHandle(resolver)
