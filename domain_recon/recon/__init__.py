"""
Reconnaissance pipeline for certificate-based subdomain discovery.

Certificate transparency names are aggregated from several providers,
resolved through a bounded DNS engine, and optionally extended by
expanding wildcard names against a wordlist.
"""

from .ct_aggregator import CertificateAggregator
from .dns_resolver import DNSResolver, resolve_all
from .domain_discovery import DomainDiscovery
from .hostnames import classify, is_valid_domain
from .resolver_builder import ResolverHandle, build_resolver
from .wildcard_expander import expand, load_words

__all__ = [
    "CertificateAggregator",
    "DNSResolver",
    "DomainDiscovery",
    "ResolverHandle",
    "build_resolver",
    "classify",
    "expand",
    "is_valid_domain",
    "load_words",
    "resolve_all",
]
