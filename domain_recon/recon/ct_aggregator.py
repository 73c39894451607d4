"""
Certificate Aggregator Module

Queries every enabled certificate transparency source concurrently and
merges their wildcard / fully-qualified name sets.  A failing source is
logged and left out of the union; it never aborts the run.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from domain_recon.config import CredentialsConfig
from domain_recon.errors import ProviderError
from domain_recon.schemas import CertificateProvider, ProviderResult

from .ct_sources import CertificateSource, build_source

logger = logging.getLogger(__name__)


class CertificateAggregator:
    """Fan out to certificate sources and merge their results."""

    def __init__(
        self,
        providers: Sequence[CertificateProvider],
        credentials: Optional[CredentialsConfig] = None,
        sources: Optional[Dict[CertificateProvider, CertificateSource]] = None,
        censys_max_parallel: int = 10,
    ):
        """
        Initialize the aggregator.

        Args:
            providers: Enabled certificate providers
            credentials: Loaded credentials file, if any
            sources: Optional pre-built sources keyed by provider
            censys_max_parallel: Page parallelism for the Censys source
        """
        self.providers = list(providers)
        self.credentials = credentials
        self.sources: Dict[CertificateProvider, CertificateSource] = dict(sources or {})
        self.censys_max_parallel = censys_max_parallel
        self.failures: List[ProviderError] = []

    def _source_for(self, provider: CertificateProvider) -> CertificateSource:
        if provider not in self.sources:
            kwargs = {}
            if provider is CertificateProvider.CENSYS:
                kwargs["max_parallel_requests"] = self.censys_max_parallel
            self.sources[provider] = build_source(provider, **kwargs)
        return self.sources[provider]

    async def aggregate(self, domain: str) -> Tuple[Set[str], Set[str]]:
        """
        Collect certificate names for a domain from all enabled providers.

        Args:
            domain: Target domain

        Returns:
            Tuple of (wildcard patterns, fully-qualified names)
        """
        logger.info(f"Fetching certificates for {domain} from {len(self.providers)} provider(s)")
        self.failures = []

        tasks = []
        for provider in self.providers:
            creds = self.credentials.credentials_for(provider) if self.credentials else None
            tasks.append(self._source_for(provider).fetch(domain, creds))

        results = await asyncio.gather(*tasks, return_exceptions=True)

        wildcards: Set[str] = set()
        fqdns: Set[str] = set()

        for provider, result in zip(self.providers, results):
            if isinstance(result, ProviderError):
                logger.error(f"Certificate provider failed: {result}")
                self.failures.append(result)
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error from {provider.value}: {result}")
                self.failures.append(ProviderError(provider.value, str(result)))
            elif isinstance(result, ProviderResult):
                wildcards.update(result.wildcards)
                fqdns.update(result.fqdns)

        if self.providers and len(self.failures) == len(self.providers):
            logger.warning("All certificate providers failed, continuing with no names")

        logger.info(
            f"Aggregated {len(wildcards)} wildcard and {len(fqdns)} fully-qualified names"
        )
        return wildcards, fqdns
