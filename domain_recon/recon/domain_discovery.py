"""
Domain Discovery Orchestrator

Main module that coordinates a recon run:
- Credentials validation
- Certificate transparency aggregation
- DNS resolution of the discovered names
- Wildcard expansion against a wordlist, and resolution of the candidates
"""

import logging
import time
from typing import Dict, List, Optional

from domain_recon.config import CredentialsConfig, ReconSettings, validate_config
from domain_recon.schemas import CertificateProvider, DomainInfo, ResolutionRecord

from .ct_aggregator import CertificateAggregator
from .ct_sources import CertificateSource
from .dns_resolver import DNSResolver, OnResolved, Resolver
from .resolver_builder import build_resolver
from .wildcard_expander import expand, load_words

logger = logging.getLogger(__name__)


class DomainDiscovery:
    """
    Orchestrates one discovery run.

    Configuration and resolver errors abort the run.  Provider and lookup
    failures are absorbed, and a wordlist failure only skips the expansion
    phase.
    """

    def __init__(
        self,
        settings: ReconSettings,
        credentials: Optional[CredentialsConfig] = None,
        sources: Optional[Dict[CertificateProvider, CertificateSource]] = None,
        resolver: Optional[Resolver] = None,
        on_resolved: Optional[OnResolved] = None,
    ):
        """
        Initialize domain discovery.

        Args:
            settings: Run settings
            credentials: Loaded credentials file, if any
            sources: Optional pre-built certificate sources
            resolver: Optional resolver handle, built from settings otherwise
            on_resolved: Progress callback for every successful lookup
        """
        self.settings = settings
        self.credentials = credentials
        self.sources = sources
        self.resolver = resolver
        self.on_resolved = on_resolved
        self.aggregator: Optional[CertificateAggregator] = None

    async def run(self) -> List[DomainInfo]:
        """
        Execute the discovery pipeline.

        Returns:
            DomainInfo entries in completion order.  A name may appear twice
            when both resolution passes resolved it.

        Raises:
            ConfigError: If a selected provider lacks credentials.
            ResolveError: If the DNS resolver cannot be built.
        """
        start = time.monotonic()
        domain = self.settings.domain

        logger.info(f"Starting domain discovery for {domain}")
        validate_config(self.settings.providers, self.credentials)

        resolver = self.resolver or build_resolver(
            self.settings.use_system_resolver, self.settings.dns_resolvers
        )
        engine = DNSResolver(resolver, self.settings.max_parallel)

        # Step 1: certificate names
        logger.info("Step 1: Certificate transparency lookup")
        self.aggregator = CertificateAggregator(
            self.settings.providers,
            credentials=self.credentials,
            sources=self.sources,
            censys_max_parallel=self.settings.censys_max_parallel,
        )
        wildcards, fqdns = await self.aggregator.aggregate(domain)

        # Step 2: resolve known names
        logger.info("Step 2: DNS resolution")
        records: List[ResolutionRecord] = await engine.resolve_all(fqdns, self.on_resolved)

        # Step 3: expand wildcards
        if self.settings.words_file:
            logger.info("Step 3: Wildcard expansion")
            try:
                words = load_words(self.settings.words_file)
            except OSError as e:
                logger.error(f"Skipping wildcard expansion, cannot read wordlist: {e}")
            else:
                candidates = expand(wildcards, fqdns, words)
                records.extend(await engine.resolve_all(candidates, self.on_resolved))

        duration = time.monotonic() - start
        logger.info(f"Domain discovery for {domain} completed in {duration:.2f} seconds: "
                    f"{len(records)} resolvable domains")

        return [DomainInfo.from_record(record) for record in records]
