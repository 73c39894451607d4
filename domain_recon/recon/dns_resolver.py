"""
DNS Resolution Module

Resolves candidate hostnames concurrently while keeping at most
``max_parallel`` lookups in flight.  Results are collected in completion
order; unresolvable and syntactically invalid names are dropped.
"""

import asyncio
import logging
from typing import Callable, Iterable, List, Optional, Protocol

from domain_recon.errors import LookupFailedError
from domain_recon.schemas import ResolutionRecord

from .hostnames import is_valid_domain

logger = logging.getLogger(__name__)

DEFAULT_MAX_PARALLEL = 20

OnResolved = Callable[[ResolutionRecord], None]


class Resolver(Protocol):
    async def lookup_ip(self, name: str) -> ResolutionRecord:
        ...


class DNSResolver:
    """Bounded concurrent resolution engine."""

    def __init__(self, resolver: Resolver, max_parallel: int = DEFAULT_MAX_PARALLEL):
        """
        Initialize the resolution engine.

        Args:
            resolver: Shared resolver handle
            max_parallel: Upper bound on lookups in flight at once
        """
        if max_parallel < 1:
            raise ValueError("max_parallel must be >= 1")
        self.resolver = resolver
        self.max_parallel = max_parallel

    async def resolve_all(
        self,
        candidates: Iterable[str],
        on_resolved: Optional[OnResolved] = None,
    ) -> List[ResolutionRecord]:
        """
        Resolve every valid candidate name.

        Args:
            candidates: Hostnames to resolve
            on_resolved: Called with each record as soon as it resolves

        Returns:
            Records of successful lookups, in completion order
        """
        names = []
        for name in candidates:
            if is_valid_domain(name):
                names.append(name)
            else:
                logger.debug(f"Skipping invalid domain name: {name!r}")

        logger.info(f"Resolving {len(names)} names with up to {self.max_parallel} parallel lookups")

        sem = asyncio.Semaphore(self.max_parallel)

        async def _lookup(name: str) -> ResolutionRecord:
            async with sem:
                return await self.resolver.lookup_ip(name)

        tasks = [asyncio.ensure_future(_lookup(name)) for name in names]
        records: List[ResolutionRecord] = []

        try:
            for future in asyncio.as_completed(tasks):
                try:
                    record = await future
                except LookupFailedError as e:
                    logger.debug(f"Lookup failed for {e.name}: {e.message}")
                    continue
                except Exception as e:
                    logger.warning(f"Unexpected lookup error: {e}")
                    continue

                records.append(record)
                if on_resolved is not None:
                    on_resolved(record)
        finally:
            pending = [task for task in tasks if not task.done()]
            if pending:
                logger.debug(f"Cancelling {len(pending)} outstanding lookups")
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)

        logger.info(f"Resolved {len(records)}/{len(names)} names")
        return records


async def resolve_all(
    candidates: Iterable[str],
    resolver: Resolver,
    max_parallel: int = DEFAULT_MAX_PARALLEL,
    on_resolved: Optional[OnResolved] = None,
) -> List[ResolutionRecord]:
    """Resolve *candidates* with a one-off :class:`DNSResolver`."""
    return await DNSResolver(resolver, max_parallel).resolve_all(candidates, on_resolved)
