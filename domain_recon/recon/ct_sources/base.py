"""
Base Certificate Source

All certificate transparency providers (crt.sh, Censys, CertSpotter) extend
``CertificateSource``.  The base class provides:

  - A standard ``fetch()`` lifecycle around a shared ``httpx.AsyncClient``
  - Conversion of transport, HTTP status and payload errors to ``ProviderError``
  - Classification of the raw names into a :class:`ProviderResult`
"""
from __future__ import annotations

import abc
import logging
from typing import Any, Iterable, Optional

import httpx
from pydantic import ValidationError

from domain_recon.errors import ProviderError
from domain_recon.recon.hostnames import classify
from domain_recon.schemas import ProviderResult

logger = logging.getLogger(__name__)


class CertificateSource(abc.ABC):
    """
    Abstract base class for certificate transparency data sources.

    Subclasses must implement :meth:`_fetch_names`.

    Usage example::

        class CrtShSource(CertificateSource):
            SOURCE_NAME = "crtsh"

            async def _fetch_names(self, client, domain, credentials):
                ...
    """

    #: Override in subclasses with the provider identifier
    SOURCE_NAME: str = "unknown"

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, used to stub the network
        """
        self.timeout = timeout
        self.transport = transport
        self._logger = logging.getLogger(f"ct_source.{self.SOURCE_NAME}")

    async def fetch(self, domain: str, credentials: Any = None) -> ProviderResult:
        """
        Query the provider and classify the returned hostnames.

        Args:
            domain: Target domain
            credentials: Provider specific credential set, if required

        Returns:
            ProviderResult with wildcard and fqdn sets

        Raises:
            ProviderError: On network failure, non-success status or bad payload.
        """
        self._logger.info("Querying %s for %s", self.SOURCE_NAME, domain)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                names = list(await self._fetch_names(client, domain, credentials))
        except ProviderError:
            raise
        except httpx.HTTPError as exc:
            raise ProviderError(self.SOURCE_NAME, f"request failed: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise ProviderError(self.SOURCE_NAME, f"malformed response: {exc}") from exc

        wildcards, fqdns = classify(names)
        self._logger.info(
            "%s returned %d wildcard and %d fully-qualified names",
            self.SOURCE_NAME, len(wildcards), len(fqdns),
        )
        return ProviderResult(source=self.SOURCE_NAME, wildcards=wildcards, fqdns=fqdns)

    def _status_error(self, response: httpx.Response, detail: Optional[str] = None) -> ProviderError:
        """Build the error reported for a non-success HTTP status."""
        message = f"responded with HTTP code {response.status_code}"
        if detail:
            message += f" and message: {detail}"
        return ProviderError(
            self.SOURCE_NAME, message + ". You may want to try another provider"
        )

    @abc.abstractmethod
    async def _fetch_names(
        self,
        client: httpx.AsyncClient,
        domain: str,
        credentials: Any,
    ) -> Iterable[str]:
        """
        Perform the provider requests and return every hostname found.

        Raise ``ProviderError`` for provider-reported failures; httpx and
        parsing errors are converted by :meth:`fetch`.
        """
