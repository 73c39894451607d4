"""
Censys Certificate Source

Searches the Censys certificate index with basic-auth credentials.  The
first result page tells how many pages exist; the remaining pages are
fetched concurrently, bounded by ``max_parallel_requests``.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Set

import httpx
from pydantic import BaseModel, ConfigDict, Field

from domain_recon.config import CensysCredentials
from domain_recon.errors import ProviderError

from .base import CertificateSource

CENSYS_SEARCH_URL = "https://search.censys.io/api/v1/search/certificates"

_FIELDS = [
    "parsed.names",
    "parsed.extensions.subject_alt_name.dns_names",
]


class CensysMetadata(BaseModel):
    page: int = 1
    pages: int = 1


class CensysParsedResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    names: Optional[List[str]] = Field(default=None, alias="parsed.names")
    dns_names: Optional[List[str]] = Field(
        default=None, alias="parsed.extensions.subject_alt_name.dns_names"
    )


class CensysResponse(BaseModel):
    status: str
    metadata: CensysMetadata = Field(default_factory=CensysMetadata)
    results: List[CensysParsedResult] = Field(default_factory=list)


class CensysSource(CertificateSource):
    """Censys v1 certificate search client."""

    SOURCE_NAME = "censys"

    def __init__(self, max_parallel_requests: int = 10, **kwargs: Any) -> None:
        """
        Args:
            max_parallel_requests: Upper bound on concurrently fetched pages
            **kwargs: Passed to :class:`CertificateSource`
        """
        super().__init__(**kwargs)
        if max_parallel_requests < 1:
            raise ValueError("max_parallel_requests must be >= 1")
        self.max_parallel_requests = max_parallel_requests

    async def _fetch_names(
        self,
        client: httpx.AsyncClient,
        domain: str,
        credentials: Any,
    ) -> Iterable[str]:
        if not isinstance(credentials, CensysCredentials):
            raise ProviderError(self.SOURCE_NAME, "missing app-id/secret credentials")

        auth = httpx.BasicAuth(credentials.app_id, credentials.secret)
        first = await self._send_request(client, domain, 1, auth)
        responses = [first]

        remaining = range(2, first.metadata.pages + 1)
        if remaining:
            responses.extend(await self._fetch_pages(client, domain, remaining, auth))

        names: Set[str] = set()
        for response in responses:
            if response.status != "ok":
                continue
            for parsed in response.results:
                names.update(parsed.names or [])
                names.update(parsed.dns_names or [])
        return names

    async def _fetch_pages(
        self,
        client: httpx.AsyncClient,
        domain: str,
        pages: Iterable[int],
        auth: httpx.BasicAuth,
    ) -> List[CensysResponse]:
        """Fetch follow-up pages; a failed page is dropped."""
        sem = asyncio.Semaphore(self.max_parallel_requests)

        async def _fetch_one(page: int) -> CensysResponse:
            async with sem:
                return await self._send_request(client, domain, page, auth)

        results = await asyncio.gather(
            *[_fetch_one(page) for page in pages], return_exceptions=True
        )

        responses: List[CensysResponse] = []
        for page, result in zip(pages, results):
            if isinstance(result, Exception):
                self._logger.warning("Censys page %d failed: %s", page, result)
                continue
            responses.append(result)
        return responses

    async def _send_request(
        self,
        client: httpx.AsyncClient,
        domain: str,
        page: int,
        auth: httpx.BasicAuth,
    ) -> CensysResponse:
        response = await client.post(
            CENSYS_SEARCH_URL,
            json=self._build_request(domain, page),
            auth=auth,
            headers={"Accept": "application/json"},
        )
        if not response.is_success:
            raise self._status_error(response, self._error_message(response))
        return CensysResponse.model_validate(response.json())

    @staticmethod
    def _build_request(domain: str, page: int) -> Dict[str, Any]:
        return {
            "query": f"validation.nss.valid: true and parsed.names: {domain}",
            "page": page,
            "flatten": True,
            "fields": list(_FIELDS),
        }

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        """Extract the ``error`` field of a Censys error body, if any."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("error")
        return None
