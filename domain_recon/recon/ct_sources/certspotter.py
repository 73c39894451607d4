"""
CertSpotter Certificate Source

Lists certificate issuances for a domain and its subdomains through the
SSLMate CertSpotter API (bearer token).
"""

from typing import Any, Iterable, List, Set

import httpx
from pydantic import BaseModel, Field, TypeAdapter

from domain_recon.config import CertSpotterCredentials
from domain_recon.errors import ProviderError

from .base import CertificateSource

CERTSPOTTER_URL = "https://api.certspotter.com/v1/issuances"


class CertSpotterIssuance(BaseModel):
    id: str = ""
    dns_names: List[str] = Field(default_factory=list)


_issuances = TypeAdapter(List[CertSpotterIssuance])


class CertSpotterSource(CertificateSource):
    """CertSpotter issuances API client."""

    SOURCE_NAME = "certspotter"

    async def _fetch_names(
        self,
        client: httpx.AsyncClient,
        domain: str,
        credentials: Any,
    ) -> Iterable[str]:
        if not isinstance(credentials, CertSpotterCredentials):
            raise ProviderError(self.SOURCE_NAME, "missing api-key credentials")

        response = await client.get(
            CERTSPOTTER_URL,
            params={
                "domain": domain,
                "include_subdomains": "true",
                "expand": "dns_names",
            },
            headers={"Authorization": f"Bearer {credentials.api_key}"},
        )
        if not response.is_success:
            raise self._status_error(response)

        issuances = _issuances.validate_python(response.json())

        names: Set[str] = set()
        for issuance in issuances:
            names.update(issuance.dns_names)
        return names
