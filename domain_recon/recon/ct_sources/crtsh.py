"""
crt.sh Certificate Source

Queries the crt.sh certificate transparency search (no credentials needed)
and extracts the names of every non-expired certificate.
"""

from typing import Any, Iterable, List, Set

import httpx
from pydantic import BaseModel, TypeAdapter

from domain_recon.recon.hostnames import split_name_value

from .base import CertificateSource

CRTSH_URL = "https://crt.sh/"


class CrtShCertificate(BaseModel):
    common_name: str = ""
    name_value: str = ""


_certificates = TypeAdapter(List[CrtShCertificate])


class CrtShSource(CertificateSource):
    """crt.sh JSON API client."""

    SOURCE_NAME = "crtsh"

    async def _fetch_names(
        self,
        client: httpx.AsyncClient,
        domain: str,
        credentials: Any,
    ) -> Iterable[str]:
        params = {
            "q": domain,
            "output": "json",
            "excluded": "expired",
        }
        response = await client.get(CRTSH_URL, params=params)
        if not response.is_success:
            raise self._status_error(response)

        certificates = _certificates.validate_python(response.json())
        self._logger.info(f"Retrieved {len(certificates)} certificate entries for {domain}")

        names: Set[str] = set()
        for certificate in certificates:
            names.update(split_name_value(certificate.name_value))
            names.add(certificate.common_name)
        return names
