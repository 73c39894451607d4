"""
Recon Schemas

Pydantic models for the data flowing through the recon pipeline, plus the
identifier enums for certificate providers and public DNS resolver groups.
"""

from enum import Enum
from typing import List, Set

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnknownProviderError, UnknownResolverError


class CertificateProvider(str, Enum):
    """Certificate transparency data sources"""
    CRTSH = "crtsh"
    CENSYS = "censys"
    CERTSPOTTER = "certspotter"

    @classmethod
    def parse(cls, value: str) -> "CertificateProvider":
        """
        Map a user supplied identifier to a provider.

        Raises:
            UnknownProviderError: If the identifier is not recognised.
        """
        key = value.strip().lower()
        key = _PROVIDER_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownProviderError(value) from None

    @property
    def requires_credentials(self) -> bool:
        return self in (CertificateProvider.CENSYS, CertificateProvider.CERTSPOTTER)


_PROVIDER_ALIASES = {
    "certsh": "crtsh",
    "crt.sh": "crtsh",
}


class DnsResolverGroup(str, Enum):
    """Well-known public nameserver groups"""
    GOOGLE = "google"
    CLOUDFLARE = "cloudflare"
    QUAD9 = "quad9"

    @classmethod
    def parse(cls, value: str) -> "DnsResolverGroup":
        """
        Map a user supplied identifier to a resolver group.

        Raises:
            UnknownResolverError: If the identifier is not recognised.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownResolverError(value) from None


class ProviderResult(BaseModel):
    """Hostnames returned by one certificate data source, split by kind"""
    source: str
    wildcards: Set[str] = Field(default_factory=set)
    fqdns: Set[str] = Field(default_factory=set)

    @property
    def total(self) -> int:
        return len(self.wildcards) + len(self.fqdns)


class ResolutionRecord(BaseModel):
    """A successful lookup of one candidate name"""
    model_config = ConfigDict(frozen=True)

    name: str
    record_type: str
    addresses: List[str] = Field(default_factory=list)


class DomainInfo(BaseModel):
    """Final output unit handed to writers"""
    name: str
    record_type: str
    addresses: List[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ResolutionRecord) -> "DomainInfo":
        return cls(
            name=record.name,
            record_type=record.record_type,
            addresses=list(record.addresses),
        )

    def pretty(self, plain: bool = False) -> str:
        """Render the entry the way the console shows progress"""
        if plain:
            return self.name
        return f"{self.name} {self.record_type} {', '.join(self.addresses)}"
