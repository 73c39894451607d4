"""
Certificate transparency data sources.

``build_source`` maps a :class:`CertificateProvider` to its client.
"""

from typing import Any, Dict, Type

from domain_recon.schemas import CertificateProvider

from .base import CertificateSource
from .censys import CensysSource
from .certspotter import CertSpotterSource
from .crtsh import CrtShSource

SOURCES: Dict[CertificateProvider, Type[CertificateSource]] = {
    CertificateProvider.CRTSH: CrtShSource,
    CertificateProvider.CENSYS: CensysSource,
    CertificateProvider.CERTSPOTTER: CertSpotterSource,
}


def build_source(provider: CertificateProvider, **kwargs: Any) -> CertificateSource:
    """Instantiate the data source for *provider*."""
    try:
        source_cls = SOURCES[provider]
    except KeyError:
        raise ValueError(f"Unsupported certificate provider: {provider}") from None
    return source_cls(**kwargs)


__all__ = [
    "CertificateSource",
    "CensysSource",
    "CertSpotterSource",
    "CrtShSource",
    "SOURCES",
    "build_source",
]
