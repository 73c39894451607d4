"""
domain-recon: subdomain discovery from certificate transparency logs.
"""

from .config import CredentialsConfig, ReconSettings
from .errors import (
    ConfigError,
    LookupFailedError,
    ProviderError,
    ReconError,
    ResolveError,
    UnknownProviderError,
    UnknownResolverError,
)
from .schemas import DomainInfo

__version__ = "0.3.0"

__all__ = [
    "ConfigError",
    "CredentialsConfig",
    "DomainInfo",
    "LookupFailedError",
    "ProviderError",
    "ReconError",
    "ReconSettings",
    "ResolveError",
    "UnknownProviderError",
    "UnknownResolverError",
]
