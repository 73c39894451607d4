"""
Recon Error Handling

Defines the exceptions raised across the recon pipeline.

Configuration, identifier and resolver-construction errors are fatal and
abort a run before any lookup happens.  ``ProviderError`` and
``LookupFailedError`` are per-item failures that callers recover from locally.
"""

from typing import Optional


class ReconError(Exception):
    """Base class for all recon pipeline errors"""
    pass


class ConfigError(ReconError):
    """Raised when credentials are missing or the config file is invalid"""
    pass


class UnknownProviderError(ReconError):
    """Raised for an unrecognised certificate provider identifier"""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unknown certificate provider: '{provider}'")


class UnknownResolverError(ReconError):
    """Raised for an unrecognised DNS resolver identifier"""

    def __init__(self, resolver_name: str):
        self.resolver_name = resolver_name
        super().__init__(f"Unknown DNS resolver: '{resolver_name}'")


class ProviderError(ReconError):
    """Raised when a single certificate data source fails"""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{source}: {message}")


class ResolveError(ReconError):
    """Raised when a DNS resolver cannot be built"""
    pass


class LookupFailedError(ReconError):
    """Raised when one DNS lookup yields no addresses"""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        self.message = message or "lookup failed"
        super().__init__(f"{name}: {self.message}")
