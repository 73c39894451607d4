"""
Recon Configuration

Loads provider credentials from the JSON credentials file, assembles the
immutable run settings and validates that every selected provider has the
credentials it needs before any network I/O happens.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .schemas import CertificateProvider, DnsResolverGroup

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOMAIN_RECON_CONFIG"

DEFAULT_PROVIDERS = ["crtsh"]
DEFAULT_RESOLVERS = ["google"]
DEFAULT_MAX_PARALLEL = 20


class CensysCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    app_id: str = Field(..., alias="app-id")
    secret: str


class CertSpotterCredentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="api-key")


class CredentialsConfig(BaseModel):
    """
    Contents of the credentials file.

    Each provider section holds a list of credential sets.  Only the first
    set of a section is used when querying the provider.
    """
    censys: Optional[List[CensysCredentials]] = None
    certspotter: Optional[List[CertSpotterCredentials]] = None

    @classmethod
    def load(cls, path: str) -> "CredentialsConfig":
        """
        Read and parse a credentials file.

        Raises:
            ConfigError: If the file is missing, not JSON, or has the wrong shape.
        """
        cfg_path = Path(path)
        if not cfg_path.is_file():
            raise ConfigError(f"Config file not found: {cfg_path}")
        try:
            raw = json.loads(cfg_path.read_text()) or {}
        except (OSError, ValueError) as exc:
            raise ConfigError(f"Could not read config file {cfg_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {cfg_path} must contain a JSON object")
        try:
            return cls(**raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid config file {cfg_path}: {exc}") from exc

    def credentials_for(self, provider: CertificateProvider) -> Optional[Any]:
        """Return the first credential set for *provider*, or None"""
        if not provider.requires_credentials:
            return None
        entries = getattr(self, provider.value)
        if not entries:
            return None
        if len(entries) > 1:
            logger.debug(
                "%d credential sets supplied for %s, using the first one",
                len(entries), provider.value,
            )
        return entries[0]


def load_credentials(path: Optional[str]) -> Optional[CredentialsConfig]:
    """
    Load the credentials file at *path*, falling back to ``$DOMAIN_RECON_CONFIG``.

    Returns None when no path is configured at all.
    """
    path = path or os.getenv(CONFIG_ENV_VAR)
    if not path:
        return None
    logger.info(f"Loading credentials from {path}")
    return CredentialsConfig.load(path)


def validate_config(
    providers: Sequence[CertificateProvider],
    config: Optional[CredentialsConfig],
) -> None:
    """
    Check that every selected provider has its credentials.

    The first problem found is raised immediately.

    Raises:
        ConfigError: If a credential-requiring provider has no credentials.
    """
    for provider in providers:
        if not provider.requires_credentials:
            continue
        if config is None:
            raise ConfigError(
                f"Provider '{provider.value}' requires credentials, "
                f"but no config file was provided"
            )
        if not getattr(config, provider.value):
            raise ConfigError(
                f"Provider '{provider.value}' requires credentials, "
                f"but the config file has no '{provider.value}' section"
            )


class ReconSettings(BaseModel):
    """Immutable input for one pipeline run"""
    model_config = ConfigDict(frozen=True)

    domain: str
    providers: List[CertificateProvider] = Field(default_factory=list)
    words_file: Optional[str] = None
    use_system_resolver: bool = False
    dns_resolvers: List[DnsResolverGroup] = Field(default_factory=list)
    config_path: Optional[str] = None
    max_parallel: int = Field(default=DEFAULT_MAX_PARALLEL, ge=1)
    censys_max_parallel: int = Field(default=10, ge=1)
    plain: bool = False

    @field_validator("domain")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("domain must not be empty")
        return v

    @field_validator("words_file")
    @classmethod
    def blank_words_file(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def build(
        cls,
        domain: str,
        providers: Optional[Sequence[str]] = None,
        words_file: Optional[str] = None,
        use_system_resolver: bool = False,
        dns_resolvers: Optional[Sequence[str]] = None,
        config_path: Optional[str] = None,
        max_parallel: Optional[int] = None,
        plain: bool = False,
    ) -> "ReconSettings":
        """
        Assemble settings from raw identifiers.

        Raises:
            UnknownProviderError: For an unrecognised provider name.
            UnknownResolverError: For an unrecognised resolver name.
            pydantic.ValidationError: For an empty domain or max_parallel < 1.
        """
        parsed_providers: List[CertificateProvider] = []
        for name in providers or DEFAULT_PROVIDERS:
            provider = CertificateProvider.parse(name)
            if provider not in parsed_providers:
                parsed_providers.append(provider)

        # Resolver names are ignored when the system configuration is used
        parsed_resolvers: List[DnsResolverGroup] = []
        if not use_system_resolver:
            parsed_resolvers = [
                DnsResolverGroup.parse(name)
                for name in (dns_resolvers or DEFAULT_RESOLVERS)
            ]

        kwargs: Dict[str, Any] = dict(
            domain=domain,
            providers=parsed_providers,
            words_file=words_file,
            use_system_resolver=use_system_resolver,
            dns_resolvers=parsed_resolvers,
            config_path=config_path,
            plain=plain,
        )
        if max_parallel is not None:
            kwargs["max_parallel"] = max_parallel
        return cls(**kwargs)
