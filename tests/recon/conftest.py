"""
Test configuration and fixtures for reconnaissance module tests.
"""

import asyncio
from typing import Dict, List, Optional, Set

import pytest

from domain_recon.errors import LookupFailedError, ProviderError
from domain_recon.schemas import ProviderResult, ResolutionRecord


class StubResolver:
    """
    Resolver handle answering from a fixed table.

    Tracks every call and the high-water mark of concurrent lookups.
    """

    def __init__(
        self,
        answers: Dict[str, List[str]],
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
        record_type: str = "A",
    ):
        self.answers = answers
        self.delay = delay
        self.delays = delays or {}
        self.record_type = record_type
        self.calls: List[str] = []
        self.active = 0
        self.max_active = 0

    async def lookup_ip(self, name: str) -> ResolutionRecord:
        self.calls.append(name)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(name, self.delay))
            if name not in self.answers:
                raise LookupFailedError(name, "NXDOMAIN")
            return ResolutionRecord(
                name=name,
                record_type=self.record_type,
                addresses=self.answers[name],
            )
        finally:
            self.active -= 1


class StubSource:
    """Certificate source returning fixed names, or failing."""

    def __init__(
        self,
        name: str,
        wildcards: Optional[Set[str]] = None,
        fqdns: Optional[Set[str]] = None,
        error: Optional[Exception] = None,
    ):
        self.name = name
        self.wildcards = wildcards or set()
        self.fqdns = fqdns or set()
        self.error = error
        self.calls = []

    async def fetch(self, domain, credentials=None) -> ProviderResult:
        self.calls.append((domain, credentials))
        if self.error is not None:
            raise self.error
        return ProviderResult(source=self.name, wildcards=self.wildcards, fqdns=self.fqdns)


@pytest.fixture
def stub_resolver():
    """Factory for StubResolver instances."""
    return StubResolver


@pytest.fixture
def stub_source():
    """Factory for StubSource instances."""
    return StubSource


@pytest.fixture
def failing_source():
    """A source failing the way an HTTP 500 does."""
    return StubSource(
        "certspotter",
        error=ProviderError("certspotter", "responded with HTTP code 500"),
    )


@pytest.fixture
def sample_fqdns() -> Set[str]:
    """Sample set of fully-qualified names for testing."""
    return {
        "example.com",
        "www.example.com",
        "mail.example.com",
        "api.example.com",
    }


@pytest.fixture
def sample_wildcards() -> Set[str]:
    return {"*.example.com", "*.dev.example.com"}
