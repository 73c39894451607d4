"""
Unit tests for the certificate aggregator.
"""

import asyncio

import httpx
import pytest

from domain_recon.errors import ProviderError
from domain_recon.recon.ct_aggregator import CertificateAggregator
from domain_recon.recon.ct_sources import CrtShSource
from domain_recon.schemas import CertificateProvider, ProviderResult


class TestCertificateAggregator:
    """Test suite for CertificateAggregator class."""

    @pytest.mark.asyncio
    async def test_merges_provider_results(self, sample_domain, stub_source):
        sources = {
            CertificateProvider.CRTSH: stub_source(
                "crtsh", wildcards={"*.example.com"}, fqdns={"www.example.com", "example.com"}
            ),
            CertificateProvider.CERTSPOTTER: stub_source(
                "certspotter", wildcards={"*.example.com", "*.dev.example.com"}, fqdns={"api.example.com", "www.example.com"}
            ),
        }
        aggregator = CertificateAggregator(list(sources), sources=sources)

        wildcards, fqdns = await aggregator.aggregate(sample_domain)

        assert wildcards == {"*.example.com", "*.dev.example.com"}
        assert fqdns == {"www.example.com", "example.com", "api.example.com"}
        assert wildcards.isdisjoint(fqdns)
        assert aggregator.failures == []

    @pytest.mark.asyncio
    async def test_failing_source_does_not_hide_others(self, sample_domain, stub_source, failing_source):
        sources = {
            CertificateProvider.CRTSH: stub_source("crtsh", fqdns={"www.example.com"}),
            CertificateProvider.CERTSPOTTER: failing_source,
        }
        aggregator = CertificateAggregator(list(sources), sources=sources)

        wildcards, fqdns = await aggregator.aggregate(sample_domain)

        assert fqdns == {"www.example.com"}
        assert wildcards == set()
        assert len(aggregator.failures) == 1
        assert aggregator.failures[0].source == "certspotter"

    @pytest.mark.asyncio
    async def test_http_500_source_with_healthy_source(self, sample_domain, stub_source):
        crtsh = CrtShSource(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
        sources = {
            CertificateProvider.CRTSH: crtsh,
            CertificateProvider.CERTSPOTTER: stub_source("certspotter", fqdns={"api.example.com"}),
        }
        aggregator = CertificateAggregator(list(sources), sources=sources)

        wildcards, fqdns = await aggregator.aggregate(sample_domain)

        assert fqdns == {"api.example.com"}
        assert [f.source for f in aggregator.failures] == ["crtsh"]

    @pytest.mark.asyncio
    async def test_all_sources_failing_returns_empty_sets(self, sample_domain, stub_source):
        sources = {
            CertificateProvider.CRTSH: stub_source("crtsh", error=ProviderError("crtsh", "HTTP 502")),
            CertificateProvider.CENSYS: stub_source("censys", error=RuntimeError("boom")),
        }
        aggregator = CertificateAggregator(list(sources), sources=sources)

        wildcards, fqdns = await aggregator.aggregate(sample_domain)

        assert wildcards == set()
        assert fqdns == set()
        assert {f.source for f in aggregator.failures} == {"crtsh", "censys"}

    @pytest.mark.asyncio
    async def test_first_credential_set_passed(self, sample_domain, stub_source, credentials):
        censys = stub_source("censys")
        spotter = stub_source("certspotter")
        crtsh = stub_source("crtsh")
        sources = {
            CertificateProvider.CRTSH: crtsh,
            CertificateProvider.CENSYS: censys,
            CertificateProvider.CERTSPOTTER: spotter,
        }
        aggregator = CertificateAggregator(list(sources), credentials=credentials, sources=sources)

        await aggregator.aggregate(sample_domain)

        assert crtsh.calls == [("example.com", None)]
        assert censys.calls[0][1].app_id == "censys-id-1"
        assert spotter.calls[0][1].api_key == "spotter-key-1"

    @pytest.mark.asyncio
    async def test_sources_run_concurrently(self, sample_domain):
        both_started = asyncio.Event()
        count = {"started": 0}

        class BlockingSource:
            def __init__(self, name):
                self.name = name

            async def fetch(self, domain, credentials=None):
                count["started"] += 1
                if count["started"] == 2:
                    both_started.set()
                await asyncio.wait_for(both_started.wait(), timeout=1.0)
                return ProviderResult(source=self.name, fqdns={f"{self.name}.example.com"})

        sources = {
            CertificateProvider.CRTSH: BlockingSource("crtsh"),
            CertificateProvider.CERTSPOTTER: BlockingSource("certspotter"),
        }
        aggregator = CertificateAggregator(list(sources), sources=sources)

        _, fqdns = await aggregator.aggregate(sample_domain)

        assert fqdns == {"crtsh.example.com", "certspotter.example.com"}
        assert aggregator.failures == []

    @pytest.mark.asyncio
    async def test_no_providers(self, sample_domain):
        aggregator = CertificateAggregator([])
        assert await aggregator.aggregate(sample_domain) == (set(), set())

    def test_builds_missing_sources(self):
        aggregator = CertificateAggregator(
            [CertificateProvider.CENSYS], censys_max_parallel=4
        )
        source = aggregator._source_for(CertificateProvider.CENSYS)
        assert source.max_parallel_requests == 4
        assert aggregator._source_for(CertificateProvider.CENSYS) is source
