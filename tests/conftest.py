"""
Pytest configuration

Shared fixtures for the domain-recon test suite.  Nothing here touches the
network: HTTP goes through ``httpx.MockTransport`` and DNS through stub
resolver handles.
"""
import json

import pytest

from domain_recon.config import CredentialsConfig


@pytest.fixture
def sample_domain():
    """Sample domain for testing."""
    return "example.com"


@pytest.fixture
def credentials_data():
    """Raw credentials file contents with every provider section."""
    return {
        "censys": [
            {"app-id": "censys-id-1", "secret": "censys-secret-1"},
            {"app-id": "censys-id-2", "secret": "censys-secret-2"},
        ],
        "certspotter": [
            {"api-key": "spotter-key-1"},
        ],
    }


@pytest.fixture
def credentials(credentials_data) -> CredentialsConfig:
    return CredentialsConfig(**credentials_data)


@pytest.fixture
def credentials_file(tmp_path, credentials_data):
    """Credentials written to a temporary JSON file."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(credentials_data))
    return path
