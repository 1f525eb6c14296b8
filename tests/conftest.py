"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

ENV_PREFIX = "RESOURCE_DISCOVERY_"

# Drop any developer overrides before config-dependent modules are imported
for key in [name for name in os.environ if name.upper().startswith(ENV_PREFIX)]:
    del os.environ[key]

from resource_discovery.config import Settings, get_settings
from resource_discovery.services.discovery import ResourceDiscovery
from resource_discovery.services.resource_vault import ResourceVault
from tests.fixtures.sample_catalog import sample_resources


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep every test on default settings regardless of the caller's environment."""
    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def catalog():
    return sample_resources()


@pytest.fixture
def vault(catalog) -> ResourceVault:
    return ResourceVault(catalog, name="test")


@pytest.fixture
def discovery(vault, settings) -> ResourceDiscovery:
    return ResourceDiscovery(vault, settings)
