"""
Pytest configuration and fixtures for font resolver tests.
"""

from unittest.mock import Mock

import pytest

from src.fontresolver.core.config import GoogleProviderConfig, StorageConfig
from src.fontresolver.core.models import ResolveFontOptions
from src.fontresolver.fetch import FontFetcher
from src.fontresolver.providers.google import USER_AGENTS, GoogleFontsProvider
from src.fontresolver.storage import FontStorage

from helpers import FONT_INDEX, TTF_CSS, WOFF2_CSS


@pytest.fixture
def font_index():
    """Raw family index as returned by the metadata endpoint."""
    return [dict(entry) for entry in FONT_INDEX]


@pytest.fixture
def mock_fetcher(font_index):
    """Fetcher serving canned CSS per user agent."""
    fetcher = Mock(spec=FontFetcher)
    stylesheets = {USER_AGENTS[0][1]: WOFF2_CSS, USER_AGENTS[1][1]: TTF_CSS}

    def fetch_text(path, base_url=None, headers=None, query=None):
        return stylesheets[headers["user-agent"]]

    fetcher.fetch_text.side_effect = fetch_text
    fetcher.fetch_json.return_value = {"familyMetadataList": font_index}
    return fetcher


@pytest.fixture
def storage():
    """In-memory storage."""
    return FontStorage(StorageConfig(enabled=True, cache_dir=None))


@pytest.fixture
def provider_config():
    return GoogleProviderConfig()


@pytest.fixture
def provider(provider_config, storage, mock_fetcher):
    """Initialized Google provider backed by the mock fetcher."""
    google = GoogleFontsProvider(config=provider_config, storage=storage, fetcher=mock_fetcher)
    google.initialize()
    return google


@pytest.fixture
def latin_options():
    return ResolveFontOptions(weights=["400"], styles=["normal"], subsets=["latin"])
