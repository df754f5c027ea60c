"""Tests for the Google Fonts provider."""

import threading
from unittest.mock import Mock

import pytest

from src.fontresolver.core.config import GoogleProviderConfig
from src.fontresolver.core.exceptions import (
    CSSParseError,
    FetchError,
    InvalidResponseError,
    ProviderNotInitializedError,
)
from src.fontresolver.core.models import ResolveFontOptions
from src.fontresolver.providers.google import (
    META_KEY,
    USER_AGENTS,
    GoogleFontsProvider,
    create_google_provider,
)
from src.fontresolver.storage import FontStorage

from helpers import TTF_CSS, WOFF2_CSS


class TestInitialization:
    """Test family index loading."""

    def test_list_fonts(self, provider, mock_fetcher):
        assert provider.list_fonts() == ["Roboto", "Inter"]
        mock_fetcher.fetch_json.assert_called_once_with("https://fonts.google.com/metadata/fonts")

    def test_index_is_stored(self, provider, storage, font_index):
        assert storage.get_item(META_KEY) == font_index

    def test_index_loaded_from_storage(self, storage, font_index):
        storage.set_item(META_KEY, font_index)
        fetcher = Mock()

        google = create_google_provider(storage=storage, fetcher=fetcher)

        assert google.list_fonts() == ["Roboto", "Inter"]
        fetcher.fetch_json.assert_not_called()

    def test_uninitialized_provider(self, storage, mock_fetcher):
        google = GoogleFontsProvider(storage=storage, fetcher=mock_fetcher)

        with pytest.raises(ProviderNotInitializedError):
            google.list_fonts()

    def test_bad_index_payload(self, storage):
        fetcher = Mock()
        fetcher.fetch_json.return_value = {"families": []}

        with pytest.raises(InvalidResponseError):
            create_google_provider(storage=storage, fetcher=fetcher)

    def test_close_releases_fetcher(self, provider, mock_fetcher):
        provider.close()

        mock_fetcher.close.assert_called_once()


class TestResolveFont:
    """Test resolve_font."""

    def test_unknown_family(self, provider, latin_options, mock_fetcher):
        assert provider.resolve_font("Not A Font", latin_options) is None
        mock_fetcher.fetch_text.assert_not_called()

    def test_faces_filtered_by_subset_with_priorities(self, provider, latin_options):
        result = provider.resolve_font("Roboto", latin_options)

        urls = [face.src[0].url for face in result.fonts]
        assert urls == [
            "https://fonts.gstatic.com/s/roboto/v1/latin.woff2",
            "https://fonts.gstatic.com/s/roboto/v1/latin-italic.woff2",
            "https://fonts.gstatic.com/s/roboto/v1/regular.ttf",
        ]
        assert [face.priority for face in result.fonts] == [0, 0, 1]

    def test_unlabelled_fragments_are_kept(self, provider):
        options = ResolveFontOptions(weights=["400"], styles=["normal"], subsets=["greek"])

        result = provider.resolve_font("Roboto", options)

        assert [face.src[0].url for face in result.fonts] == [
            "https://fonts.gstatic.com/s/roboto/v1/regular.ttf"
        ]
        assert result.fonts[0].priority == 1

    def test_request_per_flavor(self, provider, latin_options, mock_fetcher):
        provider.resolve_font("Roboto", latin_options)

        calls = mock_fetcher.fetch_text.call_args_list
        assert [c.kwargs["headers"]["user-agent"] for c in calls] == [ua for _, ua in USER_AGENTS]
        for c in calls:
            assert c.args == ("/css2",)
            assert c.kwargs["base_url"] == "https://fonts.googleapis.com"
            assert c.kwargs["query"] == {"family": "Roboto:ital,wght@0,400"}

    def test_variable_family_uses_range(self, provider, mock_fetcher):
        options = ResolveFontOptions(weights=["100 900"], styles=["normal", "italic"])

        provider.resolve_font("Inter", options)

        query = mock_fetcher.fetch_text.call_args.kwargs["query"]
        assert query["family"] == "Inter:ital,wght@0,100..900;1,100..900"

    def test_empty_variants_is_empty_not_absent(self, provider, mock_fetcher):
        options = ResolveFontOptions(weights=["550"], styles=["normal"])

        result = provider.resolve_font("Roboto", options)

        assert result is not None
        assert result.fonts == []
        mock_fetcher.fetch_text.assert_not_called()

    def test_result_is_cached(self, provider, latin_options, mock_fetcher):
        first = provider.resolve_font("Roboto", latin_options)
        second = provider.resolve_font("Roboto", latin_options)

        assert first == second
        assert mock_fetcher.fetch_text.call_count == len(USER_AGENTS)

    def test_equal_normalized_options_share_cache(self, provider, mock_fetcher):
        provider.resolve_font(
            "Roboto", ResolveFontOptions(weights=["400", "700"], subsets=["latin", "cyrillic"])
        )
        provider.resolve_font(
            "Roboto", ResolveFontOptions(weights=["700", "400"], subsets=["cyrillic", "latin"])
        )

        assert mock_fetcher.fetch_text.call_count == len(USER_AGENTS)

    def test_resolution_is_deterministic(self, mock_fetcher, latin_options):
        results = []
        for _ in range(2):
            google = create_google_provider(storage=FontStorage(), fetcher=mock_fetcher)
            results.append(google.resolve_font("Roboto", latin_options))

        assert results[0] == results[1]
        assert mock_fetcher.fetch_text.call_count == 2 * len(USER_AGENTS)

    def test_fetch_failure_propagates(self, provider, latin_options, mock_fetcher):
        mock_fetcher.fetch_text.side_effect = FetchError("https://fonts.googleapis.com/css2", 500)

        with pytest.raises(FetchError):
            provider.resolve_font("Roboto", latin_options)

    def test_malformed_css_propagates(self, provider, latin_options, mock_fetcher):
        mock_fetcher.fetch_text.side_effect = None
        mock_fetcher.fetch_text.return_value = "/* latin */\n@font-face{src:url(a.woff2);}\n.x"

        with pytest.raises(CSSParseError):
            provider.resolve_font("Roboto", latin_options)


class TestProviderOptions:
    """Test per-family experimental options."""

    def test_glyphs_sent_as_text(self, storage, mock_fetcher, latin_options):
        config = GoogleProviderConfig(glyphs={"Roboto": ["Hello", " World"]})
        google = create_google_provider(config=config, storage=storage, fetcher=mock_fetcher)

        google.resolve_font("Roboto", latin_options)

        assert mock_fetcher.fetch_text.call_args.kwargs["query"]["text"] == "Hello World"

    def test_variable_axis_overrides(self, storage, mock_fetcher, latin_options):
        config = GoogleProviderConfig(variable_axis={"Roboto": {"wdth": [["75", "100"]]}})
        google = create_google_provider(config=config, storage=storage, fetcher=mock_fetcher)

        google.resolve_font("Roboto", latin_options)

        query = mock_fetcher.fetch_text.call_args.kwargs["query"]
        assert query["family"] == "Roboto:ital,wdth,wght@0,75..100,400"
        assert "text" not in query

    def test_overrides_only_apply_to_their_family(self, storage, mock_fetcher):
        config = GoogleProviderConfig(variable_axis={"Roboto": {"wdth": ["100"]}})
        google = create_google_provider(config=config, storage=storage, fetcher=mock_fetcher)

        google.resolve_font("Inter", ResolveFontOptions(weights=["400"]))

        assert mock_fetcher.fetch_text.call_args.kwargs["query"]["family"] == "Inter:ital,wght@0,400"


class TestParallelFetch:
    """Test concurrent flavor fetching."""

    def test_priorities_follow_flavor_order(self, storage, mock_fetcher, latin_options):
        # Release the first flavor only after the second has been fetched
        second_done = threading.Event()

        def fetch_text(path, base_url=None, headers=None, query=None):
            if headers["user-agent"] == USER_AGENTS[0][1]:
                assert second_done.wait(timeout=5)
                return WOFF2_CSS
            second_done.set()
            return TTF_CSS

        mock_fetcher.fetch_text.side_effect = fetch_text
        config = GoogleProviderConfig(parallel_fetch=True)
        google = create_google_provider(config=config, storage=storage, fetcher=mock_fetcher)

        result = google.resolve_font("Roboto", latin_options)

        assert [face.priority for face in result.fonts] == [0, 0, 1]
        assert result.fonts[-1].src[0].url.endswith("regular.ttf")
