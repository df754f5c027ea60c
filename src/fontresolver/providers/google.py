"""Google Fonts Provider
=====================

Resolves families against the Google Fonts CSS2 API. The API selects the file
format it serves from the request's user agent, so each supported format is
fetched with its own fixed user agent and the resulting faces are tagged with
that format's priority.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from src.fontresolver.core.config import GoogleProviderConfig
from src.fontresolver.core.exceptions import InvalidResponseError, ProviderNotInitializedError
from src.fontresolver.core.models import (
    FontFaceData,
    FontFaceMeta,
    FontIndexMeta,
    ResolveFontOptions,
    ResolveFontResult,
    VariantQuery,
)
from src.fontresolver.css import extract_font_face_data, split_css_into_subsets
from src.fontresolver.fetch import FontFetcher
from src.fontresolver.storage import FontStorage

from .axes import render_weight, resolve_axes
from .utils import prepare_weights

logger = logging.getLogger(__name__)

PROVIDER_NAME = "google"
META_KEY = f"{PROVIDER_NAME}:meta.json"

# (format, user agent) in priority order
USER_AGENTS: tuple[tuple[str, str], ...] = (
    (
        "woff2",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    ),
    (
        "ttf",
        "Mozilla/5.0 (Windows NT 6.1) AppleWebKit/534.54.16 "
        "(KHTML, like Gecko) Version/5.1.4 Safari/534.54.16",
    ),
)


class GoogleFontsProvider:
    """Font provider backed by the Google Fonts API."""

    name = PROVIDER_NAME

    def __init__(
        self,
        config: GoogleProviderConfig | None = None,
        storage: FontStorage | None = None,
        fetcher: FontFetcher | None = None,
    ):
        self.config = config or GoogleProviderConfig()
        self.storage = storage or FontStorage()
        self.fetcher = fetcher or FontFetcher()
        self._families: dict[str, FontIndexMeta] | None = None

    def initialize(self) -> None:
        """Load the family index, from storage when available."""
        entries = self.storage.get_item(META_KEY, self._fetch_font_index)
        self._families = {
            meta.family: meta for meta in (FontIndexMeta.model_validate(e) for e in entries)
        }
        logger.info(f"Loaded {len(self._families)} Google Fonts families")

    def _fetch_font_index(self) -> list[dict]:
        url = self.config.metadata_url
        logger.info(f"Fetching family index from {url}")
        payload = self.fetcher.fetch_json(url)
        if not isinstance(payload, dict) or "familyMetadataList" not in payload:
            raise InvalidResponseError(url, "missing 'familyMetadataList'")
        return payload["familyMetadataList"]

    @property
    def families(self) -> dict[str, FontIndexMeta]:
        if self._families is None:
            raise ProviderNotInitializedError(self.name)
        return self._families

    def list_fonts(self) -> list[str]:
        """Names of every family the provider knows."""
        return list(self.families)

    def close(self) -> None:
        """Release the fetcher's HTTP session."""
        self.fetcher.close()

    def resolve_font(self, family: str, options: ResolveFontOptions) -> ResolveFontResult | None:
        """Resolve a family into prioritized font faces.

        Returns:
            None when the family is unknown, otherwise the resolved faces
            (possibly empty when the options select no variants)
        """
        if family not in self.families:
            logger.debug(f"Unknown Google Fonts family: {family}")
            return None

        key = f"{PROVIDER_NAME}:{family}-{options.options_hash()}-data.json"
        fonts = self.storage.get_item(
            key,
            lambda: [
                face.model_dump(mode="json", exclude_none=True)
                for face in self.get_font_details(family, options)
            ],
        )
        return ResolveFontResult(fonts=[FontFaceData.model_validate(f) for f in fonts])

    def build_variant_query(self, family: str, options: ResolveFontOptions) -> VariantQuery:
        """Reconcile requested weights with the family and resolve the axes."""
        font = self.families[family]
        weights = prepare_weights(
            input_weights=options.weights,
            has_variable_weights=font.has_variable_weights,
            weights=font.declared_weights,
        )
        return resolve_axes(
            weights=[render_weight(weight) for weight in weights],
            styles=options.styles,
            axis_overrides=self.config.variable_axis.get(family),
        )

    def get_font_details(self, family: str, options: ResolveFontOptions) -> list[FontFaceData]:
        """Fetch and extract the faces of a family, one pass per format."""
        query = self.build_variant_query(family, options)
        if not query.variants:
            logger.info(f"No variants selected for {family}, skipping fetch")
            return []

        params = {"family": query.to_family_param(family)}
        glyphs = "".join(self.config.glyphs.get(family, []))
        if glyphs:
            params["text"] = glyphs

        user_agents = [user_agent for _, user_agent in USER_AGENTS]
        if self.config.parallel_fetch:
            with ThreadPoolExecutor(max_workers=len(user_agents)) as executor:
                # map() yields in submission order, keeping priorities stable
                stylesheets = list(
                    executor.map(lambda ua: self._fetch_css(params, ua), user_agents)
                )
        else:
            stylesheets = [self._fetch_css(params, ua) for ua in user_agents]

        faces: list[FontFaceData] = []
        for priority, css in enumerate(stylesheets):
            faces.extend(self._collect_faces(css, options.subsets, priority))

        logger.info(f"Resolved {len(faces)} font faces for {family}")
        return faces

    def _fetch_css(self, params: dict[str, str], user_agent: str) -> str:
        return self.fetcher.fetch_text(
            self.config.css_path,
            base_url=self.config.css_base_url,
            headers={"user-agent": user_agent},
            query=params,
        )

    def _collect_faces(self, css: str, subsets: list[str], priority: int) -> list[FontFaceData]:
        faces = []
        for fragment in split_css_into_subsets(css):
            if fragment.subset is not None and fragment.subset not in subsets:
                continue
            for face in extract_font_face_data(fragment.css):
                if face.meta is None:
                    face.meta = FontFaceMeta()
                face.meta.priority = priority
                faces.append(face)
        return faces


def create_google_provider(
    config: GoogleProviderConfig | None = None,
    storage: FontStorage | None = None,
    fetcher: FontFetcher | None = None,
) -> GoogleFontsProvider:
    """Create a Google Fonts provider with its family index loaded."""
    provider = GoogleFontsProvider(config=config, storage=storage, fetcher=fetcher)
    provider.initialize()
    return provider
