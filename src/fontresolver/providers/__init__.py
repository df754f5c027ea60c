"""Font providers and the resolution helpers they share."""

from .axes import fold_variants, google_flavored_sort_key, resolve_axes, sort_axis_tags
from .google import USER_AGENTS, GoogleFontsProvider, create_google_provider
from .utils import PreparedWeight, prepare_weights

__all__ = [
    "USER_AGENTS",
    "GoogleFontsProvider",
    "PreparedWeight",
    "create_google_provider",
    "fold_variants",
    "google_flavored_sort_key",
    "prepare_weights",
    "resolve_axes",
    "sort_axis_tags",
]
