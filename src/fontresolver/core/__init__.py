"""Core components for font resolution."""

from .config import AppConfig, FetchConfig, GoogleProviderConfig, StorageConfig
from .exceptions import (
    ConfigurationError,
    CSSParseError,
    FetchError,
    FontResolverError,
    ProviderError,
    StorageError,
)
from .models import (
    FontFaceData,
    FontIndexMeta,
    ResolveFontOptions,
    ResolveFontResult,
    SubsetFragment,
    VariantQuery,
)

__all__ = [
    "AppConfig",
    "CSSParseError",
    "ConfigurationError",
    "FetchConfig",
    "FetchError",
    "FontFaceData",
    "FontIndexMeta",
    "FontResolverError",
    "GoogleProviderConfig",
    "ProviderError",
    "ResolveFontOptions",
    "ResolveFontResult",
    "StorageConfig",
    "StorageError",
    "SubsetFragment",
    "VariantQuery",
]
