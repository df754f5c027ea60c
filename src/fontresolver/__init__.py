"""Web Font Resolution
===================

Resolves web font families and style/weight/subset constraints into
prioritized `@font-face` descriptors from the Google Fonts API.
"""

__version__ = "1.0.0"

from .core.config import AppConfig, GoogleProviderConfig
from .core.exceptions import FontResolverError
from .core.models import FontFaceData, ResolveFontOptions, ResolveFontResult
from .providers import GoogleFontsProvider, create_google_provider
from .storage import FontStorage

__all__ = [
    "AppConfig",
    "FontFaceData",
    "FontResolverError",
    "FontStorage",
    "GoogleFontsProvider",
    "GoogleProviderConfig",
    "ResolveFontOptions",
    "ResolveFontResult",
    "create_google_provider",
]
