"""Custom exceptions for the font resolution system."""

from typing import Any


class FontResolverError(Exception):
    """Base exception for all font resolver errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(FontResolverError):
    """Exception raised for configuration errors."""


class ProviderError(FontResolverError):
    """Exception raised by a font provider."""


class FetchError(ProviderError):
    """Exception raised when an upstream request fails."""

    def __init__(self, url: str, status_code: int | None = None, details: Any | None = None):
        message = f"Failed to fetch {url}"
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class InvalidResponseError(ProviderError):
    """Exception raised when an upstream response has an unexpected shape."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Invalid response from {url}: {reason}")
        self.url = url


class CSSParseError(ProviderError):
    """Exception raised when upstream CSS cannot be parsed."""

    def __init__(self, kind: str, message: str, line: int | None = None):
        location = f" at line {line}" if line is not None else ""
        super().__init__(f"CSS parse error{location}: {message}", details={"kind": kind})
        self.kind = kind
        self.line = line


class ProviderNotInitializedError(ProviderError):
    """Exception raised when a provider is used before its index is loaded."""

    def __init__(self, provider: str):
        super().__init__(f"Provider '{provider}' has not been initialized")


class StorageError(FontResolverError):
    """Exception raised for storage operation errors."""


class StorageWriteError(StorageError):
    """Exception raised when a cache entry cannot be persisted."""

    def __init__(self, key: str, error: str):
        super().__init__(f"Failed to write cache entry '{key}': {error}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class InvalidEndpointUrlError(ValueError):
    """Exception raised for invalid endpoint URLs."""

    def __init__(self):
        super().__init__("URL must start with https:// or http://")


class InvalidAxisRangeError(ValueError):
    """Exception raised for malformed variable axis ranges."""

    def __init__(self, value: Any):
        super().__init__(f"Axis range must be a [min, max] pair, got: {value!r}")
