"""Configuration management for the font resolution system."""

from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidAxisRangeError,
    InvalidEndpointUrlError,
    InvalidYamlError,
)

AxisValue = str | tuple[str, str]


class FetchConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FETCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """HTTP client configuration."""

    timeout_seconds: float = Field(30.0, gt=0.0, description="Request timeout in seconds")
    max_retries: int = Field(3, ge=1, description="Attempts per request before failing")
    backoff_seconds: float = Field(1.0, ge=0.0, description="Base for exponential backoff")
    user_agent: str = Field("fontresolver/1.0.0", description="Default user agent")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")


class StorageConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Resolution cache configuration."""

    enabled: bool = Field(True, description="Memoize resolved data")
    cache_dir: Path | None = Field(None, description="Directory for on-disk cache entries")
    max_entries: int = Field(256, ge=1, description="Maximum in-memory cache entries")


class GoogleProviderConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        coerce_numbers_to_str=True,
    )
    """Google Fonts provider configuration."""

    css_base_url: str = Field("https://fonts.googleapis.com", description="CSS2 API base URL")
    css_path: str = Field("/css2", description="CSS2 API path")
    metadata_url: str = Field(
        "https://fonts.google.com/metadata/fonts", description="Family index URL"
    )
    # family -> axis tag -> list of values or [min, max] ranges
    variable_axis: dict[str, dict[str, list[AxisValue]]] = Field(
        default_factory=dict, description="Per-family variable axis overrides"
    )
    glyphs: dict[str, list[str]] = Field(
        default_factory=dict, description="Per-family glyphs to restrict the font to"
    )
    parallel_fetch: bool = Field(False, description="Fetch format flavors concurrently")

    @field_validator("css_base_url", "metadata_url")
    @classmethod
    def validate_url(cls, v):
        """Validate endpoint URL format."""
        if not v.startswith(("https://", "http://")):
            raise InvalidEndpointUrlError()
        return v.rstrip("/")

    @field_validator("variable_axis", mode="before")
    @classmethod
    def validate_variable_axis(cls, v):
        """Reject ranges that are not [min, max] pairs."""
        if not isinstance(v, dict):
            return v
        for axes in v.values():
            for values in (axes or {}).values():
                for value in values:
                    if isinstance(value, list | tuple) and len(value) != 2:
                        raise InvalidAxisRangeError(value)
        return v


class AppConfig(BaseSettings):
    """Main application configuration that loads from multiple sources."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Application log level")

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    google: GoogleProviderConfig = Field(default_factory=GoogleProviderConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open() as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        if issubclass(config_class, BaseSettings):
            # YAML values win over .env for this instance
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e


def _add_yaml_methods():
    """Add YAML loading methods to configuration classes."""

    @classmethod
    def from_yaml(cls, config_path: str | Path):
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(cls, yaml_path: str | Path | None = None, env_file: str = ".env"):
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)

    for config_class in [FetchConfig, StorageConfig, GoogleProviderConfig, AppConfig]:
        config_class.from_yaml = from_yaml
        config_class.from_env_and_yaml = from_env_and_yaml


_add_yaml_methods()
