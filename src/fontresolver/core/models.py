"""Pydantic models for type-safe data structures."""

import hashlib
import json
from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

StyleSelector = Literal["normal", "italic", "oblique"]

# Style keyword -> value of the `ital` axis
STYLE_MAP: dict[str, str] = {
    "italic": "1",
    "oblique": "1",
    "normal": "0",
}


class SubsetFragment(NamedTuple):
    """A regenerated CSS fragment and the subset it was labelled with."""

    subset: str | None
    css: str


class VariantQuery(NamedTuple):
    """Axis header and variant tuples for a CSS2 `family` query."""

    axes: list[str]
    variants: list[str]

    def to_family_param(self, family: str) -> str:
        return f"{family}:{','.join(self.axes)}@{';'.join(self.variants)}"


class RemoteFontSource(BaseModel):
    """A `url()` entry of an `@font-face` src descriptor."""

    url: str
    format: str | None = None
    tech: str | None = None


class LocalFontSource(BaseModel):
    """A `local()` entry of an `@font-face` src descriptor."""

    name: str


class FontFaceMeta(BaseModel):
    """Resolver bookkeeping attached to a face."""

    priority: int | None = Field(None, ge=0, description="Flavor fetch order, lower is preferred")


class FontFaceData(BaseModel):
    """Structured descriptors of one `@font-face` rule."""

    src: list[RemoteFontSource | LocalFontSource] = Field(default_factory=list)
    display: str | None = None
    weight: int | str | tuple[int, int] | None = None
    stretch: str | None = None
    style: str | None = None
    unicode_range: list[str] | None = None
    feature_settings: str | None = None
    variation_settings: str | None = None
    meta: FontFaceMeta | None = None

    @property
    def priority(self) -> int | None:
        return self.meta.priority if self.meta else None


class ResolveFontOptions(BaseModel):
    """Caller constraints for a single resolution."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    weights: list[str] = Field(default_factory=lambda: ["400"])
    styles: list[StyleSelector] = Field(default_factory=lambda: ["normal"])
    subsets: list[str] = Field(default_factory=lambda: ["latin"])
    fallbacks: list[str] | None = None

    def normalized(self) -> dict:
        """Order-insensitive representation of the options."""
        return {
            "weights": sorted(set(self.weights)),
            "styles": sorted(set(self.styles)),
            "subsets": sorted(set(self.subsets)),
            "fallbacks": self.fallbacks,
        }

    def options_hash(self) -> str:
        """Stable hash used to key cached resolutions."""
        payload = json.dumps(self.normalized(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode()).hexdigest()[:16]


class ResolveFontResult(BaseModel):
    """Result of resolving a known family."""

    fonts: list[FontFaceData] = Field(default_factory=list)


class FontAxis(BaseModel):
    """A variation axis declared by a family."""

    model_config = ConfigDict(populate_by_name=True)

    tag: str
    min: float
    max: float
    default_value: float = Field(alias="defaultValue")


class FontShapeMetrics(BaseModel):
    """Per-weight shape metrics from the family index."""

    model_config = ConfigDict(populate_by_name=True)

    thickness: float | None = None
    slant: float | None = None
    width: float | None = None
    line_height: float | None = Field(None, alias="lineHeight")


class FontIndexMeta(BaseModel):
    """One family entry of the Google Fonts metadata index."""

    model_config = ConfigDict(extra="ignore")

    family: str
    subsets: list[str] = Field(default_factory=list)
    fonts: dict[str, FontShapeMetrics] = Field(default_factory=dict)
    axes: list[FontAxis] = Field(default_factory=list)

    @property
    def has_variable_weights(self) -> bool:
        return any(axis.tag == "wght" for axis in self.axes)

    @property
    def declared_weights(self) -> list[str]:
        return list(self.fonts)
