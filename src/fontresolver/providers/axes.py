"""Variant Axis Resolution
=======================

Builds the axis header and the variant tuples of a CSS2 `family` query, e.g.
`Roboto:ital,wght@0,400;0,700;1,400;1,700`.

The API reads each tuple positionally against the header, so the header order
and the token order inside every tuple must agree.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from src.fontresolver.core.exceptions import InvalidAxisRangeError
from src.fontresolver.core.models import STYLE_MAP, VariantQuery

from .utils import PreparedWeight

logger = logging.getLogger(__name__)

WEIGHT_AXIS = "wght"
ITALIC_AXIS = "ital"


def google_flavored_sort_key(tag: str) -> tuple[int, str]:
    """Sort key placing lowercase-led tags before uppercase-led ones."""
    first = tag[:1]
    return (0 if first == first.lower() else 1, tag)


def sort_axis_tags(tags: Iterable[str]) -> list[str]:
    """Unique axis tags in the order the API expects them."""
    return sorted(dict.fromkeys(tags), key=google_flavored_sort_key)


def resolve_style_codes(styles: Iterable[str]) -> list[str]:
    """Map style keywords to sorted, unique `ital` values."""
    return sorted({STYLE_MAP[style] for style in styles})


def render_weight(weight: PreparedWeight) -> str:
    """Render a prepared weight, turning a "100 900" range into "100..900"."""
    if weight.variable:
        return weight.weight.replace(" ", "..", 1)
    return weight.weight


def render_axis_value(value: str | Sequence[str]) -> str:
    """Render an override value; `[lo, hi]` pairs become "lo..hi"."""
    if isinstance(value, str):
        return value
    if len(value) != 2:
        raise InvalidAxisRangeError(value)
    return f"{value[0]}..{value[1]}"


def fold_variants(axis_values: Sequence[Sequence[str]]) -> list[str]:
    """Cartesian product of per-axis values as comma-joined tuples.

    The first axis seeds the running list as given; each later axis extends
    every tuple and the result is re-sorted lexicographically.
    """
    if not axis_values:
        return []

    variants = list(axis_values[0])
    for values in axis_values[1:]:
        variants = sorted(f"{variant},{value}" for variant in variants for value in values)
    return variants


def resolve_axes(
    weights: Sequence[str],
    styles: Iterable[str],
    axis_overrides: Mapping[str, Sequence[str | Sequence[str]]] | None = None,
) -> VariantQuery:
    """Resolve the axis header and variant tuples for a family request.

    Args:
        weights: Rendered weight tokens ("400", "100..900")
        styles: Style keywords ("normal", "italic", "oblique")
        axis_overrides: Extra axes mapped to literal values or [lo, hi] ranges

    Returns:
        The ordered axis tags and variant tuples; both empty when there are
        no weights or no styles.
    """
    style_codes = resolve_style_codes(styles)
    if not weights or not style_codes:
        return VariantQuery(axes=[], variants=[])

    overrides = axis_overrides or {}
    axes = sort_axis_tags([WEIGHT_AXIS, ITALIC_AXIS, *overrides])

    axis_values = []
    for axis in axes:
        if axis == WEIGHT_AXIS:
            axis_values.append(list(weights))
        elif axis == ITALIC_AXIS:
            axis_values.append(style_codes)
        else:
            axis_values.append([render_axis_value(value) for value in overrides[axis]])

    variants = fold_variants(axis_values)
    logger.debug(f"Resolved axes {axes} into {len(variants)} variants")
    return VariantQuery(axes=axes, variants=variants)
