"""CSS helpers: subset partitioning and font-face extraction."""

from .parse import extract_font_face_data
from .subsets import split_css_into_subsets

__all__ = [
    "extract_font_face_data",
    "split_css_into_subsets",
]
