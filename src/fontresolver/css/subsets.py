"""Subset Partitioning
===================

Google Fonts returns every subset of a family in one stylesheet and marks each
`@font-face` block with a comment naming its subset::

    /* cyrillic-ext */
    @font-face { ... }
    /* latin */
    @font-face { ... }

Comments are not structural in CSS, so blocks are attributed to subsets by
source position: a block belongs to the last comment that ends on a line
strictly before the line the block starts on.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import NamedTuple

import tinycss2
from tinycss2.ast import AtRule, Comment, Node, ParseError

from src.fontresolver.core.exceptions import CSSParseError
from src.fontresolver.core.models import SubsetFragment

logger = logging.getLogger(__name__)


class CommentMarker(NamedTuple):
    """Trimmed comment text and the line the comment ends on."""

    value: str
    end_line: int


def parse_css(css_text: str) -> list[Node]:
    """Parse a stylesheet keeping comments, failing on any parse error."""
    nodes = tinycss2.parse_stylesheet(css_text, skip_comments=False, skip_whitespace=True)
    for node in nodes:
        if isinstance(node, ParseError):
            raise CSSParseError(node.kind, node.message, node.source_line)
    return nodes


def _iter_comments(nodes: Iterable[Node] | None) -> Iterator[Comment]:
    for node in nodes or ():
        if isinstance(node, Comment):
            yield node
            continue
        # Rules carry a prelude and a block, function/simple blocks their arguments/content
        for attr in ("prelude", "content", "arguments"):
            children = getattr(node, attr, None)
            if isinstance(children, list):
                yield from _iter_comments(children)


def collect_comments(nodes: list[Node]) -> list[CommentMarker]:
    """Every comment in the tree, ordered by the line it ends on."""
    markers = [
        CommentMarker(comment.value.strip(), comment.source_line + comment.value.count("\n"))
        for comment in _iter_comments(nodes)
    ]
    # Stable sort keeps document order among comments ending on the same line
    return sorted(markers, key=lambda marker: marker.end_line)


def find_font_face_rules(nodes: list[Node]) -> list[AtRule]:
    """Top-level `@font-face` rules in document order."""
    return [
        node
        for node in nodes
        if isinstance(node, AtRule) and node.lower_at_keyword == "font-face"
    ]


def split_css_into_subsets(css_text: str) -> list[SubsetFragment]:
    """Partition a stylesheet into per-subset `@font-face` fragments.

    Args:
        css_text: Stylesheet returned by the CSS API

    Returns:
        Fragments in document order. When the stylesheet has no comments at
        all, a single unlabelled fragment holding the whole input is returned.
        Rules with no preceding comment are dropped.

    Raises:
        CSSParseError: If the stylesheet is malformed
    """
    nodes = parse_css(css_text)
    comments = collect_comments(nodes)

    if not comments:
        return [SubsetFragment(subset=None, css=css_text)]

    fragments: list[SubsetFragment] = []
    label: str | None = None
    position = 0

    for rule in find_font_face_rules(nodes):
        while position < len(comments) and comments[position].end_line < rule.source_line:
            label = comments[position].value
            position += 1

        if label is None:
            logger.debug(f"Dropping @font-face at line {rule.source_line}: no subset comment")
            continue

        fragments.append(SubsetFragment(subset=label, css=rule.serialize()))

    logger.debug(f"Split stylesheet into {len(fragments)} subset fragments")
    return fragments
