"""
Font-face extraction from CSS.
"""

import logging

import tinycss2
from tinycss2.ast import (
    Declaration,
    FunctionBlock,
    IdentToken,
    LiteralToken,
    Node,
    NumberToken,
    StringToken,
    UnicodeRangeToken,
    URLToken,
)

from src.fontresolver.core.models import FontFaceData, LocalFontSource, RemoteFontSource

from .subsets import find_font_face_rules, parse_css

logger = logging.getLogger(__name__)

# Descriptors copied through as text
_TEXT_DESCRIPTORS = {
    "font-display": "display",
    "font-stretch": "stretch",
    "font-style": "style",
    "font-feature-settings": "feature_settings",
    "font-variation-settings": "variation_settings",
}


def _significant(tokens: list[Node]) -> list[Node]:
    return [t for t in tokens if t.type not in ("whitespace", "comment")]


def _raw_text(tokens: list[Node]) -> str:
    # tinycss2.serialize() separates some token pairs with /**/, e.g. U+0000-00FF
    return "".join(t.serialize() for t in tokens if t.type != "comment").strip()


def _split_commas(tokens: list[Node]) -> list[list[Node]]:
    groups: list[list[Node]] = [[]]
    for token in tokens:
        if isinstance(token, LiteralToken) and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    return [group for group in groups if _significant(group)]


def _function_text(function: FunctionBlock) -> str | None:
    """Argument of a CSS function as plain text."""
    arguments = _significant(function.arguments)
    if not arguments:
        return None
    if isinstance(arguments[0], StringToken):
        return arguments[0].value
    if all(isinstance(a, IdentToken) for a in arguments):
        # local(Foo Bar) without quotes is a run of identifiers
        return " ".join(a.value for a in arguments)
    return _raw_text(function.arguments)


def parse_source(tokens: list[Node]) -> RemoteFontSource | LocalFontSource | None:
    """Parse one comma-separated entry of a `src` descriptor."""
    url = None
    source_format = None
    tech = None

    for token in _significant(tokens):
        if isinstance(token, URLToken):
            url = token.value
        elif isinstance(token, FunctionBlock):
            name = token.lower_name
            if name == "url":
                url = _function_text(token)
            elif name == "local":
                local_name = _function_text(token)
                return LocalFontSource(name=local_name) if local_name else None
            elif name == "format":
                source_format = _function_text(token)
            elif name == "tech":
                tech = _function_text(token)

    if url is None:
        return None
    return RemoteFontSource(url=url, format=source_format, tech=tech)


def parse_weight(tokens: list[Node]) -> int | str | tuple[int, int] | None:
    """Parse `font-weight` as a number, a `(min, max)` range or a keyword."""
    values = _significant(tokens)
    numbers = [int(t.value) for t in values if isinstance(t, NumberToken)]

    if len(numbers) == 2 and len(values) == 2:
        return (numbers[0], numbers[1])
    if len(numbers) == 1 and len(values) == 1:
        return numbers[0]
    return _raw_text(tokens) or None


def _format_code_points(token: UnicodeRangeToken) -> str:
    if token.start == token.end:
        return f"U+{token.start:X}"
    return f"U+{token.start:X}-{token.end:X}"


def parse_unicode_range(tokens: list[Node]) -> list[str]:
    """Parse `unicode-range` into one string per comma-separated range.

    Ranges are rendered from their code points in uppercase hex without
    leading zeros, so `U+0100-02AF` becomes `U+100-2AF` and the wildcard
    `U+4??` becomes `U+400-4FF`. Entries that are not a single range token
    are kept as written.
    """
    ranges = []
    for group in _split_commas(tokens):
        values = _significant(group)
        if len(values) == 1 and isinstance(values[0], UnicodeRangeToken):
            ranges.append(_format_code_points(values[0]))
        else:
            ranges.append(_raw_text(group))
    return ranges


def parse_font_face(declarations: list[Declaration]) -> FontFaceData:
    """Build a face record from the declarations of one `@font-face` block."""
    face = FontFaceData()

    for declaration in declarations:
        name = declaration.lower_name
        if name == "src":
            sources = (parse_source(group) for group in _split_commas(declaration.value))
            face.src = [source for source in sources if source is not None]
        elif name == "font-weight":
            face.weight = parse_weight(declaration.value)
        elif name == "unicode-range":
            face.unicode_range = parse_unicode_range(declaration.value)
        elif name in _TEXT_DESCRIPTORS:
            setattr(face, _TEXT_DESCRIPTORS[name], _raw_text(declaration.value) or None)

    return face


def extract_font_face_data(css: str) -> list[FontFaceData]:
    """Extract a record for every `@font-face` rule in a stylesheet.

    Raises:
        CSSParseError: If the stylesheet is malformed
    """
    faces = []
    for rule in find_font_face_rules(parse_css(css)):
        if rule.content is None:
            continue
        declarations = [
            node
            for node in tinycss2.parse_blocks_contents(
                rule.content, skip_comments=True, skip_whitespace=True
            )
            if isinstance(node, Declaration)
        ]
        faces.append(parse_font_face(declarations))

    logger.debug(f"Extracted {len(faces)} font faces")
    return faces
