"""Design token extraction: deduplicate recurring colors, type and spacing."""

from __future__ import annotations

import re
from typing import Iterator

from pagemodel.model.node import PageNode
from pagemodel.model.page import DEFAULT_FONT_WEIGHT, DesignTokens, TypographyToken

__all__ = ["extract_tokens", "find_colors"]

_COLOR_PROPERTIES = frozenset({
    "color",
    "background",
    "backgroundColor",
    "borderColor",
    "border",
})

_SPACING_PROPERTIES = frozenset({
    "padding",
    "paddingTop",
    "paddingRight",
    "paddingBottom",
    "paddingLeft",
    "margin",
    "marginTop",
    "marginRight",
    "marginBottom",
    "marginLeft",
    "gap",
    "rowGap",
    "columnGap",
})

_CSS_WIDE_KEYWORDS = frozenset({"auto", "inherit", "initial", "unset", "revert"})

_NAMED_COLORS = (
    "black", "white", "red", "green", "blue", "yellow", "orange", "purple",
    "pink", "gray", "grey", "navy", "teal", "silver", "maroon", "olive",
    "lime", "aqua", "fuchsia", "gold", "indigo", "violet", "brown",
)

_COLOR_RE = re.compile(
    r"#[0-9a-fA-F]{8}\b|#[0-9a-fA-F]{6}\b|#[0-9a-fA-F]{4}\b|#[0-9a-fA-F]{3}\b"
    r"|(?:rgba?|hsla?)\([^)]*\)"
    r"|(?<![\w-])(?:" + "|".join(_NAMED_COLORS) + r")(?![\w-])",
    re.IGNORECASE,
)

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})


def find_colors(value: str) -> list[str]:
    """Return the color literals in a declaration value, in order."""
    return [m.group(0) for m in _COLOR_RE.finditer(value)]


def _style_maps(node: PageNode) -> Iterator[dict[str, str]]:
    yield from node.styles.values()
    yield from node.states.values()


def extract_tokens(nodes: list[PageNode]) -> DesignTokens:
    """Aggregate every resolved style map of *nodes* into named tokens.

    Tokens are named by order of first appearance (``color-1``,
    ``heading-1``, ``text-1``, ``spacing-1``); identical values share one
    token.
    """
    colors: dict[str, str] = {}
    seen_colors: set[str] = set()
    typography: dict[str, TypographyToken] = {}
    seen_type: set[tuple[str, str, str | None]] = set()
    heading_count = text_count = 0
    spacing: dict[str, str] = {}
    seen_spacing: set[str] = set()

    for root in nodes:
        for node in root.iter_preorder():
            for styles in _style_maps(node):
                for prop, value in styles.items():
                    if prop in _COLOR_PROPERTIES:
                        for color in find_colors(value):
                            if color not in seen_colors:
                                seen_colors.add(color)
                                colors[f"color-{len(colors) + 1}"] = color
                    elif prop in _SPACING_PROPERTIES:
                        if value.lower() not in _CSS_WIDE_KEYWORDS and value not in seen_spacing:
                            seen_spacing.add(value)
                            spacing[f"spacing-{len(spacing) + 1}"] = value

                font_size = styles.get("fontSize")
                if font_size is None:
                    continue
                key = (
                    font_size,
                    styles.get("fontWeight", DEFAULT_FONT_WEIGHT),
                    styles.get("lineHeight"),
                )
                if key in seen_type:
                    continue
                seen_type.add(key)
                if node.tag in _HEADING_TAGS:
                    heading_count += 1
                    name = f"heading-{heading_count}"
                else:
                    text_count += 1
                    name = f"text-{text_count}"
                typography[name] = TypographyToken(
                    font_size=font_size, font_weight=key[1], line_height=key[2]
                )

    return DesignTokens(colors=colors, typography=typography, spacing=spacing)
