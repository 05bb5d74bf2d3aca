"""DOM tree builder: turn possibly malformed HTML into a ContentNode tree."""

from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pagemodel.config import ConverterConfig
from pagemodel.errors import DepthExceeded
from pagemodel.model.node import ContentNode

__all__ = ["ParsedDocument", "build_tree"]

logger = logging.getLogger(__name__)

# Subtrees that never reach the content tree.
_DROPPED_TAGS = frozenset({
    "script",
    "style",
    "noscript",
    "template",
    "meta",
    "link",
    "title",
    "base",
})

# Stray document-level tags whose children are hoisted into the parent.
_TRANSPARENT_TAGS = frozenset({"html", "head", "body"})

_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedDocument:
    """Result of parsing one HTML document."""

    root: ContentNode
    style_texts: list[str] = field(default_factory=list)
    title: str = ""
    description: str = ""
    lang: str = ""
    keywords: list[str] = field(default_factory=list)
    html_attributes: dict[str, str] = field(default_factory=dict)


def _attributes(tag: Tag) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        attrs[str(name).lower()] = str(value)
    return attrs


def _class_names(tag: Tag) -> list[str]:
    value = tag.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return [c for c in value if c]


def _own_text(tag: Tag) -> str | None:
    """Whitespace-collapsed text of the strings directly inside *tag*."""
    pieces = [
        str(child)
        for child in tag.children
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
    ]
    text = _WS_RE.sub(" ", "".join(pieces)).strip()
    return text or None


def _make_node(tag: Tag) -> ContentNode:
    return ContentNode(
        tag=tag.name.lower(),
        class_names=_class_names(tag),
        attributes=_attributes(tag),
        text_content=_own_text(tag),
    )


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    meta = soup.find("meta", attrs={"name": name}) or soup.find(
        "meta", attrs={"property": f"og:{name}"}
    )
    if isinstance(meta, Tag):
        return str(meta.get("content") or "").strip()
    return ""


def _keywords(soup: BeautifulSoup) -> list[str]:
    """Comma-separated ``<meta name="keywords">`` entries, blanks dropped."""
    return [k.strip() for k in _meta_content(soup, "keywords").split(",") if k.strip()]


def build_tree(html: str, config: ConverterConfig | None = None) -> ParsedDocument:
    """Parse *html* into a content tree rooted at ``<body>``.

    Unclosed tags and stray ``<body>`` tags are repaired by the lxml tree
    builder; ``<script>``/``<style>`` subtrees and comments are dropped.
    Raises :class:`DepthExceeded` when nesting exceeds ``config.max_depth``.
    """
    config = config or ConverterConfig()
    soup = BeautifulSoup(html, "lxml")

    style_texts = [style.get_text() for style in soup.find_all("style")]
    title = soup.title.get_text(strip=True) if soup.title else ""
    html_tag = soup.find("html")
    html_attributes = _attributes(html_tag) if isinstance(html_tag, Tag) else {}

    body = soup.body
    if body is None:
        root = ContentNode(tag="body")
        source: Tag = soup
    else:
        root = _make_node(body)
        source = body

    # Explicit work stack of (bs4 tag, content node, depth).
    stack: list[tuple[Tag, ContentNode, int]] = [(source, root, 1)]
    max_seen = 1
    while stack:
        tag, node, depth = stack.pop()
        pending = deque(tag.children)
        while pending:
            child = pending.popleft()
            if not isinstance(child, Tag):
                continue
            name = child.name.lower()
            if name in _DROPPED_TAGS:
                continue
            if name in _TRANSPARENT_TAGS:
                pending.extendleft(reversed(list(child.children)))
                continue
            child_depth = depth + 1
            if child_depth > config.max_depth:
                raise DepthExceeded(child_depth, config.max_depth)
            max_seen = max(max_seen, child_depth)
            child_node = _make_node(child)
            node.children.append(child_node)
            stack.append((child, child_node, child_depth))

    logger.debug(
        "Built content tree: %d style block(s), depth %d", len(style_texts), max_seen
    )
    return ParsedDocument(
        root=root,
        style_texts=style_texts,
        title=title,
        description=_meta_content(soup, "description"),
        lang=html_attributes.get("lang", ""),
        keywords=_keywords(soup),
        html_attributes=html_attributes,
    )
