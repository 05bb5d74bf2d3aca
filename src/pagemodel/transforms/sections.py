"""Semantic section classification and the legacy sectioned tree (v3).

The v3 page builder only understands a fixed section > row > column >
element nesting, so the decorated DOM is flattened into that grammar.
"""

from __future__ import annotations

import re

from pagemodel.model.node import ContentNode, ElementType, PageNode
from pagemodel.model.page import Column, Element, Row, Section, SectionType
from pagemodel.transforms.decorator import element_type

__all__ = ["build_sections", "classify_section", "section_name", "section_roots"]

# Checked in order; the first type with a matching keyword wins.
_SECTION_KEYWORDS: tuple[tuple[SectionType, frozenset[str]], ...] = (
    (SectionType.HERO, frozenset({"hero", "banner", "jumbotron", "masthead"})),
    (SectionType.PRICING, frozenset({"pricing", "plans", "price", "prices"})),
    (SectionType.FEATURES, frozenset({"features", "feature", "benefits", "services"})),
    (SectionType.TESTIMONIALS, frozenset({"testimonials", "testimonial", "reviews"})),
    (SectionType.CTA, frozenset({"cta", "signup", "newsletter"})),
    (SectionType.FAQ, frozenset({"faq", "faqs"})),
    (SectionType.CONTACT, frozenset({"contact"})),
    (SectionType.GALLERY, frozenset({"gallery", "portfolio"})),
    (SectionType.FOOTER, frozenset({"footer"})),
    (SectionType.NAV, frozenset({"nav", "navbar", "navigation", "menu"})),
    (SectionType.HEADER, frozenset({"header", "topbar"})),
)

_TAG_SECTIONS = {
    "footer": SectionType.FOOTER,
    "nav": SectionType.NAV,
    "header": SectionType.HEADER,
}

_WRAPPER_TAGS = frozenset({"main", "div", "article"})

# Element types emitted whole; their subtree is folded into one element
# unless it holds a standalone element.
_LEAF_TYPES = frozenset({
    ElementType.HEADING,
    ElementType.TEXT,
    ElementType.LINK,
    ElementType.BUTTON,
    ElementType.IMAGE,
    ElementType.VIDEO,
    ElementType.INPUT,
})

# Always emitted as elements of their own, wherever they are nested.
_STANDALONE_TYPES = frozenset({
    ElementType.LINK,
    ElementType.BUTTON,
    ElementType.IMAGE,
    ElementType.VIDEO,
    ElementType.INPUT,
})

# Media are folded even when they wrap other elements (<picture><img>).
_ATOMIC_TYPES = frozenset({ElementType.IMAGE, ElementType.VIDEO})

_SEGMENT_RE = re.compile(r"[-_]+")


def _keyword_match(names: list[str]) -> SectionType | None:
    segments = {seg for name in names for seg in _SEGMENT_RE.split(name.lower()) if seg}
    for section_type, keywords in _SECTION_KEYWORDS:
        if segments & keywords:
            return section_type
    return None


def _named_type(node: PageNode | ContentNode) -> SectionType | None:
    """Type from class names, then ``id``, then tag; None if nothing names it."""
    match = _keyword_match(list(node.class_names))
    if match is not None:
        return match
    node_id = node.attributes.get("id", "")
    if node_id:
        match = _keyword_match([node_id])
        if match is not None:
            return match
    return _TAG_SECTIONS.get(node.tag)


def _node_type(node: PageNode | ContentNode) -> ElementType:
    if isinstance(node, PageNode):
        return node.type
    return element_type(node)


def _content_type(node: PageNode | ContentNode, index: int | None) -> SectionType | None:
    types = {_node_type(n) for n in node.iter_preorder()}
    has_button = ElementType.BUTTON in types
    has_image = ElementType.IMAGE in types
    if index == 0 and ElementType.HEADING in types and (has_button or has_image):
        return SectionType.HERO
    if has_button and not has_image:
        return SectionType.CTA
    return None


def classify_section(node: PageNode | ContentNode, index: int | None = None) -> SectionType:
    """Assign a semantic type to a top-level node.

    Class-name keywords win, then ``id`` keywords, then the tag name. A node
    none of those name is typed by its content: the first section (*index*
    0) with a heading and a button or image is a ``hero``, and any section
    with a button but no image is a ``cta``. Anything else is ``generic``.
    """
    return _named_type(node) or _content_type(node, index) or SectionType.GENERIC


def section_name(node: PageNode, index: int) -> str:
    """Display name: the first heading's text, else ``Section N``."""
    for n in node.iter_preorder():
        if n.type is ElementType.HEADING:
            text = _subtree_text(n)
            if text:
                return text
    return f"Section {index + 1}"


def _is_wrapper(node: PageNode) -> bool:
    return (
        node.tag in _WRAPPER_TAGS
        and bool(node.children)
        and not node.text_content
        and _named_type(node) is None
    )


def section_roots(nodes: list[PageNode]) -> list[PageNode]:
    """Return the nodes that become sections.

    ``<main>`` is always unwrapped; a lone generic wrapper ``<div>`` around
    the whole page is unwrapped as well.
    """
    roots = list(nodes)
    while True:
        expanded: list[PageNode] = []
        changed = False
        for node in roots:
            if node.tag == "main" and _is_wrapper(node):
                expanded.extend(node.children)
                changed = True
            else:
                expanded.append(node)
        if len(expanded) == 1 and _is_wrapper(expanded[0]):
            expanded = list(expanded[0].children)
            changed = True
        roots = expanded
        if not changed:
            return roots


def _subtree_text(node: PageNode) -> str:
    return " ".join(n.text_content for n in node.iter_preorder() if n.text_content)


def _copy_maps(maps: dict[str, dict[str, str]]) -> dict[str, dict[str, str]]:
    return {key: dict(m) for key, m in maps.items()}


def _element_props(node: PageNode) -> dict[str, str]:
    attrs = node.attributes
    props: dict[str, str] = {}
    if node.type is ElementType.HEADING:
        props["level"] = node.tag
    if node.type is ElementType.VIDEO and "src" not in attrs:
        for child in node.children:
            if child.tag == "source" and child.attributes.get("src"):
                props["src"] = child.attributes["src"]
                break
    for name in ("href", "src", "alt", "type", "name", "placeholder", "target"):
        if attrs.get(name):
            props[name] = attrs[name]
    return props


def _to_element(node: PageNode, text: str | None) -> Element:
    content = {"text": text} if text else {}
    return Element(
        id=node.id,
        type=node.type,
        tag=node.tag,
        props=_element_props(node),
        content=content,
        styles=_copy_maps(node.styles),
        states=_copy_maps(node.states),
    )


def _holds_standalone(node: PageNode) -> bool:
    return any(
        n.type in _STANDALONE_TYPES for n in node.iter_preorder() if n is not node
    )


def _folds(node: PageNode) -> bool:
    if node.type not in _LEAF_TYPES:
        return False
    return node.type in _ATOMIC_TYPES or not _holds_standalone(node)


def _flatten(root: PageNode) -> list[Element]:
    """Collect the content elements of a section subtree in document order.

    Containers with a layout (flex, grid, ...) are kept as elements so their
    arrangement survives; other containers only contribute their own text.
    """
    elements: list[Element] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if _folds(node):
            elements.append(_to_element(node, _subtree_text(node)))
            continue
        nested = node is not root
        if node.text_content or (nested and (node.type in _STANDALONE_TYPES or node.layout)):
            elements.append(_to_element(node, node.text_content))
        stack.extend(reversed(node.children))
    return elements


def build_sections(nodes: list[PageNode]) -> list[Section]:
    """Partition decorated top-level nodes into typed sections.

    Each section carries one row with one column; an empty page yields a
    single empty generic section.
    """
    sections: list[Section] = []
    for index, root in enumerate(section_roots(nodes)):
        sections.append(
            Section(
                id=root.id,
                type=classify_section(root, index),
                name=section_name(root, index),
                styles=_copy_maps(root.styles),
                rows=[Row(columns=[Column(elements=_flatten(root))])],
            )
        )
    if not sections:
        sections.append(
            Section(
                id="section-1",
                type=SectionType.GENERIC,
                name="Section 1",
                styles={"desktop": {}},
                rows=[Row(columns=[Column()])],
            )
        )
    return sections
