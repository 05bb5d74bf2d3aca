"""Node decorator: attach resolved styles, layout and states to content nodes."""

from __future__ import annotations

import itertools

from pagemodel.cascade.matcher import Ancestry
from pagemodel.cascade.resolver import resolve_node
from pagemodel.model.node import ContentNode, ElementType, PageNode
from pagemodel.model.style import LAYOUT_PROPERTIES, Breakpoint
from pagemodel.stylesheet.model import StyleSheet

__all__ = ["decorate", "element_type", "project_layout"]

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_TEXT_TAGS = frozenset({
    "p", "span", "blockquote", "label", "strong", "em", "b", "i", "small",
    "figcaption", "pre", "code", "cite", "q",
})
_IMAGE_TAGS = frozenset({"img", "picture", "svg"})
_INPUT_TAGS = frozenset({"input", "textarea", "select"})
_BUTTON_HINTS = ("btn", "button", "cta")
_VIDEO_HOSTS = ("youtube", "vimeo", "wistia")


def _looks_like_button(node: ContentNode) -> bool:
    if node.attributes.get("role") == "button":
        return True
    return any(hint in name.lower() for name in node.class_names for hint in _BUTTON_HINTS)


def element_type(node: ContentNode) -> ElementType:
    """Classify *node* by tag, with class hints for button-like links."""
    tag = node.tag
    if tag in _HEADING_TAGS:
        return ElementType.HEADING
    if tag in _TEXT_TAGS:
        return ElementType.TEXT
    if tag == "a":
        return ElementType.BUTTON if _looks_like_button(node) else ElementType.LINK
    if tag == "button":
        return ElementType.BUTTON
    if tag == "input" and node.attributes.get("type", "").lower() in ("submit", "button"):
        return ElementType.BUTTON
    if tag in _IMAGE_TAGS:
        return ElementType.IMAGE
    if tag == "video":
        return ElementType.VIDEO
    if tag == "iframe":
        src = node.attributes.get("src", "").lower()
        if any(host in src for host in _VIDEO_HOSTS):
            return ElementType.VIDEO
        return ElementType.CONTAINER
    if tag in ("ul", "ol"):
        return ElementType.LIST
    if tag == "li":
        return ElementType.LIST_ITEM
    if tag in _INPUT_TAGS:
        return ElementType.INPUT
    if tag == "form":
        return ElementType.FORM
    return ElementType.CONTAINER


def project_layout(styles: dict[str, str]) -> dict[str, str]:
    """Pick the box/flex/grid properties out of a resolved style map."""
    return {prop: styles[prop] for prop in LAYOUT_PROPERTIES if prop in styles}


def decorate(
    root: ContentNode,
    stylesheet: StyleSheet,
    document: ContentNode | None = None,
) -> list[PageNode]:
    """Decorate every descendant of *root*; returns the decorated top-level nodes.

    *document* stands in for the ``<html>`` element so selectors such as
    ``html body .hero`` can match. Node ids are assigned in document order.
    """
    top = Ancestry(document).push(root) if document is not None else Ancestry(root)
    counter = itertools.count(1)
    decorated: list[PageNode] = []

    stack: list[tuple[ContentNode, Ancestry, list[PageNode]]] = [
        (child, top, decorated) for child in reversed(root.children)
    ]
    while stack:
        node, ancestors, siblings = stack.pop()
        resolved = resolve_node(node, ancestors, stylesheet)
        page_node = PageNode(
            id=f"node-{next(counter)}",
            type=element_type(node),
            tag=node.tag,
            class_names=list(node.class_names),
            attributes=dict(node.attributes),
            text_content=node.text_content,
            styles=resolved.styles,
            layout=project_layout(resolved.styles[Breakpoint.DESKTOP.value]),
            states=resolved.states,
        )
        siblings.append(page_node)
        chain = ancestors.push(node)
        for child in reversed(node.children):
            stack.append((child, chain, page_node.children))
    return decorated
