"""Content tree model: parsed ContentNode and decorated PageNode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Iterator


class ElementType(StrEnum):
    """Coarse role of a node, derived from its tag and classes."""

    HEADING = "heading"
    TEXT = "text"
    LINK = "link"
    BUTTON = "button"
    IMAGE = "image"
    VIDEO = "video"
    LIST = "list"
    LIST_ITEM = "listItem"
    INPUT = "input"
    FORM = "form"
    CONTAINER = "container"


@dataclass(frozen=True)
class ContentNode:
    """An element of the parsed HTML body.

    A node is exclusively owned by its parent; the builder only appends to
    ``children`` while constructing the tree.
    """

    tag: str
    class_names: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    text_content: str | None = None
    children: list[ContentNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tag:
            raise ValueError("ContentNode tag must be a non-empty string")

    @property
    def id(self) -> str | None:
        """Return the element's ``id`` attribute, if any."""
        return self.attributes.get("id") or None

    def iter_preorder(self) -> Iterator[ContentNode]:
        """Yield this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class PageNode:
    """A content node decorated with resolved styles, layout and states."""

    id: str
    type: ElementType
    tag: str
    class_names: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)
    text_content: str | None = None
    styles: dict[str, dict[str, str]] = field(default_factory=dict)
    layout: dict[str, str] = field(default_factory=dict)
    states: dict[str, dict[str, str]] = field(default_factory=dict)
    children: list[PageNode] = field(default_factory=list)

    def iter_preorder(self) -> Iterator[PageNode]:
        """Yield this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict[str, Any]:
        """Serialise the subtree to the v4 JSON shape without recursion."""
        root = self._own_dict()
        stack: list[tuple[PageNode, dict[str, Any]]] = [(self, root)]
        while stack:
            node, data = stack.pop()
            for child in node.children:
                child_data = child._own_dict()
                data["children"].append(child_data)
                stack.append((child, child_data))
        return root

    def _own_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "tag": self.tag,
            "classNames": list(self.class_names),
            "attributes": dict(self.attributes),
            "styles": {bucket: dict(m) for bucket, m in self.styles.items()},
            "layout": dict(self.layout),
            "states": {state: dict(m) for state, m in self.states.items()},
            "children": [],
        }
        if self.text_content is not None:
            data["textContent"] = self.text_content
        return data
