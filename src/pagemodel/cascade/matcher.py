"""Selector matching against content nodes and their ancestor chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from pagemodel.model.node import ContentNode
from pagemodel.model.style import STATE_NAMES
from pagemodel.stylesheet.model import (
    Combinator,
    CompoundSelector,
    Selector,
    Specificity,
)

__all__ = ["Ancestry", "matches", "matches_compound", "specificity"]

# Structural pseudo-classes evaluated against the parent's children.
_STRUCTURAL = frozenset({"first-child", "last-child", "only-child"})


@dataclass(frozen=True)
class Ancestry:
    """Immutable linked chain of ancestors, nearest parent first.

    Siblings share their parent's chain instead of copying it.
    """

    node: ContentNode
    parent: Ancestry | None = None

    def __iter__(self) -> Iterator[ContentNode]:
        link: Ancestry | None = self
        while link is not None:
            yield link.node
            link = link.parent

    def push(self, node: ContentNode) -> Ancestry:
        """Return the chain for the children of *node*."""
        return Ancestry(node=node, parent=self)

    @property
    def depth(self) -> int:
        return sum(1 for _ in self)


def specificity(selector: Selector) -> Specificity:
    """Return the ``(ids, classes, tags)`` weight of *selector*."""
    return selector.specificity


def _element_siblings(node: ContentNode, ancestors: Ancestry | None) -> tuple[list[ContentNode], int]:
    """Return the parent's children and the index of *node* among them."""
    if ancestors is None:
        return [node], 0
    siblings = ancestors.node.children
    for index, child in enumerate(siblings):
        if child is node:
            return siblings, index
    return [node], 0


def _matches_pseudo(
    pseudo: str, node: ContentNode, ancestors: Ancestry | None, subject: bool
) -> bool:
    if pseudo in STATE_NAMES:
        # States only route declarations; they cannot qualify an ancestor.
        return subject
    if pseudo in _STRUCTURAL:
        siblings, index = _element_siblings(node, ancestors)
        if pseudo == "first-child":
            return index == 0
        if pseudo == "last-child":
            return index == len(siblings) - 1
        return len(siblings) == 1
    return False


def matches_compound(
    compound: CompoundSelector,
    node: ContentNode,
    ancestors: Ancestry | None = None,
    subject: bool = True,
) -> bool:
    """Check whether a single compound selector matches *node*."""
    if compound.tag and compound.tag != "*" and compound.tag != node.tag:
        return False
    if compound.pseudo_element:
        return False
    if any(node.id != node_id for node_id in compound.ids):
        return False
    if compound.classes and not set(compound.classes).issubset(node.class_names):
        return False
    if not all(attr.matches(node.attributes) for attr in compound.attributes):
        return False
    return all(
        _matches_pseudo(pseudo, node, ancestors, subject)
        for pseudo in compound.pseudo_classes
    )


def _match_from(
    selector: Selector, index: int, node: ContentNode, ancestors: Ancestry | None
) -> bool:
    compound = selector.compounds[index]
    subject = index == len(selector.compounds) - 1
    if not matches_compound(compound, node, ancestors, subject=subject):
        return False
    if index == 0:
        return True

    combinator = selector.combinators[index - 1]
    if combinator is Combinator.CHILD:
        if ancestors is None:
            return False
        return _match_from(selector, index - 1, ancestors.node, ancestors.parent)

    if combinator is Combinator.DESCENDANT:
        link = ancestors
        while link is not None:
            if _match_from(selector, index - 1, link.node, link.parent):
                return True
            link = link.parent
        return False

    siblings, position = _element_siblings(node, ancestors)
    if combinator is Combinator.ADJACENT:
        if position == 0:
            return False
        return _match_from(selector, index - 1, siblings[position - 1], ancestors)
    # Combinator.SIBLING
    return any(
        _match_from(selector, index - 1, sibling, ancestors)
        for sibling in siblings[:position]
    )


def matches(selector: Selector, node: ContentNode, ancestors: Ancestry | None = None) -> bool:
    """Return True if *selector* matches *node* given its ancestor chain.

    Matching is purely structural: an interaction state such as ``:hover``
    on the subject compound matches, and the caller decides where the
    declarations go.
    """
    return _match_from(selector, len(selector.compounds) - 1, node, ancestors)
