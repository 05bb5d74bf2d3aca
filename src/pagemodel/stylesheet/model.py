"""Stylesheet model: selectors, rules, media blocks and the parsed sheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Iterator

from pagemodel.model.style import STATE_NAMES, Breakpoint, InteractionState

Specificity = tuple[int, int, int]


class Combinator(StrEnum):
    """Relationship between two adjacent compound selectors."""

    DESCENDANT = "descendant"
    CHILD = "child"
    ADJACENT = "adjacent"  # +
    SIBLING = "sibling"  # ~


@dataclass(frozen=True)
class AttributeSelector:
    """``[name]`` or ``[name<op>value]``."""

    name: str
    operator: str | None = None
    value: str | None = None
    ignore_case: bool = False

    def matches(self, attributes: dict[str, str]) -> bool:
        if self.name not in attributes:
            return False
        if self.operator is None or self.value is None:
            return True
        actual = attributes[self.name]
        expected = self.value
        if self.ignore_case:
            actual, expected = actual.lower(), expected.lower()
        if self.operator == "=":
            return actual == expected
        if self.operator == "~=":
            return expected in actual.split()
        if self.operator == "|=":
            return actual == expected or actual.startswith(expected + "-")
        if self.operator == "^=":
            return bool(expected) and actual.startswith(expected)
        if self.operator == "$=":
            return bool(expected) and actual.endswith(expected)
        if self.operator == "*=":
            return bool(expected) and expected in actual
        return False


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors with no combinator, e.g. ``a.btn:hover``.

    ``tag`` is ``None`` for an implicit or explicit universal selector.
    Pseudo-classes keep their argument, e.g. ``"nth-child(2)"``.
    """

    tag: str | None = None
    ids: tuple[str, ...] = ()
    classes: tuple[str, ...] = ()
    attributes: tuple[AttributeSelector, ...] = ()
    pseudo_classes: tuple[str, ...] = ()
    pseudo_element: str | None = None

    @property
    def specificity(self) -> Specificity:
        return (
            len(self.ids),
            len(self.classes) + len(self.attributes) + len(self.pseudo_classes),
            (1 if self.tag else 0) + (1 if self.pseudo_element else 0),
        )

    @property
    def state(self) -> InteractionState | None:
        """The first interaction state pseudo-class on this compound."""
        for pseudo in self.pseudo_classes:
            if pseudo in STATE_NAMES:
                return InteractionState(pseudo)
        return None


@dataclass(frozen=True)
class Selector:
    """A complex selector: compounds joined left to right by combinators.

    ``combinators[i]`` relates ``compounds[i]`` to ``compounds[i + 1]``; the
    last compound is the subject that must match the styled node itself.
    """

    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[Combinator, ...] = ()
    text: str = ""

    def __post_init__(self) -> None:
        if not self.compounds:
            raise ValueError("Selector needs at least one compound")
        if len(self.combinators) != len(self.compounds) - 1:
            raise ValueError("Selector needs one combinator between each compound")

    @property
    def subject(self) -> CompoundSelector:
        return self.compounds[-1]

    @property
    def state(self) -> InteractionState | None:
        """Interaction state the rule's declarations are routed into."""
        return self.subject.state

    @property
    def specificity(self) -> Specificity:
        ids = classes = tags = 0
        for compound in self.compounds:
            a, b, c = compound.specificity
            ids += a
            classes += b
            tags += c
        return (ids, classes, tags)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Rule:
    """A selector paired with its declarations, in source order."""

    selector: Selector
    declarations: dict[str, str]
    source_index: int
    important: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MediaRule:
    """Rules guarded by an ``@media`` condition.

    Inert media rules have no width threshold and never affect a style map.
    """

    condition: str
    bucket: Breakpoint
    rules: list[Rule] = field(default_factory=list)
    inert: bool = False


@dataclass(frozen=True)
class StyleSheet:
    """Parsed CSS for one page."""

    rules: list[Rule] = field(default_factory=list)
    media_rules: list[MediaRule] = field(default_factory=list)
    custom_properties: dict[str, str] = field(default_factory=dict)
    text: str = ""

    def iter_media_rules(self, bucket: Breakpoint) -> Iterator[Rule]:
        """Yield the rules of every active media block classified into *bucket*."""
        for media in self.media_rules:
            if media.inert or media.bucket is not bucket:
                continue
            yield from media.rules

    @property
    def rule_count(self) -> int:
        return len(self.rules) + sum(len(m.rules) for m in self.media_rules)
