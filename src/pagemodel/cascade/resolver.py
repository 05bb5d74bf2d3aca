"""Cascade resolver: merge matching declarations into per-bucket style maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pagemodel.cascade.matcher import Ancestry, matches
from pagemodel.model.node import ContentNode
from pagemodel.model.style import Breakpoint, InteractionState, camel_case
from pagemodel.stylesheet.model import Rule, StyleSheet
from pagemodel.stylesheet.parser import parse_inline_style

__all__ = ["ResolvedStyle", "cascade", "resolve", "resolve_node", "resolve_states"]


@dataclass(frozen=True)
class ResolvedStyle:
    """Winning declarations for one node.

    ``styles`` always holds the desktop map; a narrower bucket is present
    only when a media rule of that bucket matched the node.
    """

    styles: dict[str, dict[str, str]] = field(default_factory=dict)
    states: dict[str, dict[str, str]] = field(default_factory=dict)


def _cascade_key(rule: Rule) -> tuple[tuple[int, int, int], int]:
    return (rule.selector.specificity, rule.source_index)


def cascade(rules: Iterable[Rule], inline: dict[str, str] | None = None) -> dict[str, str]:
    """Apply *rules* in cascade order, property by property.

    Rules are ordered by ``(specificity, source_index)``; later entries
    overwrite earlier ones one property at a time. Inline declarations beat
    every normal declaration, and ``!important`` declarations beat both.
    """
    ordered = sorted(rules, key=_cascade_key)
    result: dict[str, str] = {}
    for rule in ordered:
        for prop, value in rule.declarations.items():
            result[camel_case(prop)] = value
    for prop, value in (inline or {}).items():
        result[camel_case(prop)] = value
    for rule in ordered:
        for prop, value in rule.important.items():
            result[camel_case(prop)] = value
    return result


def _inline_style(node: ContentNode) -> dict[str, str]:
    style = node.attributes.get("style", "")
    return parse_inline_style(style) if style else {}


def _matching(rules: Iterable[Rule], node: ContentNode, ancestors: Ancestry | None) -> list[Rule]:
    return [r for r in rules if r.selector.state is None and matches(r.selector, node, ancestors)]


def resolve(
    node: ContentNode,
    ancestors: Ancestry | None,
    stylesheet: StyleSheet,
    bucket: Breakpoint = Breakpoint.DESKTOP,
) -> dict[str, str]:
    """Resolve the effective style map of *node* for one breakpoint bucket.

    Every bucket starts from the base rules, so a narrower bucket only
    overrides the properties its media rules set.
    """
    candidates = _matching(stylesheet.rules, node, ancestors)
    candidates.extend(_matching(stylesheet.iter_media_rules(bucket), node, ancestors))
    return cascade(candidates, _inline_style(node))


def resolve_states(
    node: ContentNode, ancestors: Ancestry | None, stylesheet: StyleSheet
) -> dict[str, dict[str, str]]:
    """Resolve ``:hover`` and other interaction-state declarations for *node*."""
    by_state: dict[InteractionState, list[Rule]] = {}
    for rule in stylesheet.rules:
        state = rule.selector.state
        if state is None or not matches(rule.selector, node, ancestors):
            continue
        by_state.setdefault(state, []).append(rule)
    states: dict[str, dict[str, str]] = {}
    for state, rules in by_state.items():
        resolved = cascade(rules)
        if resolved:
            states[state.value] = resolved
    return states


def resolve_node(
    node: ContentNode, ancestors: Ancestry | None, stylesheet: StyleSheet
) -> ResolvedStyle:
    """Resolve every bucket and state of *node*, matching base rules once."""
    inline = _inline_style(node)
    base = _matching(stylesheet.rules, node, ancestors)
    styles: dict[str, dict[str, str]] = {}
    for bucket in Breakpoint:
        extra = _matching(stylesheet.iter_media_rules(bucket), node, ancestors)
        if bucket is not Breakpoint.DESKTOP and not extra:
            continue
        styles[bucket.value] = cascade(base + extra, inline)
    return ResolvedStyle(styles=styles, states=resolve_states(node, ancestors, stylesheet))
