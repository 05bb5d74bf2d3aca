"""Hand-written, error-tolerant CSS parser.

Produces a :class:`StyleSheet` from the text of ``<style>`` blocks:

    :root { --brand: #667eea; }
    .card > .card-header { background: blue; }
    @media (max-width: 768px) { .card { padding: 8px; } }

Malformed input never raises: a bad selector or declaration is skipped and
parsing resumes at the next recoverable boundary (the end of the current
block or the end of input).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from pagemodel.config import ConverterConfig
from pagemodel.errors import SelectorSyntaxError
from pagemodel.stylesheet.breakpoints import classify, is_inert
from pagemodel.stylesheet.model import MediaRule, Rule, StyleSheet
from pagemodel.stylesheet.selector import parse_selector, split_selector_list

__all__ = ["parse_stylesheet", "parse_declarations", "parse_inline_style", "merge_stylesheets"]

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?(\*/|\Z)", re.DOTALL)

# Property name: standard, vendor-prefixed or custom property.
_PROP_NAME_RE = re.compile(r"^(--[A-Za-z0-9_-]+|-?[A-Za-z][A-Za-z0-9-]*)$")

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)

_AT_RULE_RE = re.compile(r"^@(?P<name>[A-Za-z-]+)(?P<condition>.*)$", re.DOTALL)

# At-rules whose block holds ordinary rules that apply unconditionally.
_FLATTENED_AT_RULES = frozenset({"supports", "layer", "document"})


@dataclass(frozen=True)
class Declaration:
    property: str
    value: str
    important: bool = False


@dataclass
class _Block:
    prelude: str
    body: str | None  # None for a ``;``-terminated statement


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def _strip_comments(text: str) -> str:
    return _COMMENT_RE.sub(" ", text)


def _scan_blocks(text: str) -> list[_Block]:
    """Split *text* into top-level ``prelude { body }`` blocks and statements.

    Nested braces, strings and parentheses are respected. An unterminated
    block extends to the end of the input.
    """
    blocks: list[_Block] = []
    i = 0
    n = len(text)
    start = 0
    quote = ""
    parens = 0
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            parens += 1
        elif ch == ")":
            parens = max(parens - 1, 0)
        elif ch == ";" and parens == 0:
            statement = text[start:i].strip()
            if statement:
                blocks.append(_Block(prelude=statement, body=None))
            start = i + 1
        elif ch == "{":
            end = _find_block_end(text, i + 1)
            blocks.append(_Block(prelude=text[start:i].strip(), body=text[i + 1 : end]))
            i = end + 1
            start = i
            parens = 0
            continue
        elif ch == "}":
            # Stray closing brace: discard whatever preceded it.
            if text[start:i].strip():
                logger.debug("Skipping unbalanced CSS fragment: %r", text[start:i].strip()[:80])
            start = i + 1
        i += 1
    tail = text[start:].strip()
    if tail:
        logger.debug("Skipping trailing CSS fragment: %r", tail[:80])
    return blocks


def _find_block_end(text: str, pos: int) -> int:
    """Return the index of the ``}`` closing the block opened before *pos*."""
    depth = 1
    quote = ""
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote or ch == "\n":
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return n


def _split_top_level(text: str, sep: str) -> list[str]:
    """Split on *sep* outside quotes, parentheses and nested blocks."""
    parts: list[str] = []
    current: list[str] = []
    quote = ""
    parens = 0
    braces = 0
    for ch in text:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            parens += 1
        elif ch == ")":
            parens = max(parens - 1, 0)
        elif ch == "{":
            braces += 1
        elif ch == "}":
            braces = max(braces - 1, 0)
        elif ch == sep and parens == 0 and braces == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def parse_declarations(body: str) -> list[Declaration]:
    """Parse the body of a rule block into declarations, in source order."""
    declarations: list[Declaration] = []
    for chunk in _split_top_level(body, ";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if "{" in chunk:
            logger.debug("Skipping nested block in declarations: %r", chunk[:80])
            continue
        name, sep, value = chunk.partition(":")
        name = name.strip()
        if not sep or not _PROP_NAME_RE.match(name):
            logger.debug("Skipping malformed declaration: %r", chunk[:80])
            continue
        if not name.startswith("--"):
            name = name.lower()
        important = False
        match = _IMPORTANT_RE.search(value)
        if match:
            important = True
            value = value[: match.start()]
        value = value.strip()
        if not value:
            continue
        declarations.append(Declaration(property=name, value=value, important=important))
    return declarations


def parse_inline_style(text: str) -> dict[str, str]:
    """Parse a ``style`` attribute into a property -> value mapping."""
    return {d.property: d.value for d in parse_declarations(text)}


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class _RuleBuilder:
    """Accumulates rules while walking blocks; owns the source counter."""

    def __init__(self, config: ConverterConfig):
        self.config = config
        self.next_index = 0
        self.custom_properties: dict[str, str] = {}

    def build_rules(self, blocks: list[_Block], media: list[MediaRule]) -> list[Rule]:
        rules: list[Rule] = []
        for block in blocks:
            if block.body is None:
                if block.prelude.startswith("@"):
                    continue
                logger.debug("Skipping stray CSS statement: %r", block.prelude[:80])
                continue
            if block.prelude.startswith("@"):
                rules.extend(self._at_rule(block, media))
                continue
            rules.extend(self._style_rule(block))
        return rules

    def _at_rule(self, block: _Block, media: list[MediaRule]) -> list[Rule]:
        match = _AT_RULE_RE.match(block.prelude)
        if not match:
            logger.debug("Skipping malformed at-rule: %r", block.prelude[:80])
            return []
        name = match.group("name").lower()
        condition = match.group("condition").strip()
        inner = _scan_blocks(block.body or "")
        if name == "media":
            # A nested @media is recorded on its own, with its own condition.
            rules = self.build_rules(inner, media)
            media.append(
                MediaRule(
                    condition=condition,
                    bucket=classify(condition, self.config),
                    rules=rules,
                    inert=is_inert(condition),
                )
            )
            return []
        if name in _FLATTENED_AT_RULES:
            return self.build_rules(inner, media)
        logger.debug("Skipping @%s block", name)
        return []

    def _style_rule(self, block: _Block) -> list[Rule]:
        declarations = parse_declarations(block.body or "")
        if block.prelude.strip() == ":root":
            regular = []
            for decl in declarations:
                if decl.property.startswith("--"):
                    self.custom_properties[decl.property] = decl.value
                else:
                    regular.append(decl)
            declarations = regular
        if not declarations:
            return []

        normal = {d.property: d.value for d in declarations if not d.important}
        important = {d.property: d.value for d in declarations if d.important}
        index = self.next_index
        self.next_index += 1

        rules: list[Rule] = []
        for raw in split_selector_list(block.prelude):
            try:
                selector = parse_selector(raw)
            except SelectorSyntaxError as exc:
                logger.debug("Skipping rule: %s", exc)
                continue
            rules.append(
                Rule(
                    selector=selector,
                    declarations=dict(normal),
                    important=dict(important),
                    source_index=index,
                )
            )
        return rules


def parse_stylesheet(text: str, config: ConverterConfig | None = None) -> StyleSheet:
    """Parse CSS *text* into a StyleSheet.

    Rules keep their source order through ``source_index``; rules produced
    from one selector list share an index.
    """
    config = config or ConverterConfig()
    builder = _RuleBuilder(config)
    media_rules: list[MediaRule] = []
    rules = builder.build_rules(_scan_blocks(_strip_comments(text)), media_rules)
    return StyleSheet(
        rules=rules,
        media_rules=media_rules,
        custom_properties=builder.custom_properties,
        text=text,
    )


def merge_stylesheets(sheets: list[StyleSheet]) -> StyleSheet:
    """Combine per-block sheets into one, renumbering source indices in order."""
    rules: list[Rule] = []
    media_rules: list[MediaRule] = []
    custom_properties: dict[str, str] = {}
    offset = 0
    for sheet in sheets:
        highest = -1
        for rule in sheet.rules:
            rules.append(replace(rule, source_index=rule.source_index + offset))
            highest = max(highest, rule.source_index)
        for media in sheet.media_rules:
            shifted = [replace(r, source_index=r.source_index + offset) for r in media.rules]
            highest = max([highest, *(r.source_index for r in media.rules)])
            media_rules.append(replace(media, rules=shifted))
        custom_properties.update(sheet.custom_properties)
        offset += highest + 1
    return StyleSheet(
        rules=rules,
        media_rules=media_rules,
        custom_properties=custom_properties,
        text="\n".join(sheet.text for sheet in sheets),
    )
