"""Lark Transformer that converts a selector parse tree into a Selector."""

from __future__ import annotations

import re
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from pagemodel.errors import SelectorSyntaxError
from pagemodel.stylesheet.model import (
    AttributeSelector,
    Combinator,
    CompoundSelector,
    Selector,
)

__all__ = ["parse_selector", "split_selector_list"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_PARSER = Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")

_ATTR_OP_RE = re.compile(r"\s*([~|^$*]?=)\s*")
_COMBINATOR_RE = re.compile(r"\s*([>+~])\s*")
_WS_RE = re.compile(r"\s+")
_STRING_RE = re.compile(r"(\"[^\"]*\"|'[^']*')")


class _Part:
    """Marker for one simple selector inside a compound."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into a Selector."""

    def __init__(self, text: str):
        super().__init__()
        self._text = text

    # ---- simple selectors ----

    def type_selector(self, items: list[Token]) -> _Part:
        return _Part("tag", str(items[0]).lower())

    def universal(self, items: list[Token]) -> _Part:
        return _Part("universal", "*")

    def class_selector(self, items: list[Token]) -> _Part:
        return _Part("class", str(items[0]))

    def id_selector(self, items: list[Token]) -> _Part:
        return _Part("id", str(items[0]))

    def ident_value(self, items: list[Token]) -> str:
        return str(items[0])

    def number_value(self, items: list[Token]) -> str:
        return str(items[0])

    def string_value(self, items: list[Token]) -> str:
        return str(items[0])[1:-1]

    def attribute_selector(self, items: list[object]) -> _Part:
        name = str(items[0]).lower()
        operator: str | None = None
        value: str | None = None
        ignore_case = False
        for item in items[1:]:
            if isinstance(item, Token) and item.type == "ATTR_OP":
                operator = str(item)
            elif isinstance(item, Token) and item.type == "ATTR_FLAG":
                ignore_case = str(item).strip().lower() == "i"
            else:
                value = str(item)
        return _Part(
            "attribute",
            AttributeSelector(
                name=name, operator=operator, value=value, ignore_case=ignore_case
            ),
        )

    def pseudo_class(self, items: list[Token]) -> _Part:
        name = str(items[0]).lower()
        if len(items) > 1:
            name = f"{name}({str(items[1]).strip()})"
        return _Part("pseudo_class", name)

    def pseudo_element(self, items: list[Token]) -> _Part:
        return _Part("pseudo_element", str(items[0]).lower())

    # ---- structural ----

    def compound(self, items: list[_Part]) -> CompoundSelector:
        tag: str | None = None
        ids: list[str] = []
        classes: list[str] = []
        attributes: list[AttributeSelector] = []
        pseudo_classes: list[str] = []
        pseudo_element: str | None = None
        for part in items:
            if part.kind == "tag":
                tag = str(part.value)
            elif part.kind == "id":
                ids.append(str(part.value))
            elif part.kind == "class":
                classes.append(str(part.value))
            elif part.kind == "attribute":
                attributes.append(part.value)  # type: ignore[arg-type]
            elif part.kind == "pseudo_class":
                pseudo_classes.append(str(part.value))
            elif part.kind == "pseudo_element":
                pseudo_element = str(part.value)
        return CompoundSelector(
            tag=tag,
            ids=tuple(ids),
            classes=tuple(classes),
            attributes=tuple(attributes),
            pseudo_classes=tuple(pseudo_classes),
            pseudo_element=pseudo_element,
        )

    def child(self, items: list[object]) -> Combinator:
        return Combinator.CHILD

    def adjacent(self, items: list[object]) -> Combinator:
        return Combinator.ADJACENT

    def sibling(self, items: list[object]) -> Combinator:
        return Combinator.SIBLING

    def descendant(self, items: list[object]) -> Combinator:
        return Combinator.DESCENDANT

    def start(self, items: list[object]) -> Selector:
        compounds = tuple(i for i in items if isinstance(i, CompoundSelector))
        combinators = tuple(i for i in items if isinstance(i, Combinator))
        return Selector(compounds=compounds, combinators=combinators, text=self._text)


def _normalize_segment(text: str) -> str:
    text = _WS_RE.sub(" ", text)
    text = _ATTR_OP_RE.sub(r"\1", text)
    text = _COMBINATOR_RE.sub(r"\1", text)
    return text.replace("[ ", "[").replace(" ]", "]")


def normalize_selector(raw: str) -> str:
    """Collapse whitespace so that only a single space means "descendant".

    Quoted attribute values are copied through untouched.
    """
    parts = _STRING_RE.split(raw.strip())
    # re.split with one group puts the quoted strings at odd indices.
    return "".join(
        part if i % 2 else _normalize_segment(part) for i, part in enumerate(parts)
    )


def split_selector_list(raw: str) -> list[str]:
    """Split ``a, b:not(c, d)`` at top-level commas."""
    parts: list[str] = []
    depth = 0
    quote = ""
    current: list[str] = []
    for ch in raw:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def parse_selector(raw: str) -> Selector:
    """Parse one complex selector (no commas) into a Selector.

    Raises :class:`SelectorSyntaxError` when *raw* falls outside the
    supported selector subset.
    """
    text = normalize_selector(raw)
    if not text:
        raise SelectorSyntaxError("Empty selector", selector=raw)
    try:
        tree = _PARSER.parse(text)
        return SelectorTransformer(text).transform(tree)
    except (LarkError, VisitError) as e:
        column = getattr(e, "column", None)
        raise SelectorSyntaxError(
            f"Invalid selector {raw!r}: {e}", selector=raw, column=column
        ) from e
