from pagemodel.stylesheet.breakpoints import classify, is_inert, width_thresholds
from pagemodel.stylesheet.model import (
    AttributeSelector,
    Combinator,
    CompoundSelector,
    MediaRule,
    Rule,
    Selector,
    StyleSheet,
)
from pagemodel.stylesheet.parser import (
    merge_stylesheets,
    parse_declarations,
    parse_inline_style,
    parse_stylesheet,
)
from pagemodel.stylesheet.selector import parse_selector

__all__ = [
    "parse_stylesheet",
    "parse_declarations",
    "parse_inline_style",
    "merge_stylesheets",
    "parse_selector",
    "classify",
    "is_inert",
    "width_thresholds",
    "StyleSheet",
    "Rule",
    "MediaRule",
    "Selector",
    "CompoundSelector",
    "AttributeSelector",
    "Combinator",
]
