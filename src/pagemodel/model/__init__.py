"""Pagemodel model layer -- public type re-exports."""

from pagemodel.model.diagnostic import Diagnostic, Severity
from pagemodel.model.node import ContentNode, ElementType, PageNode
from pagemodel.model.page import (
    Column,
    CssClass,
    DesignTokens,
    Element,
    PageMeta,
    PageModel,
    PageModelVersion,
    Row,
    Section,
    SectionType,
    TypographyToken,
)
from pagemodel.model.style import LAYOUT_PROPERTIES, Breakpoint, InteractionState

__all__ = [
    # diagnostic
    "Severity",
    "Diagnostic",
    # node
    "ContentNode",
    "ElementType",
    "PageNode",
    # style
    "Breakpoint",
    "InteractionState",
    "LAYOUT_PROPERTIES",
    # page
    "PageModelVersion",
    "SectionType",
    "TypographyToken",
    "DesignTokens",
    "Element",
    "Column",
    "Row",
    "Section",
    "CssClass",
    "PageMeta",
    "PageModel",
]
