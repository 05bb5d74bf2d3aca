"""Page model: the versioned output of a conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pagemodel.model.node import ElementType, PageNode

# CSS initial value of font-weight ("normal").
DEFAULT_FONT_WEIGHT = "400"


class PageModelVersion(StrEnum):
    """Output shapes the converter can produce."""

    V3 = "v3"  # legacy sectioned tree
    V4 = "v4"  # generic node tree


class SectionType(StrEnum):
    """Semantic role assigned to a top-level page section."""

    HERO = "hero"
    FEATURES = "features"
    PRICING = "pricing"
    TESTIMONIALS = "testimonials"
    CTA = "cta"
    FAQ = "faq"
    CONTACT = "contact"
    GALLERY = "gallery"
    HEADER = "header"
    NAV = "nav"
    FOOTER = "footer"
    GENERIC = "generic"


# ---------------------------------------------------------------------------
# Design tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypographyToken:
    font_size: str
    font_weight: str = DEFAULT_FONT_WEIGHT
    line_height: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"fontSize": self.font_size, "fontWeight": self.font_weight}
        if self.line_height is not None:
            data["lineHeight"] = self.line_height
        return data


@dataclass(frozen=True)
class DesignTokens:
    """Deduplicated, named style values extracted from resolved styles."""

    colors: dict[str, str] = field(default_factory=dict)
    typography: dict[str, TypographyToken] = field(default_factory=dict)
    spacing: dict[str, str] = field(default_factory=dict)

    def name_for_color(self, value: str) -> str | None:
        """Return the token name holding *value*, if one was extracted."""
        for name, color in self.colors.items():
            if color == value:
                return name
        return None

    def name_for_spacing(self, value: str) -> str | None:
        for name, spacing in self.spacing.items():
            if spacing == value:
                return name
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": dict(self.colors),
            "typography": {
                name: token.to_dict() for name, token in self.typography.items()
            },
            "spacing": dict(self.spacing),
        }


# ---------------------------------------------------------------------------
# Legacy sectioned tree (v3)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Element:
    id: str
    type: ElementType
    tag: str
    props: dict[str, str] = field(default_factory=dict)
    content: dict[str, str] = field(default_factory=dict)
    styles: dict[str, dict[str, str]] = field(default_factory=dict)
    states: dict[str, dict[str, str]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "tag": self.tag,
            "props": dict(self.props),
            "content": dict(self.content),
            "styles": {bucket: dict(m) for bucket, m in self.styles.items()},
            "states": {state: dict(m) for state, m in self.states.items()},
        }


@dataclass(frozen=True)
class Column:
    elements: list[Element] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"elements": [e.to_dict() for e in self.elements]}


@dataclass(frozen=True)
class Row:
    columns: list[Column] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"columns": [c.to_dict() for c in self.columns]}


@dataclass(frozen=True)
class Section:
    id: str
    type: SectionType
    name: str = ""
    styles: dict[str, dict[str, str]] = field(default_factory=dict)
    rows: list[Row] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "styles": {bucket: dict(m) for bucket, m in self.styles.items()},
            "rows": [r.to_dict() for r in self.rows],
        }


# ---------------------------------------------------------------------------
# Page model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CssClass:
    name: str
    styles: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PageMeta:
    title: str = ""
    description: str = ""
    lang: str = ""
    keywords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PageModel:
    """Structured, versioned representation of one converted page.

    Exactly one of ``nodes`` (v4) or ``sections`` (v3) is populated.
    """

    version: PageModelVersion
    meta: PageMeta = field(default_factory=PageMeta)
    global_styles: str = ""
    css_classes: list[CssClass] = field(default_factory=list)
    design_tokens: DesignTokens = field(default_factory=DesignTokens)
    nodes: list[PageNode] | None = None
    sections: list[Section] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape consumed by the page-builder frontends."""
        meta: dict[str, Any] = {"title": self.meta.title}
        if self.meta.description:
            meta["description"] = self.meta.description
        if self.meta.lang:
            meta["lang"] = self.meta.lang
        if self.meta.keywords:
            meta["keywords"] = list(self.meta.keywords)
        data: dict[str, Any] = {
            "version": self.version.value,
            "meta": meta,
            "globalStyles": self.global_styles,
            "designTokens": self.design_tokens.to_dict(),
        }
        if self.version is PageModelVersion.V3:
            data["sections"] = [s.to_dict() for s in self.sections or []]
        else:
            data["cssClasses"] = [
                {"name": c.name, "styles": dict(c.styles)} for c in self.css_classes
            ]
            data["nodes"] = [n.to_dict() for n in self.nodes or []]
        return data
