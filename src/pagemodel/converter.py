"""Page model assembler: the HTML+CSS to page model pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pagemodel.config import ConverterConfig
from pagemodel.dom.builder import build_tree
from pagemodel.errors import InputTooLarge, PageModelError
from pagemodel.model.node import ContentNode
from pagemodel.model.page import CssClass, PageMeta, PageModel, PageModelVersion
from pagemodel.model.style import camel_case
from pagemodel.stylesheet.model import Rule, StyleSheet
from pagemodel.stylesheet.parser import merge_stylesheets, parse_stylesheet
from pagemodel.transforms.decorator import decorate
from pagemodel.transforms.sections import build_sections
from pagemodel.transforms.tokens import extract_tokens
from pagemodel.validation.validator import ValidationResult, validate, validate_or_raise

__all__ = ["ConversionResult", "convert", "css_classes"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """A converted page model plus the diagnostics of its schema check."""

    model: PageModel
    validation: ValidationResult

    @property
    def valid(self) -> bool:
        return self.validation.valid

    def to_dict(self) -> dict[str, Any]:
        return self.model.to_dict()


def _class_name(rule: Rule) -> str | None:
    """Return ``name`` when the rule's selector is exactly ``.name``."""
    if len(rule.selector.compounds) != 1:
        return None
    compound = rule.selector.subject
    if (
        len(compound.classes) != 1
        or compound.tag is not None
        or compound.ids
        or compound.attributes
        or compound.pseudo_classes
        or compound.pseudo_element is not None
    ):
        return None
    return compound.classes[0]


def css_classes(stylesheet: StyleSheet) -> list[CssClass]:
    """Collect single-class base rules, merged per class in first-appearance order."""
    merged: dict[str, dict[str, str]] = {}
    for rule in stylesheet.rules:
        name = _class_name(rule)
        if name is None:
            continue
        styles = merged.setdefault(name, {})
        for prop, value in rule.declarations.items():
            styles[camel_case(prop)] = value
        for prop, value in rule.important.items():
            styles[camel_case(prop)] = value
    return [CssClass(name=name, styles=styles) for name, styles in merged.items()]


def _target(target: str | PageModelVersion) -> PageModelVersion:
    try:
        return PageModelVersion(target)
    except ValueError:
        choices = ", ".join(v.value for v in PageModelVersion)
        raise PageModelError(f"Unknown target version {target!r} (expected one of {choices})") from None


def convert(
    html: str,
    target: str | PageModelVersion = PageModelVersion.V4,
    config: ConverterConfig | None = None,
    strict: bool = False,
) -> ConversionResult:
    """Convert one HTML document (with embedded ``<style>`` blocks) into a page model.

    Raises :class:`InputTooLarge` or :class:`DepthExceeded` for inputs past
    the configured limits. Schema problems are reported in
    ``ConversionResult.validation``; with *strict* they raise
    :class:`ValidationError` instead.
    """
    config = config or ConverterConfig()
    version = _target(target)

    size = len(html.encode("utf-8"))
    if size > config.max_input_bytes:
        raise InputTooLarge(size, config.max_input_bytes)

    document = build_tree(html, config)
    stylesheet = merge_stylesheets(
        [parse_stylesheet(text, config) for text in document.style_texts]
    )
    html_node = ContentNode(tag="html", attributes=dict(document.html_attributes))
    nodes = decorate(document.root, stylesheet, document=html_node)

    model = PageModel(
        version=version,
        meta=PageMeta(
            title=document.title,
            description=document.description,
            lang=document.lang,
            keywords=list(document.keywords),
        ),
        global_styles=stylesheet.text,
        css_classes=css_classes(stylesheet) if version is PageModelVersion.V4 else [],
        design_tokens=extract_tokens(nodes),
        nodes=nodes if version is PageModelVersion.V4 else None,
        sections=build_sections(nodes) if version is PageModelVersion.V3 else None,
    )
    data = model.to_dict()
    if strict:
        validation = ValidationResult(validate_or_raise(data, version=version.value))
    else:
        validation = validate(data, version=version.value)

    logger.info(
        "Converted page to %s: %d rule(s), %d top-level node(s), %d diagnostic(s)",
        version.value,
        stylesheet.rule_count,
        len(nodes),
        len(validation.diagnostics),
    )
    for diagnostic in validation.errors:
        logger.warning("Page model failed validation: %s", diagnostic)
    return ConversionResult(model=model, validation=validation)
