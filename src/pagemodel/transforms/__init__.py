"""Passes over the content tree: decoration, token extraction, sectioning."""

from pagemodel.transforms.decorator import decorate, element_type, project_layout
from pagemodel.transforms.sections import (
    build_sections,
    classify_section,
    section_name,
    section_roots,
)
from pagemodel.transforms.tokens import extract_tokens, find_colors

__all__ = [
    "decorate",
    "element_type",
    "project_layout",
    "extract_tokens",
    "find_colors",
    "build_sections",
    "classify_section",
    "section_name",
    "section_roots",
]
