"""Schema rules for serialised page models.

Each rule is a function taking the JSON-shaped ``dict`` produced by
``PageModel.to_dict()`` and returning a list of Diagnostic objects.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

from pagemodel.model.diagnostic import Diagnostic, Severity
from pagemodel.model.node import ElementType
from pagemodel.model.page import PageModelVersion, SectionType
from pagemodel.model.style import STATE_NAMES, Breakpoint

RuleFunc = Callable[[dict[str, Any]], list[Diagnostic]]


# ---------------------------------------------------------------------------
# Known value sets
# ---------------------------------------------------------------------------

KNOWN_VERSIONS = frozenset(v.value for v in PageModelVersion)
KNOWN_BUCKETS = frozenset(b.value for b in Breakpoint)
KNOWN_SECTION_TYPES = frozenset(s.value for s in SectionType)
KNOWN_ELEMENT_TYPES = frozenset(t.value for t in ElementType)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(rule: str, message: str, path: str | None = None, fix: str | None = None) -> Diagnostic:
    return Diagnostic(rule=rule, severity=Severity.ERROR, message=message, path=path, fix=fix)


def _is_str_map(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


def _check_style_buckets(rule: str, styles: Any, path: str) -> list[Diagnostic]:
    if not isinstance(styles, dict):
        return [_error(rule, "styles must be an object", path)]
    diagnostics: list[Diagnostic] = []
    if "desktop" not in styles:
        diagnostics.append(
            _error(rule, "styles is missing the desktop bucket", path, fix="Emit an empty desktop map.")
        )
    for bucket, style_map in styles.items():
        if bucket not in KNOWN_BUCKETS:
            diagnostics.append(_error(rule, f"Unknown breakpoint bucket '{bucket}'", path))
        elif not _is_str_map(style_map):
            diagnostics.append(_error(rule, f"styles.{bucket} must map strings to strings", path))
    return diagnostics


def _check_states(rule: str, states: Any, path: str) -> list[Diagnostic]:
    if not isinstance(states, dict):
        return [_error(rule, "states must be an object", path)]
    diagnostics: list[Diagnostic] = []
    for state, style_map in states.items():
        if state not in STATE_NAMES:
            diagnostics.append(_error(rule, f"Unknown interaction state '{state}'", path))
        elif not _is_str_map(style_map):
            diagnostics.append(_error(rule, f"states.{state} must map strings to strings", path))
    return diagnostics


def _iter_nodes(data: dict[str, Any]) -> Iterator[tuple[str, Any]]:
    """Yield ``(path, node)`` for every node of a v4 tree, in document order."""
    nodes = data.get("nodes")
    if not isinstance(nodes, list):
        return
    stack = [(f"nodes[{i}]", n) for i, n in reversed(list(enumerate(nodes)))]
    while stack:
        path, node = stack.pop()
        yield path, node
        children = node.get("children") if isinstance(node, dict) else None
        if isinstance(children, list):
            stack.extend(
                (f"{path}.children[{i}]", c) for i, c in reversed(list(enumerate(children)))
            )


# ---------------------------------------------------------------------------
# Shared rules
# ---------------------------------------------------------------------------


def check_version(data: dict[str, Any]) -> list[Diagnostic]:
    """The version must be one of the known output shapes."""
    version = data.get("version")
    if version not in KNOWN_VERSIONS:
        return [
            _error(
                "check_version",
                f"Unknown page model version {version!r}.",
                "version",
                fix=f"Use one of {sorted(KNOWN_VERSIONS)}.",
            )
        ]
    return []


def check_meta(data: dict[str, Any]) -> list[Diagnostic]:
    """meta must be an object with a string title and optional keyword list."""
    meta = data.get("meta")
    if not isinstance(meta, dict):
        return [_error("check_meta", "meta must be an object.", "meta")]
    if not isinstance(meta.get("title"), str):
        return [_error("check_meta", "meta.title must be a string.", "meta.title")]
    keywords = meta.get("keywords", [])
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        return [_error("check_meta", "meta.keywords must be a list of strings.", "meta.keywords")]
    return []


def check_global_styles(data: dict[str, Any]) -> list[Diagnostic]:
    """globalStyles holds the raw CSS text."""
    if not isinstance(data.get("globalStyles"), str):
        return [_error("check_global_styles", "globalStyles must be a string.", "globalStyles")]
    return []


def check_design_tokens(data: dict[str, Any]) -> list[Diagnostic]:
    """designTokens must hold color, typography and spacing maps."""
    tokens = data.get("designTokens")
    if not isinstance(tokens, dict):
        return [_error("check_design_tokens", "designTokens must be an object.", "designTokens")]
    diagnostics: list[Diagnostic] = []
    for key in ("colors", "spacing"):
        if not _is_str_map(tokens.get(key, {})):
            diagnostics.append(
                _error("check_design_tokens", f"designTokens.{key} must map names to strings.", f"designTokens.{key}")
            )
    typography = tokens.get("typography", {})
    if not isinstance(typography, dict):
        diagnostics.append(
            _error("check_design_tokens", "designTokens.typography must be an object.", "designTokens.typography")
        )
        return diagnostics
    for name, token in typography.items():
        path = f"designTokens.typography.{name}"
        if not _is_str_map(token) or "fontSize" not in token or "fontWeight" not in token:
            diagnostics.append(
                _error("check_design_tokens", "Typography token needs string fontSize and fontWeight.", path)
            )
    return diagnostics


# ---------------------------------------------------------------------------
# v4 rules
# ---------------------------------------------------------------------------


def check_nodes(data: dict[str, Any]) -> list[Diagnostic]:
    """Every node carries a tag, string maps and a desktop style bucket."""
    if not isinstance(data.get("nodes"), list):
        return [_error("check_nodes", "nodes must be a list.", "nodes")]
    diagnostics: list[Diagnostic] = []
    for path, node in _iter_nodes(data):
        if not isinstance(node, dict):
            diagnostics.append(_error("check_nodes", "Node must be an object.", path))
            continue
        if not isinstance(node.get("id"), str) or not node.get("id"):
            diagnostics.append(_error("check_nodes", "Node id must be a non-empty string.", path))
        if not isinstance(node.get("tag"), str) or not node.get("tag"):
            diagnostics.append(_error("check_nodes", "Node tag must be a non-empty string.", path))
        if node.get("type") not in KNOWN_ELEMENT_TYPES:
            diagnostics.append(_error("check_nodes", f"Unknown node type {node.get('type')!r}.", path))
        class_names = node.get("classNames")
        if not isinstance(class_names, list) or not all(isinstance(c, str) for c in class_names):
            diagnostics.append(_error("check_nodes", "classNames must be a list of strings.", path))
        if not _is_str_map(node.get("attributes")):
            diagnostics.append(_error("check_nodes", "attributes must map strings to strings.", path))
        if not _is_str_map(node.get("layout")):
            diagnostics.append(_error("check_nodes", "layout must map strings to strings.", path))
        if "textContent" in node and not isinstance(node["textContent"], str):
            diagnostics.append(_error("check_nodes", "textContent must be a string.", path))
        if not isinstance(node.get("children"), list):
            diagnostics.append(_error("check_nodes", "children must be a list.", path))
        diagnostics.extend(_check_style_buckets("check_nodes", node.get("styles"), f"{path}.styles"))
        diagnostics.extend(_check_states("check_nodes", node.get("states"), f"{path}.states"))
    return diagnostics


def check_unique_node_ids(data: dict[str, Any]) -> list[Diagnostic]:
    """Node ids must be unique across the whole tree."""
    seen: set[str] = set()
    diagnostics: list[Diagnostic] = []
    for path, node in _iter_nodes(data):
        node_id = node.get("id") if isinstance(node, dict) else None
        if not isinstance(node_id, str):
            continue
        if node_id in seen:
            diagnostics.append(
                _error("check_unique_node_ids", f"Duplicate node id '{node_id}'.", path)
            )
        seen.add(node_id)
    return diagnostics


def check_css_classes(data: dict[str, Any]) -> list[Diagnostic]:
    """cssClasses is an ordered list of {name, styles}."""
    classes = data.get("cssClasses")
    if not isinstance(classes, list):
        return [_error("check_css_classes", "cssClasses must be a list.", "cssClasses")]
    diagnostics: list[Diagnostic] = []
    for i, entry in enumerate(classes):
        path = f"cssClasses[{i}]"
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            diagnostics.append(_error("check_css_classes", "Class entry needs a string name.", path))
        elif not _is_str_map(entry.get("styles")):
            diagnostics.append(_error("check_css_classes", "Class styles must map strings to strings.", path))
    return diagnostics


def check_has_content(data: dict[str, Any]) -> list[Diagnostic]:
    """An empty node list is valid but usually means the body was empty."""
    if isinstance(data.get("nodes"), list) and not data["nodes"]:
        return [
            Diagnostic(
                rule="check_has_content",
                severity=Severity.WARNING,
                message="Page model has no content nodes.",
                path="nodes",
            )
        ]
    return []


# ---------------------------------------------------------------------------
# v3 rules
# ---------------------------------------------------------------------------


def check_sections(data: dict[str, Any]) -> list[Diagnostic]:
    """Sections nest rows > columns > elements, with at least one section."""
    sections = data.get("sections")
    if not isinstance(sections, list) or not sections:
        return [
            _error(
                "check_sections",
                "sections must be a non-empty list.",
                "sections",
                fix="Emit a generic section for empty pages.",
            )
        ]
    diagnostics: list[Diagnostic] = []
    for s, section in enumerate(sections):
        path = f"sections[{s}]"
        if not isinstance(section, dict):
            diagnostics.append(_error("check_sections", "Section must be an object.", path))
            continue
        if section.get("type") not in KNOWN_SECTION_TYPES:
            diagnostics.append(
                _error("check_sections", f"Unknown section type {section.get('type')!r}.", path)
            )
        if not isinstance(section.get("name"), str):
            diagnostics.append(_error("check_sections", "Section name must be a string.", path))
        diagnostics.extend(_check_style_buckets("check_sections", section.get("styles"), f"{path}.styles"))
        rows = section.get("rows")
        if not isinstance(rows, list) or not rows:
            diagnostics.append(_error("check_sections", "Section needs at least one row.", path))
            continue
        for r, row in enumerate(rows):
            row_path = f"{path}.rows[{r}]"
            columns = row.get("columns") if isinstance(row, dict) else None
            if not isinstance(columns, list) or not columns:
                diagnostics.append(_error("check_sections", "Row needs at least one column.", row_path))
                continue
            for c, column in enumerate(columns):
                col_path = f"{row_path}.columns[{c}]"
                elements = column.get("elements") if isinstance(column, dict) else None
                if not isinstance(elements, list):
                    diagnostics.append(_error("check_sections", "Column elements must be a list.", col_path))
                    continue
                for e, element in enumerate(elements):
                    diagnostics.extend(_check_element(element, f"{col_path}.elements[{e}]"))
    return diagnostics


def _check_element(element: Any, path: str) -> list[Diagnostic]:
    if not isinstance(element, dict):
        return [_error("check_sections", "Element must be an object.", path)]
    diagnostics: list[Diagnostic] = []
    if not isinstance(element.get("tag"), str) or not element.get("tag"):
        diagnostics.append(_error("check_sections", "Element tag must be a non-empty string.", path))
    if element.get("type") not in KNOWN_ELEMENT_TYPES:
        diagnostics.append(_error("check_sections", f"Unknown element type {element.get('type')!r}.", path))
    if not _is_str_map(element.get("props")):
        diagnostics.append(_error("check_sections", "props must map strings to strings.", path))
    diagnostics.extend(_check_style_buckets("check_sections", element.get("styles"), f"{path}.styles"))
    diagnostics.extend(_check_states("check_sections", element.get("states"), f"{path}.states"))
    return diagnostics


SHARED_RULES: list[RuleFunc] = [
    check_version,
    check_meta,
    check_global_styles,
    check_design_tokens,
]

V4_RULES: list[RuleFunc] = [
    *SHARED_RULES,
    check_nodes,
    check_unique_node_ids,
    check_css_classes,
    check_has_content,
]

V3_RULES: list[RuleFunc] = [
    *SHARED_RULES,
    check_sections,
]

RULES_BY_VERSION: dict[str, list[RuleFunc]] = {
    PageModelVersion.V3.value: V3_RULES,
    PageModelVersion.V4.value: V4_RULES,
}
