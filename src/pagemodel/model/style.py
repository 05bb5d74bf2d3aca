"""Closed vocabularies shared by the cascade and the page model."""

from __future__ import annotations

from enum import StrEnum


class Breakpoint(StrEnum):
    """Responsive buckets that resolved styles are classified into."""

    DESKTOP = "desktop"
    TABLET = "tablet"
    MOBILE = "mobile"


class InteractionState(StrEnum):
    """Dynamic pseudo-classes routed into a node's ``states`` map."""

    HOVER = "hover"
    FOCUS = "focus"
    ACTIVE = "active"
    VISITED = "visited"
    FOCUS_WITHIN = "focus-within"
    FOCUS_VISIBLE = "focus-visible"


STATE_NAMES = frozenset(state.value for state in InteractionState)


# Properties projected into a node's ``layout`` map (camelCase names).
LAYOUT_PROPERTIES: tuple[str, ...] = (
    "display",
    "position",
    "flexDirection",
    "flexWrap",
    "justifyContent",
    "justifyItems",
    "alignItems",
    "alignContent",
    "gap",
    "rowGap",
    "columnGap",
    "gridTemplateColumns",
    "gridTemplateRows",
    "gridTemplateAreas",
    "gridAutoFlow",
    "gridColumn",
    "gridRow",
    "gridArea",
    "flex",
    "flexGrow",
    "flexShrink",
    "flexBasis",
    "order",
)


def camel_case(prop: str) -> str:
    """Convert a CSS property name to camelCase; custom properties are kept."""
    if prop.startswith("--"):
        return prop
    head, *rest = prop.split("-")
    if not head and rest:
        # Vendor prefix: -webkit-transition -> WebkitTransition
        head, *rest = rest
        head = head.capitalize()
    return head + "".join(part.capitalize() for part in rest)