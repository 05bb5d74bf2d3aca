"""Breakpoint classifier: map ``@media`` conditions to breakpoint buckets."""

from __future__ import annotations

import re

from pagemodel.config import ConverterConfig
from pagemodel.model.style import Breakpoint

__all__ = ["classify", "is_inert", "width_thresholds"]

# (max-width: 768px), (min-width:48em)
_FEATURE_RE = re.compile(
    r"(?P<kind>min|max)-width\s*:\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>px|em|rem)?",
    re.IGNORECASE,
)

# Range syntax: (width <= 768px), (width > 1024px)
_RANGE_RE = re.compile(
    r"width\s*(?P<op><=|>=|<|>)\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>px|em|rem)?",
    re.IGNORECASE,
)


def _to_px(value: str, unit: str | None, config: ConverterConfig) -> float:
    number = float(value)
    if unit and unit.lower() in ("em", "rem"):
        return number * config.root_font_size
    return number


def width_thresholds(
    condition: str, config: ConverterConfig | None = None
) -> tuple[float | None, float | None]:
    """Return the ``(min_width, max_width)`` thresholds in px, if present.

    When several thresholds of one kind appear, the narrowest wins.
    """
    config = config or ConverterConfig()
    mins: list[float] = []
    maxes: list[float] = []
    for match in _FEATURE_RE.finditer(condition):
        px = _to_px(match.group("value"), match.group("unit"), config)
        (mins if match.group("kind").lower() == "min" else maxes).append(px)
    for match in _RANGE_RE.finditer(condition):
        px = _to_px(match.group("value"), match.group("unit"), config)
        (maxes if match.group("op").startswith("<") else mins).append(px)
    return (max(mins) if mins else None, min(maxes) if maxes else None)


def is_inert(condition: str) -> bool:
    """True when *condition* carries no width threshold at all."""
    return _FEATURE_RE.search(condition) is None and _RANGE_RE.search(condition) is None


def classify(condition: str, config: ConverterConfig | None = None) -> Breakpoint:
    """Classify a media condition into a breakpoint bucket.

    Only the ``max-width`` threshold selects a narrower bucket; conditions with
    a ``min-width`` only, or no width at all, fall back to desktop.
    """
    config = config or ConverterConfig()
    _, max_width = width_thresholds(condition, config)
    if max_width is None:
        return Breakpoint.DESKTOP
    if max_width <= config.mobile_max_width:
        return Breakpoint.MOBILE
    if max_width <= config.tablet_max_width:
        return Breakpoint.TABLET
    return Breakpoint.DESKTOP
