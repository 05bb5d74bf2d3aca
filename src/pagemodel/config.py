from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterConfig:
    max_input_bytes: int = 5 * 1024 * 1024
    max_depth: int = 256
    mobile_max_width: float = 768
    tablet_max_width: float = 1024
    root_font_size: float = 16  # px per em/rem in media conditions
