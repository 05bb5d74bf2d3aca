"""Pagemodel - convert HTML+CSS pages into versioned page-builder models."""

__version__ = "0.1.0"

from pagemodel.config import ConverterConfig  # noqa: E402
from pagemodel.converter import ConversionResult, convert  # noqa: E402
from pagemodel.errors import DepthExceeded, InputTooLarge, PageModelError  # noqa: E402
from pagemodel.validation import ValidationError, ValidationResult  # noqa: E402

__all__ = [
    "__version__",
    "convert",
    "ConversionResult",
    "ConverterConfig",
    "PageModelError",
    "InputTooLarge",
    "DepthExceeded",
    "ValidationError",
    "ValidationResult",
]
