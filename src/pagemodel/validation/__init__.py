from pagemodel.validation.rules import RULES_BY_VERSION, V3_RULES, V4_RULES, RuleFunc
from pagemodel.validation.validator import (
    ValidationError,
    ValidationResult,
    validate,
    validate_or_raise,
)

__all__ = [
    "RULES_BY_VERSION",
    "RuleFunc",
    "V3_RULES",
    "V4_RULES",
    "ValidationError",
    "ValidationResult",
    "validate",
    "validate_or_raise",
]
