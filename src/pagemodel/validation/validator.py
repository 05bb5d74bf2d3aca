"""Page model validator: runs the schema rules and reports diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pagemodel.errors import PageModelError
from pagemodel.model.diagnostic import Diagnostic, Severity
from pagemodel.validation.rules import RULES_BY_VERSION, SHARED_RULES, RuleFunc


class ValidationError(PageModelError):
    """Raised when validation produces ERROR-severity diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Validation failed with {len(messages)} error(s): " + "; ".join(messages)
        )


@dataclass(frozen=True)
class ValidationResult:
    """Diagnostics from one validation run."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors


def validate(
    data: dict[str, Any],
    version: str | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> ValidationResult:
    """Run the schema rules for *version* against a serialised page model.

    *version* defaults to ``data["version"]``; an unknown version only runs
    the shared rules, which report it.
    """
    version = version or data.get("version")
    rules: list[RuleFunc] = list(RULES_BY_VERSION.get(str(version), SHARED_RULES))
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(data))
    return ValidationResult(diagnostics=diagnostics)


def validate_or_raise(
    data: dict[str, Any],
    version: str | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Diagnostic]:
    """Run validation; raises :class:`ValidationError` if any ERROR diagnostics exist.

    Returns the non-error diagnostics (warnings/info) when no errors are found.
    """
    result = validate(data, version=version, extra_rules=extra_rules)
    if not result.valid:
        raise ValidationError(result.errors)
    return result.diagnostics
