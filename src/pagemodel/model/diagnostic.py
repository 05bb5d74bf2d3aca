"""Diagnostic model: structured findings from page model validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding about an assembled page model.

    Attributes:
        rule: Identifier for the validation rule that produced this diagnostic.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        path: JSON-style location of the offending value, e.g.
            ``nodes[0].children[2].styles``.
        fix: Suggested remediation, if available.
    """

    rule: str
    severity: Severity
    message: str
    path: str | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [{self.path}]" if self.path else ""
        return f"{self.severity.value}{location}: {self.message}"
