"""Rule and violation models."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Category(str, Enum):
    """Closed set of rule categories used for grouping and filtering."""

    TYPES = "types"
    STYLING = "styling"
    ACCESSIBILITY = "accessibility"
    COMPOSITION = "composition"
    STATE = "state"
    NAMING = "naming"


class Severity(str, Enum):
    """Advisory severity shown in reports. Does not affect scoring."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class Violation:
    """A single failure reported by a rule detector."""

    rule_id: str
    message: str
    line: int | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "line": self.line,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True, slots=True)
class RuleExample:
    """Illustrative bad/good snippets for documentation."""

    bad: str
    good: str


Check = Callable[[str], list[Violation]]


@dataclass(frozen=True, slots=True)
class Rule:
    """A named, weighted detector plus its documentation."""

    rule_id: str
    name: str
    description: str
    category: Category
    severity: Severity
    weight: int
    check: Check
    example: RuleExample

    def __post_init__(self) -> None:
        if not self.rule_id:
            raise ValueError("rule_id must be a non-empty string")
        if self.weight <= 0:
            raise ValueError(f"Rule '{self.rule_id}' weight must be positive, got {self.weight}")

    def evaluate(self, code: str) -> list[Violation]:
        """Run the detector against source text."""
        return list(self.check(code))

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "severity": self.severity.value,
            "weight": self.weight,
            "example": {"bad": self.example.bad, "good": self.example.good},
        }
