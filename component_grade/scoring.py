"""Grading orchestration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from component_grade.rules import all_rules
from component_grade.rules.base import Rule, Severity, Violation

logger = logging.getLogger(__name__)

# Consumers treat scores at or above this value as compliant.
COMPLIANCE_THRESHOLD = 80

GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "B+"),
    (80, "B"),
    (75, "C+"),
    (70, "C"),
    (65, "D+"),
    (60, "D"),
)
FAILING_GRADE = "F"


@dataclass(frozen=True, slots=True)
class GradeResult:
    """Outcome of running a rule set against one source text."""

    score: int
    grade: str
    violations: tuple[Violation, ...]
    passes: tuple[str, ...]
    summary: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "violations": [item.to_dict() for item in self.violations],
            "passes": list(self.passes),
            "summary": self.summary,
        }


def grade(code: str, rules: Sequence[Rule] | None = None) -> GradeResult:
    """Grade component source text.

    Each failing rule costs its full weight no matter how many violations it
    reports. Never raises for string input.
    """
    active_rules = tuple(rules) if rules is not None else all_rules()
    total_weight = sum(rule.weight for rule in active_rules)
    lost_points = 0
    violations: list[Violation] = []
    passes: list[str] = []

    for rule in active_rules:
        rule_violations = rule.evaluate(code)
        if not rule_violations:
            passes.append(rule.rule_id)
            continue
        logger.debug("Rule %s reported %d violation(s)", rule.rule_id, len(rule_violations))
        violations.extend(rule_violations)
        lost_points += rule.weight

    score = compute_score(total_weight=total_weight, lost_points=lost_points)
    letter = letter_grade(score)
    summary = build_summary(
        score=score,
        grade=letter,
        passes=len(passes),
        violations=violations,
        rules=active_rules,
    )
    logger.debug("Graded %d characters: %s", len(code), summary)
    return GradeResult(
        score=score,
        grade=letter,
        violations=tuple(violations),
        passes=tuple(passes),
        summary=summary,
    )


def grade_many(
    sources: Iterable[str],
    rules: Sequence[Rule] | None = None,
    *,
    max_workers: int | None = None,
) -> list[GradeResult]:
    """Grade several sources concurrently, returning results in input order."""
    active_rules = tuple(rules) if rules is not None else all_rules()
    items = list(sources)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda code: grade(code, active_rules), items))


def compute_score(*, total_weight: int, lost_points: int) -> int:
    """Return the 0-100 share of weight kept, rounded half up.

    Integer arithmetic keeps ``.5`` boundaries exact.
    """
    if total_weight <= 0:
        return 100
    kept = max(0, total_weight - lost_points)
    return (200 * kept + total_weight) // (2 * total_weight)


def letter_grade(score: int) -> str:
    for threshold, letter in GRADE_BANDS:
        if score >= threshold:
            return letter
    return FAILING_GRADE


def is_compliant(result: GradeResult, threshold: int = COMPLIANCE_THRESHOLD) -> bool:
    return result.score >= threshold


def build_summary(
    *,
    score: int,
    grade: str,
    passes: int,
    violations: Iterable[Violation],
    rules: Iterable[Rule],
) -> str:
    """Format the one-line digest of a grading run."""
    severity_by_id = {rule.rule_id: rule.severity for rule in rules}
    errors = 0
    warnings = 0
    for violation in violations:
        severity = severity_by_id.get(violation.rule_id)
        if severity is Severity.ERROR:
            errors += 1
        elif severity is Severity.WARNING:
            warnings += 1
    return (
        f"Score: {score}/100 ({grade}) | {passes} passed | {errors} errors | "
        f"{warnings} warnings"
    )
