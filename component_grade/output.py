"""Output rendering."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from types import MappingProxyType
from typing import Any

import click

from component_grade import __version__
from component_grade.rules import CATEGORY_TITLES, rule_by_id
from component_grade.rules.base import Category, Rule, Severity, Violation
from component_grade.scoring import COMPLIANCE_THRESHOLD, GradeResult, is_compliant

SEVERITY_MARKERS: MappingProxyType[Severity, str] = MappingProxyType(
    {
        Severity.ERROR: "🔴",
        Severity.WARNING: "🟡",
        Severity.INFO: "🔵",
    }
)


def render_markdown(result: GradeResult, *, verbose: bool = False) -> str:
    """Render a full grade report as markdown.

    With ``verbose`` each violation is followed by the rule's good example.
    """
    lines: list[str] = [
        f"# Component Grade: {result.grade} ({result.score}/100)",
        "",
        result.summary,
        "",
    ]

    if result.violations:
        lines.append(f"## Violations ({len(result.violations)})")
        lines.append("")
        for violation in result.violations:
            rule = rule_by_id(violation.rule_id)
            lines.append(f"### ❌ {rule.name if rule is not None else violation.rule_id}")
            lines.append(f"- **Message:** {violation.message}")
            if violation.line is not None:
                lines.append(f"- **Line:** {violation.line}")
            if violation.suggestion:
                lines.append(f"- **Suggestion:** {violation.suggestion}")
            lines.append("")
            if verbose and rule is not None:
                lines.extend(["**Good example:**", "```tsx", rule.example.good, "```", ""])

    if result.passes:
        lines.append(f"## Passed Rules ({len(result.passes)})")
        lines.append("")
        lines.extend(f"✅ {rule_id}" for rule_id in result.passes)
        lines.append("")
    return "\n".join(lines)


def render_human(result: GradeResult, *, source: str | None = None) -> str:
    """Render a compact colorized summary."""
    color = _grade_color(result.score)
    heading = f"Grade {result.grade} ({result.score}/100)"
    if source:
        heading = f"{source}: {heading}"
    lines: list[str] = [click.style(heading, fg=color, bold=True), result.summary]

    if result.violations:
        lines.append(click.style("Violations:", bold=True))
        for index, violation in enumerate(result.violations, start=1):
            location = f" (line {violation.line})" if violation.line is not None else ""
            marker = _severity_marker(violation)
            lines.append(f"{index}. {marker} [{violation.rule_id}]{location} {violation.message}")
            if violation.suggestion:
                lines.append(f"   fix: {violation.suggestion}")
    return "\n".join(lines)


def render_json(result: GradeResult, *, input_source: str | None = None) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(result, input_source=input_source), sort_keys=True)


def build_json_payload(
    result: GradeResult,
    *,
    input_source: str | None = None,
    threshold: int = COMPLIANCE_THRESHOLD,
) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    return {
        "score": result.score,
        "grade": result.grade,
        "compliant": is_compliant(result, threshold),
        "summary": result.summary,
        "violations": [_serialize_violation(item) for item in result.violations],
        "passes": list(result.passes),
        "meta": {
            "input_source": input_source,
            "threshold": threshold,
            "version": __version__,
        },
    }


def render_compliance(result: GradeResult, *, threshold: int = COMPLIANCE_THRESHOLD) -> str:
    """Render the pass/fail compliance report."""
    status = "✅ COMPLIANT" if is_compliant(result, threshold) else "❌ NOT COMPLIANT"
    lines: list[str] = [
        f"# {status}",
        "",
        f"**Score:** {result.score}/100 ({result.grade})",
        f"**Threshold:** {threshold}/100",
        "",
    ]
    if result.violations:
        lines.append(f"## Issues to Fix ({len(result.violations)})")
        for violation in result.violations:
            fix = f" → {violation.suggestion}" if violation.suggestion else ""
            lines.append(f"- {violation.message}{fix}")
    else:
        lines.append("## All checks passed!")
    lines.append("")
    return "\n".join(lines)


def render_rule(rule: Rule) -> str:
    """Render a single rule's documentation page."""
    return "\n".join(
        [
            f"# {rule.name}",
            "",
            f"**ID:** `{rule.rule_id}`",
            f"**Category:** {rule.category.value}",
            f"**Severity:** {rule.severity.value}",
            f"**Weight:** {rule.weight}",
            "",
            "## Description",
            rule.description,
            "",
            "## Bad Example",
            "```tsx",
            rule.example.bad,
            "```",
            "",
            "## Good Example",
            "```tsx",
            rule.example.good,
            "```",
            "",
        ]
    )


def render_rule_list(rules: Sequence[Rule]) -> str:
    """Render rules grouped by category with severity markers."""
    grouped: dict[Category, list[Rule]] = {}
    for rule in rules:
        grouped.setdefault(rule.category, []).append(rule)

    lines: list[str] = ["# Available Rules", ""]
    for category, category_rules in grouped.items():
        lines.append(f"## {CATEGORY_TITLES[category]}")
        lines.append("")
        for rule in category_rules:
            lines.append(
                f"- {SEVERITY_MARKERS[rule.severity]} `{rule.rule_id}` - {rule.name} "
                f"(weight: {rule.weight})"
            )
        lines.append("")
    return "\n".join(lines)


def build_rules_payload(rules: Iterable[Rule]) -> dict[str, Any]:
    rule_list = list(rules)
    return {
        "rules": [rule.to_dict() for rule in rule_list],
        "meta": {
            "count": len(rule_list),
            "total_weight": sum(rule.weight for rule in rule_list),
            "version": __version__,
        },
    }


def _serialize_violation(violation: Violation) -> dict[str, Any]:
    payload = violation.to_dict()
    rule = rule_by_id(violation.rule_id)
    payload["severity"] = rule.severity.value if rule is not None else None
    return payload


def _severity_marker(violation: Violation) -> str:
    rule = rule_by_id(violation.rule_id)
    if rule is None:
        return "-"
    return SEVERITY_MARKERS[rule.severity]


def _grade_color(score: int) -> str:
    if score >= COMPLIANCE_THRESHOLD:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"
