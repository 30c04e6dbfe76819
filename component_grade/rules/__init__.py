"""Rule registry.

The catalogue is built once at import time and exposed only as tuples of
frozen rules, so lookups and evaluations can run concurrently without locks.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from component_grade.rules import accessibility, class_names, composition, props, state, tokens
from component_grade.rules import data_attributes
from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation

__all__ = [
    "CATEGORY_TITLES",
    "Category",
    "Rule",
    "RuleExample",
    "Severity",
    "Violation",
    "all_rules",
    "build_rules",
    "rule_by_id",
    "rules_by_category",
    "rules_summary",
    "rules_to_markdown",
]

CATEGORY_TITLES: MappingProxyType[Category, str] = MappingProxyType(
    {
        Category.TYPES: "Types",
        Category.STYLING: "Styling",
        Category.ACCESSIBILITY: "Accessibility",
        Category.COMPOSITION: "Composition",
        Category.STATE: "State",
        Category.NAMING: "Naming",
    }
)


def _ordered_rules() -> list[Rule]:
    return [
        props.EXTENDS_HTML_PROPS,
        props.EXPORTS_TYPES,
        props.PROPS_SPREAD_LAST,
        composition.SINGLE_ELEMENT_WRAP,
        class_names.USES_CN_UTILITY,
        class_names.CLASS_ORDER,
        tokens.USES_DESIGN_TOKENS,
        tokens.USES_SEMANTIC_TOKENS,
        data_attributes.HAS_DATA_SLOT,
        data_attributes.USES_DATA_STATE,
        accessibility.BUTTON_HAS_TYPE,
        accessibility.INTERACTIVE_HAS_KEYBOARD,
        accessibility.ICON_BUTTON_HAS_LABEL,
        accessibility.USES_SEMANTIC_HTML,
        accessibility.ARIA_EXPANDED_WITH_CONTROLS,
        state.SUPPORTS_CONTROLLED_UNCONTROLLED,
        composition.COMPOSABLE_NAMING,
        data_attributes.DATA_SLOT_NAMING,
        composition.SUPPORTS_AS_PROP,
        props.VARIANTS_DOCUMENTED,
        class_names.EXTRACTS_REPEATED_PATTERNS,
        accessibility.INPUT_HAS_LABEL,
        accessibility.USES_FOCUS_VISIBLE,
        accessibility.ALLOWS_ZOOM,
        props.AVOIDS_PROP_NAME_CONFLICTS,
    ]


def _build_registry(rules: Iterable[Rule]) -> tuple[Rule, ...]:
    seen: set[str] = set()
    ordered: list[Rule] = []
    for rule in rules:
        if rule.rule_id in seen:
            raise ValueError(f"Duplicate rule id: {rule.rule_id}")
        seen.add(rule.rule_id)
        ordered.append(rule)
    return tuple(ordered)


_REGISTRY = _build_registry(_ordered_rules())
_REGISTRY_BY_ID = MappingProxyType({rule.rule_id: rule for rule in _REGISTRY})


def all_rules() -> tuple[Rule, ...]:
    """Return the full catalogue in declaration order."""
    return _REGISTRY


def rules_by_category(category: Category | str) -> tuple[Rule, ...]:
    """Return rules in ``category``. Unknown categories yield an empty tuple."""
    resolved = _coerce_category(category)
    if resolved is None:
        return ()
    return tuple(rule for rule in _REGISTRY if rule.category is resolved)


def rule_by_id(rule_id: str) -> Rule | None:
    """Return the rule with ``rule_id`` or ``None``."""
    return _REGISTRY_BY_ID.get(rule_id)


def build_rules(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    categories: list[str] | None = None,
) -> tuple[Rule, ...]:
    """Select a configured subset of the catalogue, keeping registry order.

    Unlike the lookup functions, unknown ids and categories here are
    configuration mistakes and raise ``ValueError``.
    """
    requested_ids = set(enabled_rule_ids or []) | set(disabled_rule_ids or [])
    unknown = [rule_id for rule_id in requested_ids if rule_id not in _REGISTRY_BY_ID]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    category_filter: set[Category] | None = None
    if categories is not None:
        category_filter = set()
        unknown_categories: list[str] = []
        for item in categories:
            resolved = _coerce_category(item)
            if resolved is None:
                unknown_categories.append(item)
            else:
                category_filter.add(resolved)
        if unknown_categories:
            joined = ", ".join(sorted(set(unknown_categories)))
            raise ValueError(f"Unknown rule categories: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else None
    disabled_set = set(disabled_rule_ids or [])
    selected: list[Rule] = []
    for rule in _REGISTRY:
        if enabled_set is not None and rule.rule_id not in enabled_set:
            continue
        if rule.rule_id in disabled_set:
            continue
        if category_filter is not None and rule.category not in category_filter:
            continue
        selected.append(rule)
    return tuple(selected)


def rules_to_markdown(rules: Iterable[Rule] | None = None) -> str:
    """Render rules grouped by category with their bad/good examples."""
    selected = tuple(rules) if rules is not None else _REGISTRY
    lines: list[str] = [
        "# Component Rules Reference",
        "",
        "> Based on the components.build specification.",
        "",
        "---",
        "",
    ]
    for category in _categories_in_order(selected):
        lines.append(f"## {CATEGORY_TITLES[category]} Rules")
        lines.append("")
        for rule in selected:
            if rule.category is not category:
                continue
            lines.extend(
                [
                    f"### {rule.name}",
                    (
                        f"**ID:** `{rule.rule_id}` | **Severity:** {rule.severity.value} | "
                        f"**Weight:** {rule.weight}"
                    ),
                    "",
                    rule.description,
                    "",
                    "**Bad:**",
                    "```tsx",
                    rule.example.bad,
                    "```",
                    "",
                    "**Good:**",
                    "```tsx",
                    rule.example.good,
                    "```",
                    "",
                    "---",
                    "",
                ]
            )
    return "\n".join(lines)


def rules_summary(rules: Iterable[Rule] | None = None) -> str:
    """Render one bullet per rule."""
    selected = tuple(rules) if rules is not None else _REGISTRY
    return "\n".join(
        f"- **{rule.name}** (`{rule.rule_id}`): {rule.description}" for rule in selected
    )


def _categories_in_order(rules: tuple[Rule, ...]) -> list[Category]:
    ordered: list[Category] = []
    for rule in rules:
        if rule.category not in ordered:
            ordered.append(rule.category)
    return ordered


def _coerce_category(value: Category | str) -> Category | None:
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        return None
