"""data-* attribute rules."""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import LineLocator, is_camel_case, to_kebab_case

_EXPORTED_COMPONENT = re.compile(r"export\s+(?:const|function)")
_JSX_ELEMENT = re.compile(r"<\w+")
_DATA_SLOT_ATTR = "data-slot="
_OPEN_STATE = re.compile(r"isOpen|open|setOpen")
_ACTIVE_STATE = re.compile(r"isActive|active|setActive")
_DATA_STATE_ATTR = "data-state="
_DATA_SLOT_VALUE = re.compile(r"data-slot=[\"']([^\"']+)[\"']")


def check_has_data_slot(code: str) -> list[Violation]:
    is_component = bool(_EXPORTED_COMPONENT.search(code) and _JSX_ELEMENT.search(code))
    if not is_component or _DATA_SLOT_ATTR in code:
        return []
    return [
        Violation(
            rule_id="has-data-slot",
            message="Component should have a data-slot attribute for identification",
            suggestion='Add data-slot="component-name" to the root element',
        )
    ]


def check_uses_data_state(code: str) -> list[Violation]:
    has_state = bool(_OPEN_STATE.search(code) or _ACTIVE_STATE.search(code))
    if not has_state or _DATA_STATE_ATTR in code:
        return []
    return [
        Violation(
            rule_id="uses-data-state",
            message="Component has state that could be exposed via data-state attribute",
            suggestion='Add data-state={isOpen ? "open" : "closed"} for styling hooks',
        )
    ]


def check_data_slot_naming(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for match in _DATA_SLOT_VALUE.finditer(code):
        value = match.group(1)
        if not is_camel_case(value):
            continue
        violations.append(
            Violation(
                rule_id="data-slot-naming",
                message=f'data-slot value "{value}" should use kebab-case',
                line=locator.line_of(match.group(0), match.start()),
                suggestion=f'Change to "{to_kebab_case(value)}"',
            )
        )
    return violations


HAS_DATA_SLOT = Rule(
    rule_id="has-data-slot",
    name="Has data-slot Attribute",
    description="Components should have a data-slot attribute for parent-aware styling",
    category=Category.STYLING,
    severity=Severity.WARNING,
    weight=8,
    check=check_has_data_slot,
    example=RuleExample(
        bad='<div className="card" {...props} />',
        good='<div data-slot="card" className="card" {...props} />',
    ),
)

USES_DATA_STATE = Rule(
    rule_id="uses-data-state",
    name="Uses data-state for Visual States",
    description="Use data-state attribute to expose component state for styling",
    category=Category.STYLING,
    severity=Severity.INFO,
    weight=3,
    check=check_uses_data_state,
    example=RuleExample(
        bad="<div className={isOpen ? 'opacity-100' : 'opacity-0'} />",
        good=(
            "<div data-state={isOpen ? 'open' : 'closed'} "
            'className="data-[state=open]:opacity-100 data-[state=closed]:opacity-0" />'
        ),
    ),
)

DATA_SLOT_NAMING = Rule(
    rule_id="data-slot-naming",
    name="data-slot Naming Convention",
    description="data-slot values should use kebab-case and be descriptive",
    category=Category.NAMING,
    severity=Severity.INFO,
    weight=2,
    check=check_data_slot_naming,
    example=RuleExample(
        bad='data-slot="cardHeader"',
        good='data-slot="card-header"',
    ),
)
