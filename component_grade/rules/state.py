"""State management rules."""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation

_USE_STATE = "useState"
_DEFAULT_VALUE = "defaultValue"
_CHANGE_HANDLER = re.compile(r"onValueChange|onChange")


def check_supports_controlled_uncontrolled(code: str) -> list[Violation]:
    if _USE_STATE not in code:
        return []
    if _DEFAULT_VALUE in code or _CHANGE_HANDLER.search(code):
        return []
    return [
        Violation(
            rule_id="supports-controlled-uncontrolled",
            message="Stateful component should support controlled usage",
            suggestion=(
                "Add value, defaultValue, and onValueChange props. Consider using "
                "useControllableState."
            ),
        )
    ]


SUPPORTS_CONTROLLED_UNCONTROLLED = Rule(
    rule_id="supports-controlled-uncontrolled",
    name="Supports Controlled and Uncontrolled",
    description="Stateful components should support both controlled and uncontrolled usage",
    category=Category.STATE,
    severity=Severity.INFO,
    weight=5,
    check=check_supports_controlled_uncontrolled,
    example=RuleExample(
        bad="""const Stepper = () => {
  const [value, setValue] = useState(0);
  return <div>{value}</div>;
};""",
        good="""const Stepper = ({ value: controlledValue, defaultValue, onValueChange }) => {
  const [value, setValue] = useControllableState({
    prop: controlledValue,
    defaultProp: defaultValue,
    onChange: onValueChange,
  });
  return <div>{value}</div>;
};""",
    ),
)
