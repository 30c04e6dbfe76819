"""Class-name composition rules."""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import (
    LineLocator,
    count_matches,
    find_line_number,
    is_string_literal,
    iter_calls,
    split_args,
)

REPEAT_THRESHOLD = 3

_CLASS_NAME_ATTR = "className="
_CN_CALL = re.compile(r"\bcn\(")
_CLASS_NAME_EXPRESSION = "className={"
_TEMPLATE_CLASS_NAME = re.compile(r"className=\{`")
_CLASS_NAME_NOT_LAST = re.compile(r"\bclassName\s*,")
_LEADING_IDENTIFIER = re.compile(r"^[a-zA-Z]")
_NON_EMPTY_LITERAL = re.compile(r"^['\"][^'\"]+['\"]")
_CONDITIONAL_CLASS = re.compile(r"\w\s*&&\s*['\"][^'\"]*['\"]")
_VARIANT_CALL = re.compile(r"\wVariants?\(")

_REPEATED_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"focus-visible:outline-none\s+focus-visible:ring"), "focus ring"),
    (re.compile(r"disabled:pointer-events-none\s+disabled:opacity"), "disabled state"),
    (re.compile(r"transition-(?:all|colors|opacity|transform)"), "transition"),
)


def check_uses_cn_utility(code: str) -> list[Violation]:
    if _CLASS_NAME_ATTR not in code or _CN_CALL.search(code):
        return []
    if not (_has_ternary_class_name(code) or _TEMPLATE_CLASS_NAME.search(code)):
        return []
    return [
        Violation(
            rule_id="uses-cn-utility",
            message=(
                "Use cn() utility for conditional class names instead of template "
                "literals or ternaries"
            ),
            suggestion=(
                "Import cn from @/lib/utils and use cn(baseClasses, conditionalClasses, className)"
            ),
        )
    ]


def check_class_order(code: str) -> list[Violation]:
    """Check argument order inside each ``cn(...)`` call.

    Expected order: base literals, variant calls, conditionals, ``className``.
    """
    violations: list[Violation] = []
    locator = LineLocator(code)
    for call in iter_calls(code, "cn"):
        line = locator.line_of(call.text, call.start)
        args = split_args(call.args)

        if _CLASS_NAME_NOT_LAST.search(call.args):
            violations.append(
                Violation(
                    rule_id="class-order",
                    message="className should be the last argument in cn() to allow user overrides",
                    line=line,
                    suggestion=(
                        "Move className to the end: cn(baseClasses, variants, conditionals, "
                        "className)"
                    ),
                )
            )

        if args and _starts_with_expression(args[0]) and _has_later_literal(args):
            violations.append(
                Violation(
                    rule_id="class-order",
                    message="Base styles (string literals) should come before variables and conditionals",
                    line=line,
                    suggestion=(
                        'Order: cn("base-styles", variantStyles, conditional && "active", '
                        "className)"
                    ),
                )
            )

        if _conditional_precedes_variant(args):
            violations.append(
                Violation(
                    rule_id="class-order",
                    message="Variant styles should come before conditional styles",
                    line=line,
                    suggestion=(
                        'Order: cn("base", variants({ size }), isActive && "active", className)'
                    ),
                )
            )
    return violations


def check_extracts_repeated_patterns(code: str) -> list[Violation]:
    violations: list[Violation] = []
    for pattern, name in _REPEATED_PATTERNS:
        matches = count_matches(pattern, code)
        if len(matches) < REPEAT_THRESHOLD:
            continue
        utility_name = name.replace(" ", "", 1)
        violations.append(
            Violation(
                rule_id="extracts-repeated-patterns",
                message=(
                    f"The {name} pattern appears {len(matches)} times - consider extracting "
                    "to a shared utility"
                ),
                line=find_line_number(code, matches[0]),
                suggestion=(
                    f"Create a utility: export const {utility_name} = '{matches[0]}'; "
                    "and import it"
                ),
            )
        )
    return violations


def _has_ternary_class_name(code: str) -> bool:
    """True when a line has ``className={`` followed by ``?`` and then ``:``."""
    for line in code.split("\n"):
        start = line.find(_CLASS_NAME_EXPRESSION)
        if start == -1:
            continue
        question = line.find("?", start + len(_CLASS_NAME_EXPRESSION))
        if question != -1 and line.find(":", question + 1) != -1:
            return True
    return False


def _starts_with_expression(arg: str) -> bool:
    return bool(_LEADING_IDENTIFIER.match(arg)) and not is_string_literal(arg)


def _has_later_literal(args: list[str]) -> bool:
    return any(_NON_EMPTY_LITERAL.match(arg) for arg in args[1:])


def _conditional_precedes_variant(args: list[str]) -> bool:
    first_conditional: int | None = None
    for index, arg in enumerate(args):
        if first_conditional is None and _CONDITIONAL_CLASS.search(arg):
            first_conditional = index
            continue
        if first_conditional is not None and _VARIANT_CALL.search(arg):
            return True
    return False


USES_CN_UTILITY = Rule(
    rule_id="uses-cn-utility",
    name="Uses cn() Utility",
    description="Use the cn() utility for class merging (clsx + tailwind-merge)",
    category=Category.STYLING,
    severity=Severity.WARNING,
    weight=8,
    check=check_uses_cn_utility,
    example=RuleExample(
        bad="className={`base-class ${isActive ? 'active' : ''}`}",
        good="className={cn('base-class', isActive && 'active', className)}",
    ),
)

CLASS_ORDER = Rule(
    rule_id="class-order",
    name="Class Order",
    description=(
        "Classes should be ordered: base, variants, conditionals, user overrides (className last)"
    ),
    category=Category.STYLING,
    severity=Severity.WARNING,
    weight=5,
    check=check_class_order,
    example=RuleExample(
        bad="""cn(className, 'base-styles', isActive && 'active')
cn(isActive && 'active', 'base-styles')""",
        good="""cn(
  'base-styles',            // 1. Base (always applied)
  variants({ size }),       // 2. Variants (based on props)
  isActive && 'active',     // 3. Conditionals (based on state)
  className                 // 4. User overrides (last!)
)""",
    ),
)

EXTRACTS_REPEATED_PATTERNS = Rule(
    rule_id="extracts-repeated-patterns",
    name="Extracts Repeated Patterns",
    description="Repeated style patterns should be extracted into shared utilities",
    category=Category.STYLING,
    severity=Severity.INFO,
    weight=3,
    check=check_extracts_repeated_patterns,
    example=RuleExample(
        bad="""// Same focus ring copied everywhere
<Button className="focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-blue-500" />
<Input className="focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-blue-500" />""",
        good="""// utils/styles.ts
export const focusRing = 'focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-ring';
export const disabled = 'disabled:pointer-events-none disabled:opacity-50';

// In components
<Button className={cn(focusRing, disabled, className)} />""",
    ),
)
