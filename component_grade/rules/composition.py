"""Composition and naming rules."""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import find_closing_paren, paren_pairs

# Returned JSX may nest handler calls several levels deep.
RETURN_BODY_DEPTH = 32

_JSX_RETURN = re.compile(r"\breturn\s*\(\s*<")
_FRAGMENT = re.compile(r"<>|<React\.Fragment>|<Fragment>")


def check_single_element_wrap(code: str) -> list[Violation]:
    body = _first_returned_jsx(code)
    if body is None or not _FRAGMENT.search(body):
        return []
    return [
        Violation(
            rule_id="single-element-wrap",
            message=(
                "Component returns a fragment with multiple elements. Consider breaking into "
                "sub-components."
            ),
            suggestion="Use composable sub-components (Root, Header, Content, etc.)",
        )
    ]


def check_supports_as_prop(code: str) -> list[Violation]:
    """Informational only. Polymorphism cannot be judged from text alone."""
    _ = code
    return []


def check_composable_naming(code: str) -> list[Violation]:
    """Informational only. Part names are documented, never enforced."""
    _ = code
    return []


def _first_returned_jsx(code: str) -> str | None:
    pairs: dict[int, tuple[int, int]] | None = None
    # Bodies nested in an examined body without "</" cannot contain one either.
    examined_until = 0
    for match in _JSX_RETURN.finditer(code):
        if match.start() < examined_until:
            continue
        if pairs is None:
            pairs = paren_pairs(code)
        open_index = code.index("(", match.start())
        close = find_closing_paren(code, open_index, max_depth=RETURN_BODY_DEPTH, pairs=pairs)
        if close is None:
            continue
        if code.find("</", open_index + 1, close) != -1:
            return code[open_index + 1 : close]
        examined_until = close
    return None


SINGLE_ELEMENT_WRAP = Rule(
    rule_id="single-element-wrap",
    name="Single Element Wrapping",
    description="Each component should wrap a single HTML/JSX element for maximum composability",
    category=Category.COMPOSITION,
    severity=Severity.WARNING,
    weight=5,
    check=check_single_element_wrap,
    example=RuleExample(
        bad="""return (
  <>
    <div className="header">{title}</div>
    <div className="content">{content}</div>
  </>
);""",
        good="""// CardHeader.tsx
return <div className="header" {...props} />;

// CardContent.tsx
return <div className="content" {...props} />;""",
    ),
)

COMPOSABLE_NAMING = Rule(
    rule_id="composable-naming",
    name="Composable Naming Convention",
    description=(
        "Sub-components should follow naming conventions: Root, Trigger, Content, Header, "
        "Footer, Title, Description"
    ),
    category=Category.NAMING,
    severity=Severity.INFO,
    weight=3,
    check=check_composable_naming,
    example=RuleExample(
        bad="""export const AccordionContainer = ...
export const AccordionButton = ...
export const AccordionPanel = ...""",
        good="""export const Root = ...
export const Trigger = ...
export const Content = ...""",
    ),
)

SUPPORTS_AS_PROP = Rule(
    rule_id="supports-as-prop",
    name="Supports as/asChild Prop",
    description=(
        "Components that render interactive elements should support polymorphism via as or "
        "asChild prop"
    ),
    category=Category.COMPOSITION,
    severity=Severity.INFO,
    weight=3,
    check=check_supports_as_prop,
    example=RuleExample(
        bad="""// Only renders as button
<Button>Click</Button>""",
        good="""// Can render as link
<Button asChild>
  <a href="/home">Click</a>
</Button>""",
    ),
)
