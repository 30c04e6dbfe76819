"""Accessibility rules.

Tag-level checks look only inside a single opening tag span (``<tag ...>``),
so attributes spread from elsewhere are invisible to them.
"""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import (
    LineLocator,
    TagMatch,
    count_matches,
    find_line_number,
    has_attribute,
    iter_tags,
)

_KEY_HANDLER = re.compile(r"onKey(?:Down|Up|Press)")
_ICON_ONLY_CONTENT = re.compile(r"\s*<(?:svg|Icon|\w+Icon)[^>]*/>\s*</button>")
_HIDDEN_TEXT = re.compile(r"sr-only|visually-hidden")
_ROLE_BUTTON = re.compile(r"role=[\"']button[\"']")
_ROLE_NAVIGATION = re.compile(r"role=[\"']navigation[\"']")
_LABEL_ATTRIBUTE = re.compile(r"aria-label=|aria-labelledby=|(?<![\w-])id=")
_FOCUS_UTILITY = re.compile(r"(?<![\w-])focus:(?:ring|outline)[\w-]*")
_FOCUS_VISIBLE = "focus-visible:"
_ZOOM_LOCKS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"user-scalable\s*=\s*(?:no|0)\b"), "user-scalable=no"),
    (re.compile(r"maximum-scale\s*=\s*1(?:\.0+)?(?![\d.])"), "maximum-scale=1"),
)


def check_button_has_type(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for tag in iter_tags(code, "button"):
        if has_attribute(tag.text, "type"):
            continue
        violations.append(
            Violation(
                rule_id="button-has-type",
                message="Button element missing type attribute",
                line=locator.line_of(tag.text, tag.start),
                suggestion='Add type="button" or type="submit"',
            )
        )
    return violations


def check_interactive_has_keyboard(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for tag in iter_tags(code, "div|span"):
        if "onClick" not in tag.text:
            continue
        line = locator.line_of(tag.text, tag.start)
        if not _KEY_HANDLER.search(tag.text):
            violations.append(
                Violation(
                    rule_id="interactive-has-keyboard",
                    message="Interactive element with onClick needs keyboard handler",
                    line=line,
                    suggestion=(
                        "Add onKeyDown handler for Enter/Space activation, or use a <button>"
                    ),
                )
            )
        if not has_attribute(tag.text, "role"):
            violations.append(
                Violation(
                    rule_id="interactive-has-keyboard",
                    message='Interactive element needs role="button"',
                    line=line,
                    suggestion='Add role="button" and tabIndex={0}',
                )
            )
    return violations


def _icon_only_buttons(code: str) -> list[TagMatch]:
    """Return ``<button ...>`` tags whose only content is a self-closing icon."""
    buttons: list[TagMatch] = []
    for tag in iter_tags(code, "button"):
        content = _ICON_ONLY_CONTENT.match(code, tag.start + len(tag.text))
        if content is not None:
            buttons.append(TagMatch(text=tag.text + content.group(0), start=tag.start))
    return buttons


def check_icon_button_has_label(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for button in _icon_only_buttons(code):
        if has_attribute(button.text, "aria-label") or _HIDDEN_TEXT.search(button.text):
            continue
        violations.append(
            Violation(
                rule_id="icon-button-has-label",
                message="Icon-only button needs aria-label for screen readers",
                line=locator.line_of(button.text, button.start),
                suggestion='Add aria-label="Description" to the button',
            )
        )
    return violations


def check_uses_semantic_html(code: str) -> list[Violation]:
    violations: list[Violation] = []
    divs = [tag.text for tag in iter_tags(code, "div")]
    if any(_ROLE_BUTTON.search(tag) for tag in divs):
        violations.append(
            Violation(
                rule_id="uses-semantic-html",
                message='Use <button> instead of <div role="button">',
                suggestion="Replace with semantic <button> element",
            )
        )
    if any(_ROLE_NAVIGATION.search(tag) for tag in divs):
        violations.append(
            Violation(
                rule_id="uses-semantic-html",
                message='Use <nav> instead of <div role="navigation">',
                suggestion="Replace with semantic <nav> element",
            )
        )
    return violations


def check_aria_expanded_with_controls(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for tag in iter_tags(code):
        if "aria-expanded" not in tag.text or has_attribute(tag.text, "aria-controls"):
            continue
        violations.append(
            Violation(
                rule_id="aria-expanded-with-controls",
                message="Element with aria-expanded should have aria-controls",
                line=locator.line_of(tag.text, tag.start),
                suggestion='Add aria-controls="content-id" pointing to the expandable content',
            )
        )
    return violations


def check_input_has_label(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for tag in iter_tags(code, r"input\b"):
        if not has_attribute(tag.text, "placeholder") or _LABEL_ATTRIBUTE.search(tag.text):
            continue
        violations.append(
            Violation(
                rule_id="input-has-label",
                message="Input relies on placeholder text as its only label",
                line=locator.line_of(tag.text, tag.start),
                suggestion=(
                    'Add aria-label="..." or an id referenced by <label htmlFor="...">'
                ),
            )
        )
    return violations


def check_uses_focus_visible(code: str) -> list[Violation]:
    focus_utilities = count_matches(_FOCUS_UTILITY, code)
    if not focus_utilities or _FOCUS_VISIBLE in code:
        return []
    return [
        Violation(
            rule_id="uses-focus-visible",
            message=(
                f"Found {len(focus_utilities)} focus: ring/outline utilities without any "
                "focus-visible: styles"
            ),
            line=find_line_number(code, focus_utilities[0]),
            suggestion=(
                "Use focus-visible:ring-2 focus-visible:ring-ring so focus rings only show "
                "for keyboard users"
            ),
        )
    ]


def check_allows_zoom(code: str) -> list[Violation]:
    violations: list[Violation] = []
    for pattern, label in _ZOOM_LOCKS:
        match = pattern.search(code)
        if match is None:
            continue
        violations.append(
            Violation(
                rule_id="allows-zoom",
                message=f"Viewport disables user zoom ({label})",
                line=find_line_number(code, match.group(0)),
                suggestion="Remove user-scalable=no and maximum-scale=1 from the viewport meta",
            )
        )
    return violations


BUTTON_HAS_TYPE = Rule(
    rule_id="button-has-type",
    name="Button Has Type",
    description="Button elements must have an explicit type attribute",
    category=Category.ACCESSIBILITY,
    severity=Severity.ERROR,
    weight=10,
    check=check_button_has_type,
    example=RuleExample(
        bad="<button onClick={handleClick}>Click me</button>",
        good='<button type="button" onClick={handleClick}>Click me</button>',
    ),
)

INTERACTIVE_HAS_KEYBOARD = Rule(
    rule_id="interactive-has-keyboard",
    name="Interactive Elements Have Keyboard Support",
    description="Interactive non-button elements must have keyboard event handlers",
    category=Category.ACCESSIBILITY,
    severity=Severity.ERROR,
    weight=12,
    check=check_interactive_has_keyboard,
    example=RuleExample(
        bad="<div onClick={handleClick}>Click me</div>",
        good="""<div
  role="button"
  tabIndex={0}
  onClick={handleClick}
  onKeyDown={(e) => e.key === 'Enter' && handleClick()}
>Click me</div>""",
    ),
)

ICON_BUTTON_HAS_LABEL = Rule(
    rule_id="icon-button-has-label",
    name="Icon Buttons Have Labels",
    description="Icon-only buttons must have aria-label or visually hidden text",
    category=Category.ACCESSIBILITY,
    severity=Severity.ERROR,
    weight=12,
    check=check_icon_button_has_label,
    example=RuleExample(
        bad="<button><TrashIcon /></button>",
        good='<button aria-label="Delete item"><TrashIcon aria-hidden="true" /></button>',
    ),
)

USES_SEMANTIC_HTML = Rule(
    rule_id="uses-semantic-html",
    name="Uses Semantic HTML",
    description="Use semantic HTML elements instead of divs with roles",
    category=Category.ACCESSIBILITY,
    severity=Severity.WARNING,
    weight=5,
    check=check_uses_semantic_html,
    example=RuleExample(
        bad='<div role="button" onClick={handleClick}>Click</div>',
        good="<button onClick={handleClick}>Click</button>",
    ),
)

ARIA_EXPANDED_WITH_CONTROLS = Rule(
    rule_id="aria-expanded-with-controls",
    name="aria-expanded Has aria-controls",
    description=(
        "Elements with aria-expanded should have aria-controls pointing to the controlled element"
    ),
    category=Category.ACCESSIBILITY,
    severity=Severity.WARNING,
    weight=5,
    check=check_aria_expanded_with_controls,
    example=RuleExample(
        bad="<button aria-expanded={isOpen}>Toggle</button>",
        good="""<button aria-expanded={isOpen} aria-controls="panel-1">Toggle</button>
<div id="panel-1">{content}</div>""",
    ),
)

INPUT_HAS_LABEL = Rule(
    rule_id="input-has-label",
    name="Inputs Have Labels",
    description="Inputs must not rely on placeholder text as their only label",
    category=Category.ACCESSIBILITY,
    severity=Severity.ERROR,
    weight=10,
    check=check_input_has_label,
    example=RuleExample(
        bad='<input placeholder="Email" />',
        good="""<label htmlFor="email">Email</label>
<input id="email" placeholder="you@example.com" />""",
    ),
)

USES_FOCUS_VISIBLE = Rule(
    rule_id="uses-focus-visible",
    name="Uses focus-visible",
    description="Focus indicators should target keyboard focus with focus-visible",
    category=Category.ACCESSIBILITY,
    severity=Severity.WARNING,
    weight=5,
    check=check_uses_focus_visible,
    example=RuleExample(
        bad='<button className="focus:outline-none focus:ring-2">Save</button>',
        good='<button className="focus-visible:outline-none focus-visible:ring-2">Save</button>',
    ),
)

ALLOWS_ZOOM = Rule(
    rule_id="allows-zoom",
    name="Allows Zoom",
    description="Never disable pinch zoom with user-scalable=no or maximum-scale=1",
    category=Category.ACCESSIBILITY,
    severity=Severity.ERROR,
    weight=8,
    check=check_allows_zoom,
    example=RuleExample(
        bad='<meta name="viewport" content="width=device-width, maximum-scale=1, user-scalable=no" />',
        good='<meta name="viewport" content="width=device-width, initial-scale=1" />',
    ),
)
