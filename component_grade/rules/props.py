"""Prop typing rules."""

from __future__ import annotations

import re
from bisect import bisect_left

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import LineLocator, iter_tags

_PROPS_TYPE_ALIAS = re.compile(r"type\s+\w+Props\s*=")
_PROPS_INTERFACE = re.compile(r"interface\s+\w+Props")
_COMPONENT_PROPS = re.compile(r"ComponentProps<['\"`]\w+['\"`]>")
_IMPORT_LINE = re.compile(r"^import\s+.*$", re.MULTILINE)
_PROPS_DECLARATION = re.compile(r"(?:type|interface)\s+(\w+Props)")
_EXPORTED_DECLARATION = re.compile(r"export\s+(?:type|interface)\s+(\w+)")
_SPREAD_PROPS = "{...props}"
_ASSIGNED_ATTRIBUTE = re.compile(r"\w=")
_VARIANT_UNION = re.compile(r"(?:variant|size)\??\s*:\s*['\"][^'\"]+['\"]\s*\|")
_JSDOC_OPEN = "/**"
_JSDOC_BEFORE_PROPS = re.compile(r"\*/\s*(?:export\s+)?(?:type|interface)\s+\w+Props")
_INLINE_JSDOC_TAG = re.compile(r"@(?:default|description)")
_EXTENDED_PROPS_BODY = re.compile(r"ComponentProps<['\"`](\w+)['\"`]>\s*&\s*\{([^{}]*)\}")
_CONFLICTING_PROP = re.compile(
    r"^[ \t]*(title|color|hidden|translate)\??\s*:", re.MULTILINE
)


def check_extends_html_props(code: str) -> list[Violation]:
    has_props_type = bool(_PROPS_TYPE_ALIAS.search(code) or _PROPS_INTERFACE.search(code))
    if not has_props_type or _COMPONENT_PROPS.search(code):
        return []
    return [
        Violation(
            rule_id="extends-html-props",
            message='Component props should extend React.ComponentProps<"element">',
            suggestion='Add React.ComponentProps<"div"> or appropriate element type',
        )
    ]


def check_exports_types(code: str) -> list[Violation]:
    # Imported names like `type VariantProps` are not declarations.
    declarations = _IMPORT_LINE.sub("", code)
    exported = sorted({match.group(1) for match in _EXPORTED_DECLARATION.finditer(code)})
    violations: list[Violation] = []
    for match in _PROPS_DECLARATION.finditer(declarations):
        type_name = match.group(1)
        if not _exported_with_prefix(exported, type_name):
            violations.append(
                Violation(
                    rule_id="exports-types",
                    message=f'Type "{type_name}" should be exported',
                    suggestion='Add "export" before the type definition',
                )
            )
    return violations


def check_props_spread_last(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for tag in iter_tags(code):
        if _SPREAD_PROPS not in tag.text:
            continue
        after_spread = tag.text.split(_SPREAD_PROPS, 1)[1]
        if _ASSIGNED_ATTRIBUTE.search(after_spread):
            violations.append(
                Violation(
                    rule_id="props-spread-last",
                    message="Props are defined after {...props}, which prevents user overrides",
                    line=locator.line_of(tag.text, tag.start),
                    suggestion="Move {...props} to the end of the element",
                )
            )
    return violations


def check_variants_documented(code: str) -> list[Violation]:
    if not _VARIANT_UNION.search(code):
        return []
    if _has_jsdoc_before_props(code) or _INLINE_JSDOC_TAG.search(code):
        return []
    return [
        Violation(
            rule_id="variants-documented",
            message="Variant props should have JSDoc comments",
            suggestion='Add /** @default "primary" */ or descriptive comments above variant props',
        )
    ]


def check_avoids_prop_name_conflicts(code: str) -> list[Violation]:
    violations: list[Violation] = []
    locator = LineLocator(code)
    for match in _EXTENDED_PROPS_BODY.finditer(code):
        element, body = match.group(1), match.group(2)
        for prop in _CONFLICTING_PROP.finditer(body):
            name = prop.group(1)
            violations.append(
                Violation(
                    rule_id="avoids-prop-name-conflicts",
                    message=(
                        f'Custom prop "{name}" shadows the native "{name}" attribute '
                        f"of <{element}>"
                    ),
                    line=locator.line_of(match.group(0), match.start()),
                    suggestion=f'Rename "{name}" to something specific, e.g. "heading" for "title"',
                )
            )
    return violations


def _exported_with_prefix(exported: list[str], type_name: str) -> bool:
    """True when a sorted exported name starts with ``type_name``."""
    index = bisect_left(exported, type_name)
    return index < len(exported) and exported[index].startswith(type_name)


def _has_jsdoc_before_props(code: str) -> bool:
    start = code.find(_JSDOC_OPEN)
    if start == -1:
        return False
    return _JSDOC_BEFORE_PROPS.search(code, start + len(_JSDOC_OPEN)) is not None


EXTENDS_HTML_PROPS = Rule(
    rule_id="extends-html-props",
    name="Extend HTML Props",
    description="Components must extend native HTML attributes using React.ComponentProps",
    category=Category.TYPES,
    severity=Severity.ERROR,
    weight=15,
    check=check_extends_html_props,
    example=RuleExample(
        bad="""type ButtonProps = {
  variant?: 'primary' | 'secondary';
  onClick?: () => void;
};""",
        good="""type ButtonProps = React.ComponentProps<'button'> & {
  variant?: 'primary' | 'secondary';
};""",
    ),
)

EXPORTS_TYPES = Rule(
    rule_id="exports-types",
    name="Export Types",
    description="Component prop types must be exported",
    category=Category.TYPES,
    severity=Severity.ERROR,
    weight=10,
    check=check_exports_types,
    example=RuleExample(
        bad="type ButtonProps = React.ComponentProps<'button'>;",
        good="export type ButtonProps = React.ComponentProps<'button'>;",
    ),
)

PROPS_SPREAD_LAST = Rule(
    rule_id="props-spread-last",
    name="Props Spread Last",
    description="Spread props (...props) must come last on the element to allow user overrides",
    category=Category.TYPES,
    severity=Severity.ERROR,
    weight=10,
    check=check_props_spread_last,
    example=RuleExample(
        bad='<div {...props} className="default-class" />',
        good='<div className="default-class" {...props} />',
    ),
)

VARIANTS_DOCUMENTED = Rule(
    rule_id="variants-documented",
    name="Variants Are Documented",
    description="Variant props should have JSDoc comments explaining their purpose",
    category=Category.TYPES,
    severity=Severity.INFO,
    weight=3,
    check=check_variants_documented,
    example=RuleExample(
        bad="""type ButtonProps = {
  variant?: 'primary' | 'secondary';
  size?: 'sm' | 'md' | 'lg';
};""",
        good="""type ButtonProps = {
  /**
   * The visual style of the button
   * @default "primary"
   */
  variant?: 'primary' | 'secondary';
  /**
   * The size of the button
   * @default "md"
   */
  size?: 'sm' | 'md' | 'lg';
};""",
    ),
)

AVOIDS_PROP_NAME_CONFLICTS = Rule(
    rule_id="avoids-prop-name-conflicts",
    name="Avoid Prop Name Conflicts",
    description="Custom props should not reuse the names of native HTML attributes",
    category=Category.TYPES,
    severity=Severity.WARNING,
    weight=5,
    check=check_avoids_prop_name_conflicts,
    example=RuleExample(
        bad="""export type CardProps = React.ComponentProps<'div'> & {
  title: string;
};""",
        good="""export type CardProps = React.ComponentProps<'div'> & {
  heading: string;
};""",
    ),
)
