"""Design-token rules for colours and theming."""

from __future__ import annotations

import re

from component_grade.rules.base import Category, Rule, RuleExample, Severity, Violation
from component_grade.rules.patterns import count_matches, find_line_number, iter_spans

HARDCODED_THRESHOLD = 3

_PALETTE = (
    "red|blue|green|yellow|purple|pink|gray|slate|zinc|neutral|stone|amber|lime|"
    "emerald|teal|cyan|sky|indigo|violet|fuchsia|rose"
)
_NEUTRAL_PALETTE = "gray|slate|zinc|neutral|stone"

_ARBITRARY_HEX = re.compile(r"(?:bg|text|border|fill|stroke)-\[#[0-9A-Fa-f]{3,8}(?:/\d+)?\]")
_DARK_MODE_HEX = re.compile(r"dark:(?:bg|text|border)-\[#[0-9A-Fa-f]{3,8}")
_PALETTE_UTILITY = re.compile(rf"(?:bg|text|border)-(?:{_PALETTE})-\d{{2,3}}")
_HEX_IN_STYLE = re.compile(
    r"(?:color|background|backgroundColor|borderColor|fill|stroke)\s*:\s*[\"']#[0-9A-Fa-f]{3,8}[\"']"
)
_HEX_IN_CONFIG = re.compile(r"(?<!\w)\w+\s*:\s*[\"']#[0-9A-Fa-f]{3,8}[\"']")
_RGB_HSL_OPEN = r"(?:rgb|rgba|hsl|hsla)\s*\("

SEMANTIC_TOKENS = (
    "background",
    "foreground",
    "primary",
    "primary-foreground",
    "secondary",
    "secondary-foreground",
    "muted",
    "muted-foreground",
    "accent",
    "accent-foreground",
    "destructive",
    "destructive-foreground",
    "border",
    "input",
    "ring",
    "card",
    "card-foreground",
    "popover",
    "popover-foreground",
)

_CLASS_NAME_ATTR = "className="
_COLOR_PREFIX = re.compile(r"bg-|text-|border-")
_WHITE_BLACK_TRANSPARENT = re.compile(r"(?:bg|text|border)-(?:white|black|transparent)")
_NEUTRAL_UTILITY = re.compile(rf"(?:bg|text|border)-(?:{_NEUTRAL_PALETTE})-\d{{2,3}}")
_WHITE_BLACK = re.compile(r"(?:bg|text|border)-(?:white|black)")
_SEMANTIC_UTILITY = re.compile(
    "(?:bg|text|border)-(?:"
    + "|".join(re.escape(token) for token in SEMANTIC_TOKENS)
    + ")"
)
_CSS_VAR = re.compile(r"var\(--[\w-]+\)")
_COLOR_NAMED_VAR = re.compile(r"--(?:red|blue|green|yellow|purple|pink|gray|white|black|color-\d)")

_SEMANTIC_TOKEN_GUIDE = """Replace bg-white → bg-background, text-black → text-foreground, bg-gray-100 → bg-muted, etc.

Semantic tokens to use:
- background/foreground: Page background and main text
- primary/primary-foreground: Brand color and its text
- secondary/secondary-foreground: Secondary actions
- muted/muted-foreground: Subtle backgrounds and text
- accent/accent-foreground: Highlights
- destructive/destructive-foreground: Errors/warnings
- border, input, ring: Borders and focus states
- card/card-foreground: Card surfaces"""


def _color_functions(code: str) -> list[str]:
    """Return ``rgb(...)``-style calls with non-empty arguments."""
    return [
        code[match.start() : close + 1]
        for match, close in iter_spans(code, _RGB_HSL_OPEN, ")")
        if close > match.end()
    ]


def _has_colored_class_name(code: str) -> bool:
    """True when a color utility prefix follows ``className=`` on the same line."""
    for line in code.split("\n"):
        start = line.find(_CLASS_NAME_ATTR)
        if start != -1 and _COLOR_PREFIX.search(line, start + len(_CLASS_NAME_ATTR)):
            return True
    return False


def check_uses_design_tokens(code: str) -> list[Violation]:
    violations: list[Violation] = []

    arbitrary_hex = count_matches(_ARBITRARY_HEX, code)
    if arbitrary_hex:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=(
                    f"Found {len(arbitrary_hex)} hardcoded hex color(s) in Tailwind arbitrary "
                    f"values: {', '.join(arbitrary_hex[:3])}"
                ),
                line=find_line_number(code, arbitrary_hex[0]),
                suggestion=(
                    "Use CSS variables instead: bg-[var(--custom-color)] or define semantic "
                    "tokens.\n\n"
                    "Bad:  bg-[#5B9BD5] text-[#2B5BA8] dark:bg-[#5B9BD5]/10\n"
                    "Good: bg-primary text-primary-foreground (with CSS vars handling dark mode)"
                ),
            )
        )

    dark_overrides = count_matches(_DARK_MODE_HEX, code)
    if dark_overrides:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=(
                    f"Found {len(dark_overrides)} manual dark mode color overrides - this "
                    "should be handled by CSS variables"
                ),
                line=find_line_number(code, dark_overrides[0]),
                suggestion=(
                    "Instead of: bg-[#5B9BD5] dark:bg-[#7BA3D9]\n"
                    "Use: bg-[var(--brand-color)] where --brand-color changes in .dark"
                ),
            )
        )

    if len(count_matches(_PALETTE_UTILITY, code)) > HARDCODED_THRESHOLD:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=(
                    "Consider using semantic design tokens (primary, secondary, destructive) "
                    "instead of hardcoded Tailwind colors"
                ),
                suggestion="Use bg-primary, text-foreground, border-border, etc.",
            )
        )

    style_hex = count_matches(_HEX_IN_STYLE, code)
    if style_hex:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=f"Found {len(style_hex)} hardcoded hex color(s) in style objects",
                line=find_line_number(code, style_hex[0]),
                suggestion=(
                    'Use CSS variables: style={{ color: "var(--primary)" }} or define as CSS '
                    "custom properties"
                ),
            )
        )

    # Quoted custom-property keys such as "--primary": "#fff" are definitions.
    config_hex = [item for item in count_matches(_HEX_IN_CONFIG, code) if "--" not in item]
    if len(config_hex) > HARDCODED_THRESHOLD:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=f"Found {len(config_hex)} hardcoded hex colors in config/variables",
                suggestion=(
                    'Define colors as CSS variables: "--palette-primary": "#8B5CF6" then use '
                    "var(--palette-primary)"
                ),
            )
        )

    rgb_hsl = _color_functions(code)
    if len(rgb_hsl) > HARDCODED_THRESHOLD:
        violations.append(
            Violation(
                rule_id="uses-design-tokens",
                message=f"Found {len(rgb_hsl)} hardcoded rgb/hsl colors",
                suggestion="Use CSS variables for colors to enable theming",
            )
        )

    return violations


def check_uses_semantic_tokens(code: str) -> list[Violation]:
    violations: list[Violation] = []

    if _has_colored_class_name(code):
        non_semantic = len(count_matches(_WHITE_BLACK_TRANSPARENT, code)) + len(
            count_matches(_NEUTRAL_UTILITY, code)
        )
        if non_semantic > HARDCODED_THRESHOLD and not _SEMANTIC_UTILITY.search(code):
            violations.append(
                Violation(
                    rule_id="uses-semantic-tokens",
                    message=(
                        "Use semantic design tokens instead of color names for better theming "
                        "support"
                    ),
                    suggestion=_SEMANTIC_TOKEN_GUIDE,
                )
            )

        white_black = count_matches(_WHITE_BLACK, code)
        if white_black:
            violations.append(
                Violation(
                    rule_id="uses-semantic-tokens",
                    message=(
                        f"Found {len(white_black)} uses of bg-white/black - these break dark mode"
                    ),
                    line=find_line_number(code, white_black[0]),
                    suggestion="bg-white → bg-background or bg-card, text-black → text-foreground",
                )
            )

    color_named = [item for item in count_matches(_CSS_VAR, code) if _COLOR_NAMED_VAR.search(item)]
    if color_named:
        violations.append(
            Violation(
                rule_id="uses-semantic-tokens",
                message=(
                    "Found CSS variables with color names instead of semantic names: "
                    f"{', '.join(color_named[:3])}"
                ),
                line=find_line_number(code, color_named[0]),
                suggestion=(
                    "Use semantic names: --primary instead of --blue, --destructive instead "
                    "of --red"
                ),
            )
        )

    return violations


USES_DESIGN_TOKENS = Rule(
    rule_id="uses-design-tokens",
    name="Uses Design Tokens",
    description="Use CSS variables/design tokens instead of hardcoded colors",
    category=Category.STYLING,
    severity=Severity.WARNING,
    weight=5,
    check=check_uses_design_tokens,
    example=RuleExample(
        bad="""<Badge className="bg-[#5B9BD5]/20 text-[#2B5BA8] dark:bg-[#5B9BD5]/10 dark:text-[#7BA3D9]">
const config = { primary: "#8B5CF6" };""",
        good="""const config = { "--primary": "#8B5CF6" };
<div style={config as React.CSSProperties} className="text-[var(--primary)]">""",
    ),
)

USES_SEMANTIC_TOKENS = Rule(
    rule_id="uses-semantic-tokens",
    name="Uses Semantic Design Tokens",
    description=(
        "Use semantic token names (background, foreground, primary) instead of color names"
    ),
    category=Category.STYLING,
    severity=Severity.WARNING,
    weight=8,
    check=check_uses_semantic_tokens,
    example=RuleExample(
        bad="""// Hardcoded colors break dark mode
<div className="bg-white text-black border-gray-200">
  <button className="bg-blue-500 text-white">Click</button>
</div>""",
        good="""// Semantic tokens adapt to theme
<div className="bg-background text-foreground border-border">
  <button className="bg-primary text-primary-foreground">Click</button>
</div>

/* In globals.css */
:root {
  --background: oklch(1 0 0);
  --foreground: oklch(0.145 0 0);
  --primary: oklch(0.205 0 0);
  --primary-foreground: oklch(0.985 0 0);
}
.dark {
  --background: oklch(0.145 0 0);
  --foreground: oklch(0.985 0 0);
}""",
    ),
)
