"""Detector tests for each rule in the catalogue."""

from __future__ import annotations

from component_grade.rules import accessibility, class_names, composition, props, state, tokens
from component_grade.rules import all_rules, data_attributes
from component_grade.rules.base import Violation


def test_extends_html_props_flags_plain_props_type() -> None:
    violations = props.check_extends_html_props("type FooProps = { variant?: string }")
    assert _ids(violations) == ["extends-html-props"]


def test_extends_html_props_accepts_component_props_extension() -> None:
    code = "export type FooProps = React.ComponentProps<'div'> & { variant?: string }"
    assert props.check_extends_html_props(code) == []
    assert props.check_exports_types(code) == []


def test_extends_html_props_ignores_code_without_props_type() -> None:
    assert props.check_extends_html_props("const value = 1;") == []


def test_exports_types_reports_each_unexported_props_type() -> None:
    code = "\n".join(
        [
            "type CardProps = React.ComponentProps<'div'>;",
            "interface CardTitleProps {}",
            "export type CardFooterProps = React.ComponentProps<'div'>;",
        ]
    )
    violations = props.check_exports_types(code)
    assert [item.message for item in violations] == [
        'Type "CardProps" should be exported',
        'Type "CardTitleProps" should be exported',
    ]


def test_exports_types_ignores_imported_type_names() -> None:
    code = "\n".join(
        [
            'import { type VariantProps } from "class-variance-authority";',
            "export type ButtonProps = React.ComponentProps<'button'>;",
        ]
    )
    assert props.check_exports_types(code) == []


def test_exports_types_accepts_exported_name_sharing_the_prefix() -> None:
    code = "\n".join(
        [
            "type ButtonProps = React.ComponentProps<'button'>;",
            "export type ButtonPropsWithRef = ButtonProps & { ref?: unknown };",
            "type CardProps = React.ComponentProps<'div'>;",
            "export type Card = CardProps;",
        ]
    )
    violations = props.check_exports_types(code)
    assert [item.message for item in violations] == ['Type "CardProps" should be exported']


def test_props_spread_last_flags_attributes_after_spread() -> None:
    code = "\n".join(["const a = 1;", '<div {...props} className="card" />'])
    violations = props.check_props_spread_last(code)
    assert _ids(violations) == ["props-spread-last"]
    assert violations[0].line == 2


def test_props_spread_last_accepts_trailing_spread() -> None:
    assert props.check_props_spread_last('<div className="card" {...props} />') == []


def test_variants_documented_requires_jsdoc_for_variant_unions() -> None:
    code = 'export type ButtonProps = { variant?: "primary" | "ghost" }'
    assert _ids(props.check_variants_documented(code)) == ["variants-documented"]


def test_variants_documented_accepts_jsdoc_before_props_type() -> None:
    code = "\n".join(
        [
            "/** Button sizing. */",
            'export type ButtonProps = { size?: "sm" | "lg" }',
        ]
    )
    assert props.check_variants_documented(code) == []


def test_variants_documented_accepts_inline_default_tag() -> None:
    code = "\n".join(
        [
            "export type ButtonProps = {",
            '  /** @default "sm" */',
            '  size?: "sm" | "lg";',
            "};",
        ]
    )
    assert props.check_variants_documented(code) == []


def test_avoids_prop_name_conflicts_flags_shadowed_native_attribute() -> None:
    code = "\n".join(
        [
            'export type CardProps = React.ComponentProps<"div"> & {',
            "  title?: string;",
            "};",
        ]
    )
    violations = props.check_avoids_prop_name_conflicts(code)
    assert _ids(violations) == ["avoids-prop-name-conflicts"]
    assert '"title"' in violations[0].message
    assert "<div>" in violations[0].message
    assert violations[0].line == 1


def test_avoids_prop_name_conflicts_accepts_distinct_names() -> None:
    code = 'export type CardProps = React.ComponentProps<"div"> & { heading?: string; }'
    assert props.check_avoids_prop_name_conflicts(code) == []


def test_uses_cn_utility_flags_ternary_and_template_class_names() -> None:
    ternary = '<div className={isActive ? "on" : "off"} />'
    template = "<div className={`base ${extra}`} />"
    assert _ids(class_names.check_uses_cn_utility(ternary)) == ["uses-cn-utility"]
    assert _ids(class_names.check_uses_cn_utility(template)) == ["uses-cn-utility"]


def test_uses_cn_utility_passes_when_cn_is_used() -> None:
    code = '<div className={cn("base", isActive ? "on" : "off")} />'
    assert class_names.check_uses_cn_utility(code) == []


def test_class_order_flags_expression_before_literal() -> None:
    violations = class_names.check_class_order("cn(isActive && 'active', 'base')")
    assert _ids(violations) == ["class-order"]
    assert "Base styles" in violations[0].message


def test_class_order_flags_class_name_before_other_arguments() -> None:
    violations = class_names.check_class_order('cn("base", className, isActive && "on")')
    assert len(violations) == 1
    assert "className should be the last argument" in violations[0].message


def test_class_order_flags_conditional_before_variant_call() -> None:
    code = 'cn("base", isActive && "on", buttonVariants({ size }), className)'
    violations = class_names.check_class_order(code)
    assert len(violations) == 1
    assert "Variant styles" in violations[0].message


def test_class_order_accepts_expected_order() -> None:
    code = 'cn("base", buttonVariants({ size }), isActive && "on", className)'
    assert class_names.check_class_order(code) == []


def test_class_order_skips_calls_nested_too_deeply() -> None:
    assert class_names.check_class_order("cn(a(b(c())), 'x')") == []


def test_extracts_repeated_patterns_needs_three_occurrences() -> None:
    twice = '<a className="transition-colors" /><b className="transition-colors" />'
    thrice = twice + '<i className="transition-colors" />'
    assert class_names.check_extracts_repeated_patterns(twice) == []
    violations = class_names.check_extracts_repeated_patterns(thrice)
    assert _ids(violations) == ["extracts-repeated-patterns"]
    assert "transition pattern appears 3 times" in violations[0].message


def test_uses_design_tokens_flags_arbitrary_hex_values() -> None:
    code = '<span className="bg-[#5B9BD5] text-[#2B5BA8]" />'
    violations = tokens.check_uses_design_tokens(code)
    assert _ids(violations) == ["uses-design-tokens"]
    assert violations[0].message.startswith("Found 2 hardcoded hex color(s)")


def test_uses_design_tokens_flags_many_palette_utilities() -> None:
    code = '<div className="bg-red-500 text-blue-600 border-green-200 bg-slate-100" />'
    violations = tokens.check_uses_design_tokens(code)
    assert len(violations) == 1
    assert "semantic design tokens" in violations[0].message


def test_uses_design_tokens_accepts_semantic_classes() -> None:
    code = '<div className="bg-primary text-primary-foreground border-border" />'
    assert tokens.check_uses_design_tokens(code) == []


def test_uses_semantic_tokens_flags_white_and_black() -> None:
    violations = tokens.check_uses_semantic_tokens('<div className="bg-white text-black" />')
    assert len(violations) == 1
    assert violations[0].message == "Found 2 uses of bg-white/black - these break dark mode"


def test_uses_semantic_tokens_flags_color_named_css_variables() -> None:
    code = '<div style={{ color: "var(--blue-500)" }} />'
    violations = tokens.check_uses_semantic_tokens(code)
    assert _ids(violations) == ["uses-semantic-tokens"]
    assert "var(--blue-500)" in violations[0].message


def test_uses_semantic_tokens_accepts_semantic_classes() -> None:
    code = '<div className="bg-background text-foreground" />'
    assert tokens.check_uses_semantic_tokens(code) == []


def test_uses_design_tokens_counts_rgb_and_hsl_with_arguments() -> None:
    colors = "rgb(0 0 0) rgba(1, 2, 3, 0.5) hsl(10 20% 30%) hsla (1 2% 3% / 1)"
    violations = tokens.check_uses_design_tokens(f"const palette = `{colors}`;")
    assert [item.message for item in violations] == ["Found 4 hardcoded rgb/hsl colors"]
    assert tokens.check_uses_design_tokens("rgb() rgb() rgb() rgb() rgb(1)") == []


def test_uses_design_tokens_counts_hex_values_in_config_objects() -> None:
    code = "\n".join(
        ["const colors = {", *[f'  shade{index}: "#00000{index}",' for index in range(4)], "};"]
    )
    violations = tokens.check_uses_design_tokens(code)
    assert [item.message for item in violations] == [
        "Found 4 hardcoded hex colors in config/variables"
    ]


def test_uses_semantic_tokens_needs_color_class_on_the_class_name_line() -> None:
    split = '<div className="p-4"\n  data-color="bg-white text-black" />'
    assert tokens.check_uses_semantic_tokens(split) == []


def test_has_data_slot_flags_exported_component_without_slot() -> None:
    code = 'export const Card = () => <div className="card" />;'
    assert _ids(data_attributes.check_has_data_slot(code)) == ["has-data-slot"]


def test_has_data_slot_ignores_non_components_and_slotted_components() -> None:
    assert data_attributes.check_has_data_slot("const value = 1;") == []
    code = 'export const Card = () => <div data-slot="card" />;'
    assert data_attributes.check_has_data_slot(code) == []


def test_uses_data_state_flags_unexposed_state() -> None:
    code = "const [isOpen, setIsOpen] = useState(false);"
    assert _ids(data_attributes.check_uses_data_state(code)) == ["uses-data-state"]
    exposed = code + '\n<div data-state={isOpen ? "open" : "closed"} />'
    assert data_attributes.check_uses_data_state(exposed) == []


def test_data_slot_naming_suggests_kebab_case() -> None:
    violations = data_attributes.check_data_slot_naming('<div data-slot="cardHeader" />')
    assert _ids(violations) == ["data-slot-naming"]
    assert violations[0].suggestion == 'Change to "card-header"'
    assert data_attributes.check_data_slot_naming('<div data-slot="card-header" />') == []


def test_button_has_type_reports_each_untyped_button() -> None:
    code = "\n".join(["<button>One</button>", '<button type="button">Two</button>', "<button>"])
    violations = accessibility.check_button_has_type(code)
    assert [item.line for item in violations] == [1, 1]
    assert _ids(violations) == ["button-has-type", "button-has-type"]


def test_button_has_type_accepts_typed_button() -> None:
    assert accessibility.check_button_has_type('<button type="submit">Go</button>') == []


def test_interactive_has_keyboard_reports_missing_handler_and_role() -> None:
    violations = accessibility.check_interactive_has_keyboard("<div onClick={go}>Go</div>")
    assert [item.message for item in violations] == [
        "Interactive element with onClick needs keyboard handler",
        'Interactive element needs role="button"',
    ]


def test_interactive_has_keyboard_accepts_full_keyboard_support() -> None:
    code = '<span role="button" tabIndex={0} onKeyDown={onKey} onClick={go}>Go</span>'
    assert accessibility.check_interactive_has_keyboard(code) == []


def test_icon_button_has_label_requires_accessible_name() -> None:
    bare = '<button type="button"><XIcon /></button>'
    labelled = '<button type="button" aria-label="Close"><svg /></button>'
    assert _ids(accessibility.check_icon_button_has_label(bare)) == ["icon-button-has-label"]
    assert accessibility.check_icon_button_has_label(labelled) == []


def test_uses_semantic_html_flags_role_substitutes() -> None:
    code = '<div role="button">A</div><div role="navigation">B</div>'
    violations = accessibility.check_uses_semantic_html(code)
    assert [item.message for item in violations] == [
        'Use <button> instead of <div role="button">',
        'Use <nav> instead of <div role="navigation">',
    ]


def test_icon_button_has_label_reports_first_matching_line() -> None:
    code = "\n".join(
        [
            "<div>",
            '<button type="button">\n  <TrashIcon />\n</button>',
            '<button type="button">Ok</button>',
        ]
    )
    violations = accessibility.check_icon_button_has_label(code)
    assert _ids(violations) == ["icon-button-has-label"]
    assert violations[0].line == 2


def test_uses_semantic_html_ignores_roles_outside_div_tags() -> None:
    code = '<span role="button">A</span><div className="x">role="navigation"</div>'
    assert accessibility.check_uses_semantic_html(code) == []


def test_aria_expanded_with_controls() -> None:
    missing = '<button type="button" aria-expanded={expanded}>Menu</button>'
    present = '<button type="button" aria-expanded={expanded} aria-controls="menu">Menu</button>'
    assert _ids(accessibility.check_aria_expanded_with_controls(missing)) == [
        "aria-expanded-with-controls"
    ]
    assert accessibility.check_aria_expanded_with_controls(present) == []


def test_input_has_label_flags_placeholder_only_inputs() -> None:
    assert _ids(accessibility.check_input_has_label('<input placeholder="Email" />')) == [
        "input-has-label"
    ]
    assert accessibility.check_input_has_label('<input id="email" placeholder="Email" />') == []
    assert (
        accessibility.check_input_has_label('<input aria-label="Email" placeholder="Email" />')
        == []
    )


def test_input_has_label_ignores_test_ids() -> None:
    code = '<input data-testid="email" placeholder="Email" />'
    assert _ids(accessibility.check_input_has_label(code)) == ["input-has-label"]


def test_uses_focus_visible() -> None:
    assert _ids(accessibility.check_uses_focus_visible('<a className="focus:ring-2" />')) == [
        "uses-focus-visible"
    ]
    assert accessibility.check_uses_focus_visible('<a className="focus-visible:ring-2" />') == []


def test_allows_zoom_flags_each_zoom_lock() -> None:
    locked = (
        '<meta name="viewport" '
        'content="width=device-width, initial-scale=1, maximum-scale=1, user-scalable=no" />'
    )
    open_viewport = '<meta name="viewport" content="width=device-width, initial-scale=1" />'
    assert len(accessibility.check_allows_zoom(locked)) == 2
    assert accessibility.check_allows_zoom(open_viewport) == []
    assert accessibility.check_allows_zoom('content="maximum-scale=1.5"') == []


def test_single_element_wrap_flags_fragment_return() -> None:
    code = "\n".join(
        [
            "function Card() {",
            "  return (",
            "    <>",
            "      <div>a</div>",
            "      <div>b</div>",
            "    </>",
            "  );",
            "}",
        ]
    )
    assert _ids(composition.check_single_element_wrap(code)) == ["single-element-wrap"]


def test_single_element_wrap_accepts_single_root() -> None:
    code = "function Card() {\n  return (\n    <div>\n      <span>a</span>\n    </div>\n  );\n}"
    assert composition.check_single_element_wrap(code) == []


def test_informational_composition_rules_never_fire() -> None:
    code = "export const AccordionContainer = () => <button>x</button>;"
    assert composition.check_composable_naming(code) == []
    assert composition.check_supports_as_prop(code) == []


def test_supports_controlled_uncontrolled() -> None:
    uncontrolled = "const [value, setValue] = useState(0);"
    assert _ids(state.check_supports_controlled_uncontrolled(uncontrolled)) == [
        "supports-controlled-uncontrolled"
    ]
    controlled = uncontrolled + "\nconst { defaultValue, onValueChange } = props;"
    assert state.check_supports_controlled_uncontrolled(controlled) == []


def test_every_rule_returns_nothing_for_empty_text() -> None:
    for rule in all_rules():
        assert rule.evaluate("") == []


def _ids(violations: list[Violation]) -> list[str]:
    return [item.rule_id for item in violations]
