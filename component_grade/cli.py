"""CLI entrypoint for component-grade."""

from __future__ import annotations

import fnmatch
import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Literal

import typer

from component_grade import __version__
from component_grade.config import AppConfig, default_config_template, load_app_config
from component_grade.output import (
    build_json_payload,
    build_rules_payload,
    render_compliance,
    render_human,
    render_markdown,
    render_rule,
    render_rule_list,
)
from component_grade.rules import all_rules, build_rules, rule_by_id, rules_by_category
from component_grade.rules import rules_summary, rules_to_markdown
from component_grade.rules.base import Category, Rule
from component_grade.scoring import COMPLIANCE_THRESHOLD, GradeResult, grade_many, is_compliant

logger = logging.getLogger(__name__)

LOG_LEVELS = ("debug", "info", "warning", "error")

app = typer.Typer(
    name="component-grade",
    no_args_is_help=True,
    help="Grade UI component source against a fixed catalogue of component rules.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level on stderr: debug|info|warning|error."),
    ] = None,
) -> None:
    """Root command callback."""
    _ = version
    if log_level is None:
        return
    resolved = log_level.lower()
    if resolved not in LOG_LEVELS:
        choices = ", ".join(LOG_LEVELS)
        raise typer.BadParameter(f"log level must be one of: {choices}", param_hint="--log-level")
    logging.basicConfig(
        level=resolved.upper(),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("component_grade").setLevel(resolved.upper())


@app.command("grade")
def grade_command(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Component files or directories to grade."),
    ] = None,
    stdin: Annotated[bool, typer.Option(help="Read component source from stdin.")] = False,
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    format: Annotated[
        str | None,
        typer.Option(help="Output format: human|markdown|json.", show_default="human"),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--no-verbose", help="Include good examples in markdown."),
    ] = None,
    fail_below: Annotated[
        int | None, typer.Option(help="Exit nonzero if any score is below this value.")
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Grade components and print a report."""
    app_config = _load_config_or_raise(repo, config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in {"human", "markdown", "json"}:
        raise typer.BadParameter(
            "format must be one of: human, json, markdown", param_hint="--format"
        )

    sources = _resolve_sources(paths=paths, stdin=stdin, app_config=app_config)
    rules = _build_configured_rules_or_raise(app_config)
    results = _grade_sources(sources, rules)
    resolved_verbose = verbose if verbose is not None else app_config.verbose
    fail_threshold = fail_below if fail_below is not None else app_config.fail_below
    compliance_threshold = fail_threshold if fail_threshold is not None else COMPLIANCE_THRESHOLD

    if output_format == "json":
        payloads = [
            build_json_payload(result, input_source=label, threshold=compliance_threshold)
            for (label, _code), result in zip(sources, results, strict=True)
        ]
        body = payloads[0] if len(payloads) == 1 else {"results": payloads}
        typer.echo(json.dumps(body, sort_keys=True))
    elif output_format == "markdown":
        blocks: list[str] = []
        for (label, _code), result in zip(sources, results, strict=True):
            report = render_markdown(result, verbose=resolved_verbose)
            if len(sources) > 1:
                report = f"<!-- {label} -->\n{report}"
            blocks.append(report)
        typer.echo("\n---\n\n".join(blocks))
    else:
        typer.echo(
            "\n\n".join(
                render_human(result, source=label if len(sources) > 1 else None)
                for (label, _code), result in zip(sources, results, strict=True)
            )
        )

    if fail_threshold is not None and any(result.score < fail_threshold for result in results):
        raise typer.Exit(code=1)


@app.command("check")
def check_command(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(help="Component files or directories to check."),
    ] = None,
    stdin: Annotated[bool, typer.Option(help="Read component source from stdin.")] = False,
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    threshold: Annotated[
        int,
        typer.Option(help="Minimum compliant score.", min=0, max=100),
    ] = COMPLIANCE_THRESHOLD,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Report whether components meet the compliance threshold."""
    app_config = _load_config_or_raise(repo, config_file)
    sources = _resolve_sources(paths=paths, stdin=stdin, app_config=app_config)
    rules = _build_configured_rules_or_raise(app_config)
    results = _grade_sources(sources, rules)

    blocks: list[str] = []
    for (label, _code), result in zip(sources, results, strict=True):
        report = render_compliance(result, threshold=threshold)
        if len(sources) > 1:
            report = f"<!-- {label} -->\n{report}"
        blocks.append(report)
    typer.echo("\n".join(blocks))

    if not all(is_compliant(result, threshold) for result in results):
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    category: Annotated[
        str | None, typer.Option(help="Only list rules in this category.")
    ] = None,
    format: Annotated[
        Literal["list", "markdown", "summary", "json"],
        typer.Option(help="Output format."),
    ] = "list",
) -> None:
    """List the rule catalogue."""
    rules = _rules_for_category_or_raise(category)

    if format == "json":
        typer.echo(json.dumps(build_rules_payload(rules), sort_keys=True))
    elif format == "markdown":
        typer.echo(rules_to_markdown(rules))
    elif format == "summary":
        typer.echo(rules_summary(rules))
    else:
        typer.echo(render_rule_list(rules))


@app.command("rule")
def rule_command(
    rule_id: Annotated[str, typer.Argument(help="Rule id, for example button-has-type.")],
    format: Annotated[
        Literal["markdown", "json"],
        typer.Option(help="Output format."),
    ] = "markdown",
) -> None:
    """Show documentation for one rule."""
    rule = rule_by_id(rule_id)
    if rule is None:
        available = "\n".join(f"- {item.rule_id}" for item in all_rules())
        typer.echo(f"Rule not found: {rule_id}\n\nAvailable rules:\n{available}", err=True)
        raise typer.Exit(code=1)

    if format == "json":
        typer.echo(json.dumps(rule.to_dict(), sort_keys=True))
        return
    typer.echo(render_rule(rule))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Project path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    active_rules = _build_configured_rules_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = [rule.rule_id for rule in active_rules]

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- fail_below: {payload['fail_below']}",
        f"- verbose: {payload['verbose']}",
        f"- include: {payload['include']}",
        f"- exclude: {payload['exclude']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- rules.categories: {payload['rules']['categories']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".component-grade.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Project path.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".component-grade.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report active rules."""
    output_format = format.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    app_config = _load_config_or_raise(repo, config_file)
    active_rules = _build_configured_rules_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "active_rule_ids": [rule.rule_id for rule in active_rules],
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- active_rule_ids: {payload['active_rule_ids']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _resolve_sources(
    *,
    paths: list[Path] | None,
    stdin: bool,
    app_config: AppConfig,
) -> list[tuple[str, str]]:
    if paths and stdin:
        raise typer.BadParameter("Use either PATHS or --stdin, not both.")
    if stdin:
        return [("stdin", sys.stdin.read())]
    if not paths:
        raise typer.BadParameter("Provide at least one component path or use --stdin.")

    sources: list[tuple[str, str]] = []
    for path in paths:
        if path.is_dir():
            matched = _expand_directory(
                path, includes=app_config.include, excludes=app_config.exclude
            )
            logger.debug("Expanded %s to %d file(s)", path, len(matched))
            sources.extend((str(item), _read_source(item)) for item in matched)
        elif path.is_file():
            sources.append((str(path), _read_source(path)))
        else:
            raise typer.BadParameter(f"Path does not exist: {path}")

    if not sources:
        raise typer.BadParameter("No component files matched the include/exclude patterns.")
    return sources


def _expand_directory(root: Path, *, includes: list[str], excludes: list[str]) -> list[Path]:
    matched: list[Path] = []
    for candidate in sorted(root.rglob("*")):
        if not candidate.is_file():
            continue
        relative = candidate.relative_to(root).as_posix()
        if includes and not _matches_any(relative, includes):
            continue
        if excludes and _matches_any(relative, excludes):
            continue
        matched.append(candidate)
    return matched


def _matches_any(path: str, patterns: list[str]) -> bool:
    for pattern in patterns:
        if fnmatch.fnmatch(path, pattern):
            return True
        # "**/" also matches files at the top of the tree.
        if pattern.startswith("**/") and fnmatch.fnmatch(path, pattern[3:]):
            return True
    return False


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise typer.BadParameter(f"Could not read {path}: {exc}") from exc


def _grade_sources(sources: list[tuple[str, str]], rules: tuple[Rule, ...]) -> list[GradeResult]:
    logger.info("Grading %d source(s) with %d rule(s)", len(sources), len(rules))
    return grade_many((code for _label, code in sources), rules)


def _rules_for_category_or_raise(category: str | None) -> tuple[Rule, ...]:
    if category is None:
        return all_rules()
    selected = rules_by_category(category)
    if not selected:
        choices = ", ".join(item.value for item in Category)
        raise typer.BadParameter(
            f"category must be one of: {choices}", param_hint="--category"
        )
    return selected


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> tuple[Rule, ...]:
    try:
        return build_rules(
            enabled_rule_ids=app_config.rules.enable,
            disabled_rule_ids=app_config.rules.disable,
            categories=app_config.rules.categories,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc
