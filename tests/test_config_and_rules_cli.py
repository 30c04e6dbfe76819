"""Tests for config loading and the rules/config CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from component_grade.cli import app
from component_grade.config import (
    DEFAULT_EXCLUDE,
    DEFAULT_INCLUDE,
    default_config_template,
    load_app_config,
)

runner = CliRunner()


def test_load_app_config_prefers_dot_file_over_pyproject(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "pyproject.toml").write_text(
        "\n".join(
            [
                "[tool.component_grade]",
                'format = "human"',
                "fail_below = 50",
            ]
        ),
        encoding="utf-8",
    )
    (repo / ".component-grade.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                "fail_below = 85",
                "verbose = true",
                'include = ["src/**/*.tsx"]',
                "",
                "[rules]",
                'enable = ["button-has-type", "class-order"]',
                'disable = ["class-order"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(repo)
    assert config.format == "json"
    assert config.fail_below == 85
    assert config.verbose is True
    assert config.include == ["src/**/*.tsx"]
    assert config.exclude == list(DEFAULT_EXCLUDE)
    assert config.rules.enable == ["button-has-type", "class-order"]
    assert config.rules.disable == ["class-order"]
    assert config.rules.categories is None
    assert config.source == str(repo / ".component-grade.toml")


def test_load_app_config_reads_pyproject_hyphenated_key(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "pyproject.toml").write_text(
        "\n".join(
            [
                '[tool."component-grade"]',
                'format = "markdown"',
                "",
                '[tool."component-grade".rules]',
                'categories = ["accessibility"]',
            ]
        ),
        encoding="utf-8",
    )

    config = load_app_config(repo)
    assert config.format == "markdown"
    assert config.rules.categories == ["accessibility"]
    assert config.source == str(repo / "pyproject.toml")


def test_load_app_config_defaults_without_files(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "ui"\n', encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.format == "human"
    assert config.fail_below is None
    assert config.include == list(DEFAULT_INCLUDE)
    assert config.source is None


def test_load_app_config_explicit_path_wins(tmp_path: Path) -> None:
    (tmp_path / ".component-grade.toml").write_text('format = "json"\n', encoding="utf-8")
    custom = tmp_path / "ci.toml"
    custom.write_text('format = "markdown"\n', encoding="utf-8")

    config = load_app_config(tmp_path, config_path=Path("ci.toml"))
    assert config.format == "markdown"
    assert config.source == str(custom)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('fail_below = "high"', "fail_below must be an integer"),
        ("fail_below = 120", "fail_below must be between 0 and 100"),
        ('format = "xml"', "format must be one of: human, json, markdown"),
        ('verbose = "yes"', "verbose must be a boolean"),
        ('include = "src"', "include must be a list of strings"),
        ('rules = "all"', "rules must be a table/object"),
        ("[rules]\nenable = [1]", "rules.enable must be a list of strings"),
        ("format = ", "Invalid TOML"),
    ],
)
def test_load_app_config_rejects_invalid_values(
    tmp_path: Path, content: str, message: str
) -> None:
    (tmp_path / ".component-grade.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_load_app_config_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config file does not exist"):
        load_app_config(tmp_path, config_path=Path("absent.toml"))


def test_default_config_template_is_loadable(tmp_path: Path) -> None:
    (tmp_path / ".component-grade.toml").write_text(default_config_template(), encoding="utf-8")
    config = load_app_config(tmp_path)
    assert config.format == "markdown"
    assert config.fail_below == 80
    assert config.rules.disable == ["composable-naming", "supports-as-prop"]


def test_rules_command_json_lists_catalogue() -> None:
    result = runner.invoke(app, ["rules", "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["rules"]) == 25
    assert payload["meta"]["total_weight"] == 168


def test_rules_command_filters_by_category() -> None:
    result = runner.invoke(app, ["rules", "--category", "state"])
    assert result.exit_code == 0
    assert "`supports-controlled-uncontrolled`" in result.stdout
    assert "`button-has-type`" not in result.stdout


def test_rules_command_rejects_unknown_category() -> None:
    result = runner.invoke(app, ["rules", "--category", "performance"])
    assert result.exit_code == 2


def test_rules_command_markdown_and_summary_formats() -> None:
    markdown = runner.invoke(app, ["rules", "--format", "markdown"])
    assert markdown.exit_code == 0
    assert markdown.stdout.startswith("# Component Rules Reference")

    summary = runner.invoke(app, ["rules", "--format", "summary"])
    assert summary.exit_code == 0
    assert "- **Button Has Type** (`button-has-type`)" in summary.stdout


def test_rule_command_shows_documentation() -> None:
    result = runner.invoke(app, ["rule", "button-has-type"])
    assert result.exit_code == 0
    assert result.stdout.startswith("# Button Has Type")

    as_json = runner.invoke(app, ["rule", "button-has-type", "--format", "json"])
    assert as_json.exit_code == 0
    assert json.loads(as_json.stdout)["weight"] == 10


def test_rule_command_unknown_id_lists_available_rules() -> None:
    result = runner.invoke(app, ["rule", "no-such-rule"])
    assert result.exit_code == 1
    assert "Rule not found: no-such-rule" in result.output
    assert "- button-has-type" in result.output


def test_config_command_json_shows_resolved_values(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".component-grade.toml").write_text(
        "\n".join(
            [
                'format = "json"',
                "fail_below = 42",
                'exclude = ["**/*.stories.tsx"]',
                "",
                "[rules]",
                'categories = ["state", "naming"]',
                'disable = ["composable-naming"]',
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["config", "--repo", str(repo), "--format", "json"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["format"] == "json"
    assert payload["fail_below"] == 42
    assert payload["exclude"] == ["**/*.stories.tsx"]
    assert payload["active_rule_ids"] == ["supports-controlled-uncontrolled", "data-slot-naming"]
    assert payload["source"] == str(repo / ".component-grade.toml")


def test_config_command_rejects_unknown_rule_ids(tmp_path: Path) -> None:
    (tmp_path / ".component-grade.toml").write_text(
        '[rules]\ndisable = ["not-a-rule"]\n', encoding="utf-8"
    )
    result = runner.invoke(app, ["config", "--repo", str(tmp_path)])
    assert result.exit_code == 2


def test_config_init_then_validate(tmp_path: Path) -> None:
    target = tmp_path / ".component-grade.toml"
    created = runner.invoke(app, ["config-init", "--out", str(target)])
    assert created.exit_code == 0
    assert target.exists()

    again = runner.invoke(app, ["config-init", "--out", str(target)])
    assert again.exit_code == 2

    validated = runner.invoke(
        app,
        ["config-validate", "--repo", str(tmp_path), "--config", str(target), "--format", "json"],
    )
    assert validated.exit_code == 0
    payload = json.loads(validated.stdout)
    assert payload["ok"] is True
    assert "composable-naming" not in payload["active_rule_ids"]
    assert len(payload["active_rule_ids"]) == 23
