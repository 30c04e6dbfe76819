"""Configuration loading for component-grade."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

CONFIG_FILENAMES = (".component-grade.toml", "component-grade.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("component_grade", "component-grade")
OUTPUT_FORMATS = ("human", "markdown", "json")
DEFAULT_INCLUDE = ("**/*.tsx", "**/*.jsx", "**/*.vue", "**/*.svelte")
DEFAULT_EXCLUDE = ("**/node_modules/**", "**/dist/**", "**/build/**")


@dataclass(slots=True)
class RulesConfig:
    """Rule selection controls."""

    enable: list[str] | None = None
    disable: list[str] = field(default_factory=list)
    categories: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "enable": list(self.enable) if self.enable is not None else None,
            "disable": list(self.disable),
            "categories": list(self.categories) if self.categories is not None else None,
        }


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    fail_below: int | None = None
    verbose: bool = False
    include: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    rules: RulesConfig = field(default_factory=RulesConfig)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "fail_below": self.fail_below,
            "verbose": self.verbose,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "rules": self.rules.to_dict(),
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "markdown"',
            "fail_below = 80",
            "verbose = false",
            'include = ["src/**/*.tsx", "src/**/*.jsx"]',
            'exclude = ["**/node_modules/**", "**/*.stories.tsx"]',
            "",
            "[rules]",
            "# enable = [",
            '#   "extends-html-props",',
            '#   "button-has-type",',
            "# ]",
            'disable = ["composable-naming", "supports-as-prop"]',
            '# categories = ["types", "styling", "accessibility"]',
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")

    raw_fail = mapping.get("fail_below")
    if raw_fail is None:
        fail_value: int | None = None
    else:
        fail_value = _as_int(raw_fail, "fail_below")
        if not 0 <= fail_value <= 100:
            raise ValueError("fail_below must be between 0 and 100")

    include = _as_str_list(mapping.get("include"), "include")
    exclude = _as_str_list(mapping.get("exclude"), "exclude")
    return AppConfig(
        format=_as_choice(mapping.get("format", "human"), set(OUTPUT_FORMATS), "format"),
        fail_below=fail_value,
        verbose=_as_bool(mapping.get("verbose", False), "verbose"),
        include=include if "include" in mapping else list(DEFAULT_INCLUDE),
        exclude=exclude if "exclude" in mapping else list(DEFAULT_EXCLUDE),
        rules=RulesConfig(
            enable=_as_str_list_or_none(rules_mapping.get("enable"), "rules.enable"),
            disable=_as_str_list(rules_mapping.get("disable"), "rules.disable"),
            categories=_as_str_list_or_none(rules_mapping.get("categories"), "rules.categories"),
        ),
        source=source,
    )


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str_list_or_none(value: Any, field_name: str) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value, field_name)


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    return raw


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw
