"""
Per-project hook configuration.

Read fresh on every invocation from ``.claude/quality-hooks.yaml`` (or the
file named by $CLAUDE_QUALITY_HOOKS_CONFIG). A missing file means defaults.

Example:

    security:
      disabled_rules: [eval-usage]
      skip_dirs: [dist]
      rules:
        - id: sql-injection
          severity: HIGH
          message: String-built SQL query
          pattern: "cursor\\.execute\\(f[\\"']"
    tests:
      output_lines: 40
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from claude_quality_hooks.errors import ConfigError
from claude_quality_hooks.paths import config_path
from claude_quality_hooks.scanner import SKIP_DIRS, DetectionRule, build_rules, rule
from claude_quality_hooks.types import Severity


@dataclass(frozen=True)
class SecurityConfig:
    disabled_rules: tuple[str, ...] = ()
    skip_dirs: tuple[str, ...] = ()
    rules: tuple[DetectionRule, ...] = ()

    def detection_rules(self) -> list[DetectionRule]:
        return build_rules(self.disabled_rules, self.rules)

    def all_skip_dirs(self) -> frozenset[str]:
        return SKIP_DIRS | frozenset(self.skip_dirs)


@dataclass(frozen=True)
class RunnerConfig:
    output_lines: int | None = None  # None: the runner's own default


@dataclass(frozen=True)
class HooksConfig:
    security: SecurityConfig = field(default_factory=SecurityConfig)
    tests: RunnerConfig = field(default_factory=RunnerConfig)


def _section(data: dict[str, Any], key: str, source: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(source, f"'{key}' must be a mapping")
    return value


def _string_list(section: dict[str, Any], key: str, source: str) -> tuple[str, ...]:
    value = section.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(source, f"'{key}' must be a list of strings")
    return tuple(value)


def parse_rule(raw: Any, source: str) -> DetectionRule:
    """Build a detection rule from one entry of ``security.rules``."""
    if not isinstance(raw, dict):
        raise ConfigError(source, "each security rule must be a mapping")
    rule_id = raw.get("id")
    pattern = raw.get("pattern")
    if not isinstance(rule_id, str) or not isinstance(pattern, str):
        raise ConfigError(source, "security rules need string 'id' and 'pattern'")

    severity_name = str(raw.get("severity", "HIGH")).upper()
    try:
        severity = Severity(severity_name)
    except ValueError:
        raise ConfigError(source, f"rule {rule_id}: unknown severity '{severity_name}'") from None

    extensions = raw.get("extensions")
    if extensions is not None and not isinstance(extensions, list):
        raise ConfigError(source, f"rule {rule_id}: 'extensions' must be a list")

    try:
        return rule(
            rule_id,
            severity,
            str(raw.get("message", rule_id)),
            pattern,
            ignore_case=bool(raw.get("ignore_case", False)),
            extensions=[str(ext) for ext in extensions] if extensions else None,
            exclude=raw.get("exclude"),
            requires=raw.get("requires"),
        )
    except (re.error, TypeError) as exc:
        raise ConfigError(source, f"rule {rule_id}: invalid pattern ({exc})") from None


def parse_config(data: Any, source: str = "<config>") -> HooksConfig:
    """Validate the loaded YAML document."""
    if data is None:
        return HooksConfig()
    if not isinstance(data, dict):
        raise ConfigError(source, "top level must be a mapping")

    security = _section(data, "security", source)
    raw_rules = security.get("rules") or []
    if not isinstance(raw_rules, list):
        raise ConfigError(source, "'security.rules' must be a list")

    tests = _section(data, "tests", source)
    output_lines = tests.get("output_lines")
    if output_lines is not None and (
        not isinstance(output_lines, int) or isinstance(output_lines, bool) or output_lines < 1
    ):
        raise ConfigError(source, "'tests.output_lines' must be a positive integer")

    return HooksConfig(
        security=SecurityConfig(
            disabled_rules=_string_list(security, "disabled_rules", source),
            skip_dirs=_string_list(security, "skip_dirs", source),
            rules=tuple(parse_rule(raw, source) for raw in raw_rules),
        ),
        tests=RunnerConfig(output_lines=output_lines),
    )


def load_config(path: Path | None = None) -> HooksConfig:
    """Load the configuration, returning defaults when no file exists."""
    path = path if path is not None else config_path()
    if not path.exists():
        return HooksConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(str(path), f"cannot be read ({exc})") from exc
    return parse_config(data, str(path))
