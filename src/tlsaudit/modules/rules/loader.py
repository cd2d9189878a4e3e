"""Load rules configuration files (JSON or YAML) merged over the defaults."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .models import DEFAULT_RULES, RULE_KEYS, RulesConfig

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yml", ".yaml")


class RulesConfigError(ValueError):
    """Raised when a rules file exists but cannot be read or parsed."""


def _read_rules_file(config_path: Path) -> Any:
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RulesConfigError(f"Cannot read rules config {config_path}: {exc}") from exc

    try:
        if config_path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(content) or {}
        return json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RulesConfigError(f"Invalid rules config {config_path}: {exc}") from exc


def _explicit_fields(data: Any) -> set[str]:
    rules = data.get("rules", data) if isinstance(data, dict) else {}
    if not isinstance(rules, dict):
        return set()
    return {field_name for key, field_name in RULE_KEYS.items() if key in rules}


def merge_rules(base: RulesConfig, data: dict[str, Any]) -> RulesConfig:
    """Apply the settings present in a rules mapping on top of ``base``."""
    try:
        override = RulesConfig.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise RulesConfigError(f"Invalid rules value: {exc}") from exc
    return base.merged_with(override, explicit=_explicit_fields(data))


def load_rules_config(config_path: str | Path | None) -> RulesConfig:
    """
    Load rules from a file, falling back to the defaults.

    A missing path or missing file yields ``DEFAULT_RULES``. Settings from the
    file replace the matching defaults one by one.
    """
    if not config_path:
        return DEFAULT_RULES

    path = Path(config_path)
    if not path.exists():
        logger.debug("Rules config %s not found; using defaults", path)
        return DEFAULT_RULES

    data = _read_rules_file(path)
    if not isinstance(data, dict):
        raise RulesConfigError(f"Rules config {path} must contain a mapping")

    return merge_rules(DEFAULT_RULES, data)
