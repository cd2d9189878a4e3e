"""Configuration getter functions."""

import logging
import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config, load_project_config

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def get_config(key: str, project_dir: Path | None = None, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Project .tlsaudit/.env file
    3. Global config file
    4. Default value

    Args:
        key: Configuration key (e.g. TLSAUDIT_RULES_CONFIG)
        project_dir: Optional project directory
        default: Default value if not found

    Returns:
        Configuration value or default
    """
    # 1. Check environment variable
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    # 2. Check project .env file
    project_config = load_project_config(project_dir)
    if key in project_config:
        return project_config[key]

    # 3. Check global config
    global_config = load_global_config()
    if key in global_config:
        return global_config[key]

    # 4. Return default
    return default


def get_bool_config(key: str, project_dir: Path | None = None, default: bool = False) -> bool:
    value = get_config(key, project_dir)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def get_int_config(key: str, project_dir: Path | None = None, default: int = 0) -> int:
    value = get_config(key, project_dir)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer value for %s: %r", key, value)
        return default


def get_results_path(project_dir: Path | None = None) -> str | None:
    """Glob pattern for testssl.sh result files."""
    return get_config("TLSAUDIT_RESULTS_PATH", project_dir)


def get_rules_config_path(project_dir: Path | None = None) -> str | None:
    """Path of the rules configuration file."""
    return get_config("TLSAUDIT_RULES_CONFIG", project_dir)


def get_fail_on_violation(project_dir: Path | None = None) -> bool:
    return get_bool_config("TLSAUDIT_FAIL_ON_VIOLATION", project_dir)


def get_verbose(project_dir: Path | None = None) -> bool:
    return get_bool_config("TLSAUDIT_VERBOSE", project_dir)


def get_workers(project_dir: Path | None = None) -> int:
    return max(1, get_int_config("TLSAUDIT_WORKERS", project_dir, default=1))
