"""
Configuration management for tlsaudit.

Supports multiple configuration sources in order of priority:
1. Environment variables (highest priority)
2. Project .env file (.tlsaudit/.env)
3. Global config file (~/.tlsaudit/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import (
    find_project_dir,
    global_config_path,
    is_global_config_dir,
    load_env_file,
    load_global_config,
    load_project_config,
)
from .getters import (
    get_bool_config,
    get_config,
    get_fail_on_violation,
    get_int_config,
    get_results_path,
    get_rules_config_path,
    get_verbose,
    get_workers,
)

__all__ = [
    # env_loader
    "find_project_dir",
    "global_config_path",
    "is_global_config_dir",
    "load_env_file",
    "load_global_config",
    "load_project_config",
    # getters
    "get_bool_config",
    "get_config",
    "get_fail_on_violation",
    "get_int_config",
    "get_results_path",
    "get_rules_config_path",
    "get_verbose",
    "get_workers",
]
