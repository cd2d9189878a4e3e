"""Environment variable and configuration file loading."""

import tempfile
from pathlib import Path
from typing import Any

import yaml

PROJECT_MARKER = ".tlsaudit"


def global_config_path() -> Path:
    return Path.home() / PROJECT_MARKER / "config.yml"


def is_global_config_dir(path: Path) -> bool:
    """Return True if the path is the global ~/.tlsaudit config directory."""
    home_config = Path.home() / PROJECT_MARKER
    try:
        return path.resolve() == home_config.resolve()
    except FileNotFoundError:
        return path == home_config


def find_project_dir(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` (default: cwd) to the nearest .tlsaudit directory.

    Stops at the system temp root and skips the global ~/.tlsaudit directory.
    """
    current = (start or Path.cwd()).resolve()
    try:
        temp_root = Path(tempfile.gettempdir()).resolve()
    except OSError:
        temp_root = None
    while current != current.parent:
        if temp_root and current == temp_root:
            return None
        marker = current / PROJECT_MARKER
        if marker.is_dir() and not is_global_config_dir(marker):
            return current
        current = current.parent
    return None


def load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from .env file."""
    env_vars = {}
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    # Remove quotes if present
                    value = value.strip().strip("\"'")
                    env_vars[key.strip()] = value
    return env_vars


def load_global_config() -> dict[str, Any]:
    """Load global configuration from ~/.tlsaudit/config.yml."""
    config_path = global_config_path()
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}
    return {}


def load_project_config(project_dir: Path | None = None) -> dict[str, str]:
    """Load project-specific configuration from .tlsaudit/.env."""
    if project_dir is None:
        project_dir = find_project_dir()
    if project_dir:
        return load_env_file(project_dir / PROJECT_MARKER / ".env")
    return {}
