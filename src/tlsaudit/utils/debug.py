"""Verbose output helpers.

Debug output is process-wide so worker threads auditing result files in
parallel print under the same switch as the CLI thread.
"""

import json
import threading
from typing import Any

from rich.console import Console
from rich.syntax import Syntax

_debug_enabled = threading.Event()
_print_lock = threading.Lock()
_console = Console(stderr=True)


def set_debug_enabled(enabled: bool) -> None:
    """Switch verbose debug output on or off."""
    if enabled:
        _debug_enabled.set()
    else:
        _debug_enabled.clear()


def is_debug_enabled() -> bool:
    return _debug_enabled.is_set()


def debug_print(category: str, message: str, **data: Any) -> None:
    """Print debug information if debug mode is enabled.

    Args:
        category: Debug category (audit, rules, config)
        message: Main message to display
        **data: Additional key-value pairs to display
    """
    if not is_debug_enabled():
        return
    with _print_lock:
        _console.print(f"[DEBUG:{category}] {message}", style="bold cyan", markup=False)
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, dict):
                try:
                    json_str = json.dumps(value, indent=2)
                except (TypeError, ValueError):
                    _console.print(f"  {key}: {value}", style="dim", markup=False)
                    continue
                _console.print(f"  {key}:", style="dim", markup=False)
                _console.print(Syntax(json_str, "json", theme="monokai", line_numbers=False))
            elif isinstance(value, list):
                _console.print(
                    f"  {key}: {', '.join(str(v) for v in value)}", style="dim", markup=False
                )
            elif isinstance(value, str) and len(value) > 100:
                _console.print(
                    f"  {key}: {value[:100]}... ({len(value)} chars)", style="dim", markup=False
                )
            else:
                _console.print(f"  {key}: {value}", style="dim", markup=False)
