"""Read testssl.sh JSON result files."""

import json
from pathlib import Path
from typing import Any


class ResultsFileError(ValueError):
    """Raised when a result file cannot be read or decoded."""


def load_scan_results(path: Path) -> Any:
    """Return the decoded JSON document of one testssl.sh ``--jsonfile`` output.

    The document is returned as-is; the engine treats anything other than a
    list of items as nothing to audit.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResultsFileError(f"Cannot read {path}: {exc}") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ResultsFileError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
        raise ResultsFileError(f"JSON in {path} is nested too deeply") from exc
