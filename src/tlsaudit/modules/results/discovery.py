"""Resolve testssl.sh result files from a glob pattern."""

import glob
from pathlib import Path


def resolve_result_files(pattern: str, base_dir: Path | None = None) -> list[Path]:
    """Return the files matching ``pattern``, sorted and de-duplicated.

    Relative patterns are resolved against ``base_dir`` (default: cwd).
    ``**`` matches across directories.
    """
    pattern = pattern.strip()
    if not pattern:
        return []

    expanded = Path(pattern).expanduser()
    if not expanded.is_absolute():
        expanded = (base_dir or Path.cwd()) / expanded

    matches: set[Path] = set()
    for match in glob.glob(str(expanded), recursive=True):
        path = Path(match)
        if path.is_file():
            matches.add(path)
    return sorted(matches)
