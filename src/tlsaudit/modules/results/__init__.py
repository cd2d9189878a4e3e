"""Result file discovery, reading and multi-file audit runs."""

from .discovery import resolve_result_files
from .reader import ResultsFileError, load_scan_results
from .runner import AuditRun, AuditRunner, FileAuditOutcome

__all__ = [
    "AuditRun",
    "AuditRunner",
    "FileAuditOutcome",
    "ResultsFileError",
    "load_scan_results",
    "resolve_result_files",
]
