"""Rule evaluation engine for testssl.sh results."""

from .classifier import grade_rank, is_offered, parse_certificate_date, tls_version_of
from .engine import AuditEngine, audit, get_audit_results
from .models import AuditResult, ScanItem, Violation

__all__ = [
    "AuditEngine",
    "AuditResult",
    "ScanItem",
    "Violation",
    "audit",
    "get_audit_results",
    "grade_rank",
    "is_offered",
    "parse_certificate_date",
    "tls_version_of",
]
