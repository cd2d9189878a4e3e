"""Run summary helpers."""

from typing import Any

from tlsaudit.modules.audit.models import RULE_ORDER
from tlsaudit.modules.results import AuditRun


def count_by_rule(run: AuditRun) -> dict[str, dict[str, int]]:
    """Passed/failed counts per rule, in evaluation order."""
    counts = {rule: {"passed": 0, "failed": 0} for rule in RULE_ORDER}
    for result in run.results:
        bucket = counts.setdefault(result.rule, {"passed": 0, "failed": 0})
        bucket["passed" if result.passed else "failed"] += 1
    return counts


def build_summary(run: AuditRun) -> dict[str, Any]:
    return {
        "violationsFound": run.violations_found,
        "violationCount": run.violation_count,
        "fileCount": len(run.outcomes),
        "errorCount": len(run.errors),
        "summary": run.summary,
        "rules": count_by_rule(run),
    }
