"""Audit a set of testssl.sh result files and aggregate the outcome."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from tlsaudit.modules.audit import AuditEngine, AuditResult
from tlsaudit.modules.audit.engine import Clock
from tlsaudit.modules.rules import RulesConfig
from tlsaudit.utils.debug import debug_print

from .reader import ResultsFileError, load_scan_results

logger = logging.getLogger(__name__)

NO_FILES_SUMMARY = "No testssl.sh result files found"


@dataclass
class FileAuditOutcome:
    """Audit results (or the read error) for one result file."""

    path: Path
    results: list[AuditResult] = field(default_factory=list)
    error: str | None = None

    @property
    def violation_count(self) -> int:
        return sum(1 for result in self.results if not result.passed)


@dataclass
class AuditRun:
    """Aggregated outcome of auditing several result files."""

    outcomes: list[FileAuditOutcome] = field(default_factory=list)

    @property
    def violation_count(self) -> int:
        return sum(outcome.violation_count for outcome in self.outcomes)

    @property
    def violations_found(self) -> bool:
        return self.violation_count > 0

    @property
    def errors(self) -> list[FileAuditOutcome]:
        return [outcome for outcome in self.outcomes if outcome.error]

    @property
    def results(self) -> list[AuditResult]:
        return [result for outcome in self.outcomes for result in outcome.results]

    @property
    def summary(self) -> str:
        if not self.outcomes:
            return NO_FILES_SUMMARY
        if self.violations_found:
            return f"Found {self.violation_count} violations"
        return "All checks passed"


class AuditRunner:
    """Run the audit engine over result files, optionally in parallel."""

    def __init__(
        self,
        config: RulesConfig,
        clock: Clock | None = None,
        max_workers: int = 1,
        show_passed: bool = True,
    ):
        self.engine = AuditEngine(config, clock=clock)
        self.max_workers = max(1, max_workers)
        self.show_passed = show_passed

    def audit_file(self, path: Path) -> FileAuditOutcome:
        debug_print("audit", f"Processing {path}")
        try:
            data = load_scan_results(path)
        except ResultsFileError as exc:
            logger.warning("Failed to process %s: %s", path, exc)
            return FileAuditOutcome(path=path, error=str(exc))

        if self.show_passed:
            results = self.engine.get_audit_results(data)
        else:
            results = [
                AuditResult(
                    rule=violation.rule,
                    passed=False,
                    message=violation.message,
                    details=violation.details,
                )
                for violation in self.engine.audit(data)
            ]

        outcome = FileAuditOutcome(path=path, results=results)
        debug_print(
            "audit",
            f"Finished {path}",
            Results=len(results),
            Violations=outcome.violation_count,
        )
        return outcome

    def run(self, files: list[Path]) -> AuditRun:
        """Audit every file; outcomes keep the order of ``files``."""
        if not files:
            return AuditRun()

        if self.max_workers == 1 or len(files) == 1:
            return AuditRun(outcomes=[self.audit_file(path) for path in files])

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(files))) as pool:
            outcomes = list(pool.map(self.audit_file, files))
        return AuditRun(outcomes=outcomes)
