"""Audit engine: runs the configured rules over testssl.sh results."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from tlsaudit.modules.rules.models import RulesConfig

from .models import AuditResult, ScanItem, Violation, coerce_scan_items
from .rules import (
    evaluate_blocked_ciphers,
    evaluate_certificate_expiry,
    evaluate_forward_secrecy,
    evaluate_overall_grade,
    evaluate_tls_version,
)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class AuditEngine:
    """Evaluate testssl.sh results against a rules configuration.

    Only rules whose setting is configured run, always in the order grade,
    TLS version, blocked ciphers, forward secrecy, certificate expiry. The
    engine performs no I/O and never mutates its inputs; the clock is the
    only outside input and can be injected for reproducible results.
    """

    def __init__(self, config: RulesConfig, clock: Clock | None = None):
        self.config = config
        self._clock = clock or utc_now

    def audit(self, results: Any) -> list[Violation]:
        """Return only the failing checks."""
        items = coerce_scan_items(results)
        if items is None:
            return []
        return [
            result.to_violation()
            for result in self._evaluate(items, full=False)
            if not result.passed
        ]

    def get_audit_results(self, results: Any) -> list[AuditResult]:
        """Return passing and failing checks for every active rule."""
        items = coerce_scan_items(results)
        if items is None:
            return []
        return self._evaluate(items, full=True)

    def _evaluate(self, items: list[ScanItem], *, full: bool) -> list[AuditResult]:
        rules = self.config
        results: list[AuditResult] = []

        if rules.min_grade:
            results.extend(evaluate_overall_grade(items, rules.min_grade))

        if rules.min_tls_version:
            results.extend(evaluate_tls_version(items, rules.min_tls_version))

        if rules.blocked_ciphers:
            results.extend(evaluate_blocked_ciphers(items, list(rules.blocked_ciphers)))

        if rules.require_forward_secrecy:
            results.extend(evaluate_forward_secrecy(items))

        if rules.max_certificate_expiry is not None:
            results.extend(
                evaluate_certificate_expiry(
                    items,
                    rules.max_certificate_expiry,
                    _as_utc(self._clock()),
                    strict_order=full,
                )
            )

        return results


def audit(
    config: RulesConfig, results: Any, now: datetime | None = None
) -> list[Violation]:
    """Violations-only audit with an optional fixed current time."""
    clock = (lambda: now) if now is not None else None
    return AuditEngine(config, clock=clock).audit(results)


def get_audit_results(
    config: RulesConfig, results: Any, now: datetime | None = None
) -> list[AuditResult]:
    """Full pass/fail audit with an optional fixed current time."""
    clock = (lambda: now) if now is not None else None
    return AuditEngine(config, clock=clock).get_audit_results(results)
