"""Rule evaluators for testssl.sh audit results.

Each evaluator scans the full item list on every call and returns
``AuditResult`` records with an explicit pass/fail flag. The engine derives
the violations-only view from these records.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from .classifier import (
    CIPHERLIST_PREFIX,
    cipher_name_of,
    display_protocol,
    format_ip_suffix,
    grade_rank,
    is_offered,
    parse_certificate_date,
    parse_min_version,
    tls_version_of,
)
from .models import (
    RULE_BLOCKED_CIPHER,
    RULE_CERTIFICATE_EXPIRY,
    RULE_FORWARD_SECRECY,
    RULE_MIN_TLS_VERSION,
    RULE_OVERALL_GRADE,
    AuditResult,
    ScanItem,
)

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24

_PASSING_SEVERITIES = ("OK", "INFO")


def _details(**values: Any) -> dict[str, Any]:
    """Build a details payload, leaving out values that are not present."""
    return {key: value for key, value in values.items() if value is not None}


def _first(items: list[ScanItem], item_id: str) -> ScanItem | None:
    return next((item for item in items if item.id == item_id), None)


def _iso_timestamp(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def evaluate_overall_grade(items: list[ScanItem], min_grade: str) -> list[AuditResult]:
    grade_item = _first(items, "overall_grade")
    if grade_item is None or not grade_item.finding:
        return []

    actual_grade = grade_item.finding
    min_rank = grade_rank(min_grade)
    actual_rank = grade_rank(actual_grade)

    if min_rank is None:
        return [
            AuditResult(
                rule=RULE_OVERALL_GRADE,
                passed=False,
                message=f"Invalid minimum grade specified: {min_grade}",
                details=_details(minGrade=min_grade, actualGrade=actual_grade),
            )
        ]

    if actual_rank is None:
        return [
            AuditResult(
                rule=RULE_OVERALL_GRADE,
                passed=False,
                message=f"Unknown grade received: {actual_grade}",
                details=_details(minGrade=min_grade, actualGrade=actual_grade),
            )
        ]

    details = _details(
        minGrade=min_grade,
        actualGrade=actual_grade,
        minRank=min_rank,
        actualRank=actual_rank,
    )
    if actual_rank < min_rank:
        return [
            AuditResult(
                rule=RULE_OVERALL_GRADE,
                passed=False,
                message=(
                    f"Overall grade {actual_grade} does not meet minimum requirement "
                    f"of {min_grade}"
                ),
                details=details,
            )
        ]
    return [
        AuditResult(
            rule=RULE_OVERALL_GRADE,
            passed=True,
            message=f"Grade {actual_grade} meets the minimum requirement of {min_grade}",
            details=details,
        )
    ]


def evaluate_tls_version(items: list[ScanItem], min_version: str) -> list[AuditResult]:
    protocol_items = [
        item for item in items if item.finding and tls_version_of(item.id) is not None
    ]
    min_version_num = parse_min_version(min_version)
    if min_version_num is None:
        logger.warning("Unparseable minimum TLS version %r", min_version)
        if not protocol_items:
            return []
        return [
            AuditResult(
                rule=RULE_MIN_TLS_VERSION,
                passed=False,
                message=f"Invalid minimum TLS version specified: {min_version}",
                details=_details(minTlsVersion=min_version),
            )
        ]

    results: list[AuditResult] = []
    for item in protocol_items:
        version = tls_version_of(item.id)

        finding = item.finding
        protocol = display_protocol(item.id)
        ip_suffix = format_ip_suffix(item.ip)
        details = _details(protocol=item.id, finding=finding, version=version, ip=item.ip)

        if is_offered(finding):
            if version < min_version_num:
                results.append(
                    AuditResult(
                        rule=RULE_MIN_TLS_VERSION,
                        passed=False,
                        message=(
                            f"Insecure TLS version {protocol} is enabled "
                            f'(finding: "{finding}", minimum required: TLS {min_version})'
                            f"{ip_suffix}"
                        ),
                        details=details,
                    )
                )
            else:
                results.append(
                    AuditResult(
                        rule=RULE_MIN_TLS_VERSION,
                        passed=True,
                        message=(
                            f"TLS version {protocol} meets the minimum requirement "
                            f"of TLS {min_version}{ip_suffix}"
                        ),
                        details=details,
                    )
                )
        elif version < min_version_num:
            results.append(
                AuditResult(
                    rule=RULE_MIN_TLS_VERSION,
                    passed=True,
                    message=(
                        f'TLS version {protocol} is not offered (finding: "{finding}")'
                        f"{ip_suffix}"
                    ),
                    details=details,
                )
            )
        # Compliant protocols that are not offered are not reported.
    return results


def evaluate_blocked_ciphers(items: list[ScanItem], blocked_ciphers: list[str]) -> list[AuditResult]:
    results: list[AuditResult] = []
    for item in items:
        if not item.finding or not item.id.startswith(CIPHERLIST_PREFIX):
            continue

        cipher_name = cipher_name_of(item.id)
        blocked_pattern = next(
            (
                blocked
                for blocked in blocked_ciphers
                if str(blocked).upper() in cipher_name.upper()
            ),
            None,
        )
        if blocked_pattern is None:
            continue

        finding = item.finding
        ip_suffix = format_ip_suffix(item.ip)
        details = _details(cipher=cipher_name, blocked=blocked_pattern, id=item.id, ip=item.ip)
        if is_offered(finding):
            results.append(
                AuditResult(
                    rule=RULE_BLOCKED_CIPHER,
                    passed=False,
                    message=(
                        f'Blocked cipher suite detected: {cipher_name} (finding: "{finding}")'
                        f"{ip_suffix}"
                    ),
                    details=details,
                )
            )
        else:
            results.append(
                AuditResult(
                    rule=RULE_BLOCKED_CIPHER,
                    passed=True,
                    message=(
                        f"Blocked cipher suite {cipher_name} is not offered "
                        f'(finding: "{finding}"){ip_suffix}'
                    ),
                    details=details,
                )
            )
    return results


def evaluate_forward_secrecy(items: list[ScanItem]) -> list[AuditResult]:
    fs_item = next((item for item in items if "pfs" in item.id.lower()), None)
    if fs_item is None:
        return []

    ip_suffix = format_ip_suffix(fs_item.ip)
    details = _details(finding=fs_item.finding, severity=fs_item.severity, ip=fs_item.ip)
    if fs_item.severity and fs_item.severity not in _PASSING_SEVERITIES:
        return [
            AuditResult(
                rule=RULE_FORWARD_SECRECY,
                passed=False,
                message=f"Forward secrecy is not properly configured{ip_suffix}",
                details=details,
            )
        ]
    return [
        AuditResult(
            rule=RULE_FORWARD_SECRECY,
            passed=True,
            message=f"Forward secrecy is properly configured{ip_suffix}",
            details=details,
        )
    ]


def evaluate_certificate_expiry(
    items: list[ScanItem],
    max_days: int,
    now: datetime,
    *,
    strict_order: bool = True,
) -> list[AuditResult]:
    """Check certificate validity window and time left before expiry.

    With ``strict_order`` the first failing check wins and a passing result
    is emitted when none fails. Without it, the not-yet-valid, expired and
    expiring-soon checks are evaluated independently and only failures are
    returned.
    """
    not_before_item = _first(items, "cert_notBefore")
    not_after_item = _first(items, "cert_notAfter")
    if not_before_item is None or not_after_item is None:
        return []

    not_before = not_before_item.finding
    not_after = not_after_item.finding
    if not not_before or not not_after:
        return []

    ip = not_after_item.ip
    ip_suffix = format_ip_suffix(ip)

    not_before_date = parse_certificate_date(not_before)
    not_after_date = parse_certificate_date(not_after, not_after=True)
    if not_before_date is None or not_after_date is None:
        return [
            AuditResult(
                rule=RULE_CERTIFICATE_EXPIRY,
                passed=False,
                message=f"Invalid certificate date format{ip_suffix}",
                details=_details(notBefore=not_before, notAfter=not_after, ip=ip),
            )
        ]

    results: list[AuditResult] = []
    window_details = _details(
        notBefore=not_before,
        notAfter=not_after,
        currentTime=_iso_timestamp(now),
        ip=ip,
    )

    if now < not_before_date:
        results.append(
            AuditResult(
                rule=RULE_CERTIFICATE_EXPIRY,
                passed=False,
                message=f"Certificate is not yet valid (notBefore: {not_before}){ip_suffix}",
                details=dict(window_details),
            )
        )
        if strict_order:
            return results

    if now > not_after_date:
        results.append(
            AuditResult(
                rule=RULE_CERTIFICATE_EXPIRY,
                passed=False,
                message=f"Certificate has expired (notAfter: {not_after}){ip_suffix}",
                details=dict(window_details),
            )
        )
        if strict_order:
            return results

    days_until_expiry = (not_after_date - now).total_seconds() / SECONDS_PER_DAY
    whole_days = math.trunc(days_until_expiry)
    expiry_details = _details(
        notBefore=not_before,
        notAfter=not_after,
        daysUntilExpiry=whole_days,
        maxDays=max_days,
        ip=ip,
    )

    if 0 < days_until_expiry <= max_days:
        results.append(
            AuditResult(
                rule=RULE_CERTIFICATE_EXPIRY,
                passed=False,
                message=(
                    f"Certificate expires in {whole_days} days "
                    f"(threshold: {max_days} days, notAfter: {not_after}){ip_suffix}"
                ),
                details=expiry_details,
            )
        )
    elif strict_order:
        results.append(
            AuditResult(
                rule=RULE_CERTIFICATE_EXPIRY,
                passed=True,
                message=(
                    f"Certificate is valid and expires in {whole_days} days "
                    f"(threshold: {max_days} days){ip_suffix}"
                ),
                details=expiry_details,
            )
        )
    return results
