"""Data models for testssl.sh scan items and audit results."""

from dataclasses import dataclass, field
from typing import Any

RULE_OVERALL_GRADE = "overall-grade"
RULE_MIN_TLS_VERSION = "min-tls-version"
RULE_BLOCKED_CIPHER = "blocked-cipher"
RULE_FORWARD_SECRECY = "forward-secrecy"
RULE_CERTIFICATE_EXPIRY = "certificate-expiry"

RULE_ORDER = (
    RULE_OVERALL_GRADE,
    RULE_MIN_TLS_VERSION,
    RULE_BLOCKED_CIPHER,
    RULE_FORWARD_SECRECY,
    RULE_CERTIFICATE_EXPIRY,
)


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class ScanItem:
    """One line item from a testssl.sh JSON report."""

    id: str
    ip: str | None = None
    port: str | None = None
    severity: str | None = None
    finding: str | None = None
    cve: str | None = None
    cwe: str | None = None

    @classmethod
    def from_dict(cls, entry: dict[str, Any]) -> "ScanItem":
        return cls(
            id=_optional_str(entry.get("id")) or "",
            ip=_optional_str(entry.get("ip")),
            port=_optional_str(entry.get("port")),
            severity=_optional_str(entry.get("severity")),
            finding=_optional_str(entry.get("finding")),
            cve=_optional_str(entry.get("cve")),
            cwe=_optional_str(entry.get("cwe")),
        )


def coerce_scan_items(data: Any) -> list[ScanItem] | None:
    """Normalize raw report data into scan items.

    Returns None when ``data`` is not a list; non-dict entries are dropped.
    """
    if not isinstance(data, list):
        return None
    items: list[ScanItem] = []
    for entry in data:
        if isinstance(entry, ScanItem):
            items.append(entry)
        elif isinstance(entry, dict):
            items.append(ScanItem.from_dict(entry))
    return items


@dataclass
class AuditResult:
    """Outcome of one rule check against one scan item (or the whole scan)."""

    rule: str
    passed: bool
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self, include_passed: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {"rule": self.rule}
        if include_passed:
            data["passed"] = self.passed
        data["message"] = self.message
        data["details"] = dict(self.details)
        return data

    def to_violation(self) -> "Violation":
        return Violation(rule=self.rule, message=self.message, details=dict(self.details))


@dataclass
class Violation:
    """A failing audit result, as reported in violations-only mode."""

    rule: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "message": self.message, "details": dict(self.details)}
