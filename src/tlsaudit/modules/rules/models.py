"""Rules configuration model."""

from dataclasses import dataclass, fields, replace
from typing import Any

# camelCase keys used in rules files, mapped to dataclass field names.
RULE_KEYS: dict[str, str] = {
    "minTlsVersion": "min_tls_version",
    "allowedCiphers": "allowed_ciphers",
    "blockedCiphers": "blocked_ciphers",
    "requireForwardSecrecy": "require_forward_secrecy",
    "maxCertificateExpiry": "max_certificate_expiry",
    "minGrade": "min_grade",
}


@dataclass(frozen=True)
class RulesConfig:
    """Audit thresholds; a rule only runs when its setting is present."""

    min_tls_version: str | None = None
    allowed_ciphers: tuple[str, ...] | None = None
    blocked_ciphers: tuple[str, ...] | None = None
    require_forward_secrecy: bool | None = None
    max_certificate_expiry: int | None = None  # days
    min_grade: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RulesConfig":
        """Build from a rules file mapping (``{"rules": {...}}`` or bare rules)."""
        rules = data.get("rules", data) if isinstance(data, dict) else {}
        if not isinstance(rules, dict):
            rules = {}
        values: dict[str, Any] = {}
        for key, field_name in RULE_KEYS.items():
            if key in rules:
                values[field_name] = _coerce(field_name, rules[key])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Rules file shape, leaving out unset settings."""
        rules: dict[str, Any] = {}
        for key, field_name in RULE_KEYS.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            rules[key] = list(value) if isinstance(value, tuple) else value
        return {"rules": rules}

    def merged_with(self, override: "RulesConfig", explicit: set[str] | None = None) -> "RulesConfig":
        """Return a copy with ``override`` settings applied on top.

        Settings named in ``explicit`` are copied even when None, so a rules
        file can switch a default off with ``null``.
        """
        explicit = explicit or set()
        changes = {
            f.name: getattr(override, f.name)
            for f in fields(self)
            if getattr(override, f.name) is not None or f.name in explicit
        }
        return replace(self, **changes)


def _coerce(field_name: str, value: Any) -> Any:
    if value is None:
        return None
    if field_name in ("allowed_ciphers", "blocked_ciphers"):
        if isinstance(value, str):
            return (value,)
        return tuple(str(v) for v in value)
    if field_name == "min_tls_version":
        return str(value)
    if field_name == "min_grade":
        return str(value)
    if field_name == "require_forward_secrecy":
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    if field_name == "max_certificate_expiry":
        if isinstance(value, bool):
            raise ValueError("maxCertificateExpiry must be a number of days")
        return int(value)
    return value


DEFAULT_RULES = RulesConfig(
    min_tls_version="1.2",
    allowed_ciphers=(),
    blocked_ciphers=("RC4", "DES", "3DES", "NULL", "EXPORT", "anon"),
    require_forward_secrecy=True,
    max_certificate_expiry=90,
)
