"""Helpers that interpret raw testssl.sh finding text and identifiers."""

import re
from datetime import datetime, timezone

GRADE_RANKING: dict[str, int] = {
    "A+": 9,
    "A": 8,
    "A-": 7,
    "B": 6,
    "C": 5,
    "D": 4,
    "E": 3,
    "F": 2,
    "T": 1,  # trust issues, e.g. invalid certificate chain
}

TLS_PROTOCOL_PATTERN = re.compile(r"^TLS1(?:_(\d+))?$")
CIPHERLIST_PREFIX = "cipherlist_"

_OFFERED_WORD = re.compile(r"\boffered\b")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_CERT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def is_offered(finding: str | None) -> bool:
    """Return True if the finding says the protocol/cipher is offered."""
    if not finding:
        return False
    normalized = finding.lower()
    if "not offered" in normalized:
        return False
    return bool(_OFFERED_WORD.search(normalized))


def tls_version_of(protocol_id: str | None) -> float | None:
    """Map a testssl.sh protocol id (TLS1, TLS1_2, ...) to its version number."""
    if not protocol_id:
        return None
    match = TLS_PROTOCOL_PATTERN.match(protocol_id)
    if not match:
        return None
    minor = match.group(1)
    return float(f"1.{minor}") if minor else 1.0


def grade_rank(grade: str | None) -> int | None:
    """Comparable rank of a grade letter, higher is better."""
    if grade is None:
        return None
    return GRADE_RANKING.get(grade)


def parse_min_version(value: str | None) -> float | None:
    """Read the leading decimal number of a configured minimum TLS version."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_certificate_date(value: str | None, not_after: bool = False) -> datetime | None:
    """Parse a ``YYYY-MM-DD HH:mm`` certificate date as UTC.

    notAfter dates get ``:59`` seconds so the certificate stays valid through
    its last minute; notBefore dates get ``:00``.
    """
    if not value:
        return None
    seconds = ":59" if not_after else ":00"
    candidate = value.replace(" ", "T", 1) + seconds
    try:
        parsed = datetime.strptime(candidate, _CERT_DATE_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def format_ip_suffix(ip: str | None) -> str:
    return f" [{ip}]" if ip else ""


def display_protocol(protocol_id: str) -> str:
    """TLS1_2 -> TLS1.2 (only the first underscore is replaced)."""
    return protocol_id.replace("_", ".", 1)


def cipher_name_of(item_id: str) -> str:
    """Strip the cipherlist_ prefix from a cipher list identifier."""
    return item_id.replace(CIPHERLIST_PREFIX, "", 1)
