"""Test configuration and fixtures for tlsaudit."""

import json
import tempfile
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from tlsaudit.utils.debug import set_debug_enabled

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def format_cert_date(moment: datetime) -> str:
    """Format a datetime the way testssl.sh reports certificate dates."""
    return moment.strftime("%Y-%m-%d %H:%M")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep the user's environment, home config and debug state out of tests."""
    for key in (
        "TLSAUDIT_RESULTS_PATH",
        "TLSAUDIT_RULES_CONFIG",
        "TLSAUDIT_FAIL_ON_VIOLATION",
        "TLSAUDIT_VERBOSE",
        "TLSAUDIT_WORKERS",
    ):
        monkeypatch.delenv(key, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    set_debug_enabled(False)
    yield
    set_debug_enabled(False)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def testssl_entries() -> list[dict[str, Any]]:
    """A small but realistic testssl.sh --jsonfile report."""
    ip = "example.com/93.184.216.34"
    return [
        {"id": "service", "ip": ip, "port": "443", "severity": "INFO", "finding": "HTTP"},
        {"id": "SSLv3", "ip": ip, "port": "443", "severity": "OK", "finding": "not offered"},
        {
            "id": "TLS1",
            "ip": ip,
            "port": "443",
            "severity": "LOW",
            "finding": "offered (deprecated)",
        },
        {
            "id": "TLS1_1",
            "ip": ip,
            "port": "443",
            "severity": "INFO",
            "finding": "not offered",
        },
        {"id": "TLS1_2", "ip": ip, "port": "443", "severity": "OK", "finding": "offered"},
        {
            "id": "TLS1_3",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": "offered with final",
        },
        {
            "id": "cipherlist_NULL",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": "not offered",
        },
        {
            "id": "cipherlist_3DES_IDEA",
            "ip": ip,
            "port": "443",
            "severity": "MEDIUM",
            "finding": "offered",
        },
        {
            "id": "cipherlist_STRONG_NOFS",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": "offered",
        },
        {
            "id": "FS",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": "offered",
        },
        {
            "id": "PFS_ciphers",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": "ECDHE-RSA-AES256-GCM-SHA384",
        },
        {
            "id": "cert_notBefore",
            "ip": ip,
            "port": "443",
            "severity": "INFO",
            "finding": format_cert_date(FIXED_NOW - timedelta(days=365)),
        },
        {
            "id": "cert_notAfter",
            "ip": ip,
            "port": "443",
            "severity": "OK",
            "finding": format_cert_date(FIXED_NOW + timedelta(days=200)),
        },
        {"id": "overall_grade", "ip": ip, "port": "443", "severity": "OK", "finding": "B"},
    ]


@pytest.fixture
def write_results(temp_dir: Path) -> Callable[..., Path]:
    """Write a testssl.sh JSON result file under the temp dir."""

    def _write(name: str, data: Any) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cert_date() -> Callable[[datetime], str]:
    return format_cert_date
