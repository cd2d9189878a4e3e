"""Tests for verbose debug output."""

import threading

import pytest

from tlsaudit.utils.debug import debug_print, is_debug_enabled, set_debug_enabled


class TestDebugPrint:
    def test_silent_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        debug_print("audit", "Processing scan.json")
        assert capsys.readouterr().err == ""

    def test_prints_to_stderr_when_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_debug_enabled(True)
        debug_print("audit", "Finished scan.json", Results=3, Skipped=None, Files=["a", "b"])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[DEBUG:audit] Finished scan.json" in captured.err
        assert "Results: 3" in captured.err
        assert "Files: a, b" in captured.err
        assert "Skipped" not in captured.err

    def test_switch_is_shared_with_worker_threads(self) -> None:
        set_debug_enabled(True)
        seen: list[bool] = []
        worker = threading.Thread(target=lambda: seen.append(is_debug_enabled()))
        worker.start()
        worker.join()
        assert seen == [True]
