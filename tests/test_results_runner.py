"""Tests for result file discovery, reading and multi-file runs."""

from pathlib import Path

import pytest

from tlsaudit.modules.results import (
    AuditRun,
    AuditRunner,
    FileAuditOutcome,
    ResultsFileError,
    load_scan_results,
    resolve_result_files,
)
from tlsaudit.modules.results.runner import NO_FILES_SUMMARY
from tlsaudit.modules.rules import RulesConfig

GRADE_RULES = RulesConfig(min_grade="A")


class TestResolveResultFiles:
    def test_matches_sorted_files(self, temp_dir: Path, write_results) -> None:
        write_results("b.json", [])
        write_results("a.json", [])
        (temp_dir / "notes.txt").write_text("x")

        files = resolve_result_files(str(temp_dir / "*.json"))
        assert [f.name for f in files] == ["a.json", "b.json"]

    def test_recursive_pattern(self, temp_dir: Path, write_results) -> None:
        write_results("top.json", [])
        write_results("nested/deeper/host.json", [])

        files = resolve_result_files(str(temp_dir / "**" / "*.json"))
        assert {f.name for f in files} == {"top.json", "host.json"}

    def test_relative_pattern_uses_base_dir(self, temp_dir: Path, write_results) -> None:
        write_results("scans/host.json", [])
        files = resolve_result_files("scans/*.json", base_dir=temp_dir)
        assert files == [temp_dir / "scans" / "host.json"]

    def test_directories_are_skipped(self, temp_dir: Path) -> None:
        (temp_dir / "dir.json").mkdir()
        assert resolve_result_files(str(temp_dir / "*.json")) == []

    def test_blank_pattern(self) -> None:
        assert resolve_result_files("   ") == []


class TestLoadScanResults:
    def test_returns_decoded_document(self, write_results) -> None:
        path = write_results("scan.json", [{"id": "TLS1", "finding": "offered"}])
        assert load_scan_results(path) == [{"id": "TLS1", "finding": "offered"}]

    def test_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ResultsFileError, match="Invalid JSON"):
            load_scan_results(path)

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(ResultsFileError, match="Cannot read"):
            load_scan_results(temp_dir / "missing.json")

    def test_deeply_nested_json(self, temp_dir: Path) -> None:
        path = temp_dir / "deep.json"
        path.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
        with pytest.raises(ResultsFileError, match="nested too deeply"):
            load_scan_results(path)


class TestAuditRun:
    def test_empty_run(self) -> None:
        run = AuditRun()
        assert run.summary == NO_FILES_SUMMARY
        assert run.violations_found is False
        assert run.violation_count == 0

    def test_error_only_run_passes(self) -> None:
        run = AuditRun(outcomes=[FileAuditOutcome(path=Path("x.json"), error="boom")])
        assert run.summary == "All checks passed"
        assert len(run.errors) == 1


class TestAuditRunner:
    def test_aggregates_across_files(self, write_results, fixed_clock) -> None:
        good = write_results("good.json", [{"id": "overall_grade", "finding": "A+"}])
        bad = write_results("bad.json", [{"id": "overall_grade", "finding": "C"}])

        run = AuditRunner(GRADE_RULES, clock=fixed_clock).run([good, bad])

        assert [o.path for o in run.outcomes] == [good, bad]
        assert [o.violation_count for o in run.outcomes] == [0, 1]
        assert run.violation_count == 1
        assert run.summary == "Found 1 violations"
        assert [r.passed for r in run.results] == [True, False]

    def test_read_error_is_recorded(self, temp_dir: Path, write_results) -> None:
        broken = temp_dir / "broken.json"
        broken.write_text("nope", encoding="utf-8")
        good = write_results("good.json", [{"id": "overall_grade", "finding": "A"}])

        run = AuditRunner(GRADE_RULES).run([broken, good])

        assert run.outcomes[0].error is not None
        assert run.outcomes[0].results == []
        assert run.outcomes[1].error is None
        assert run.violations_found is False

    def test_deeply_nested_file_does_not_stop_the_run(
        self, temp_dir: Path, write_results
    ) -> None:
        deep = temp_dir / "deep.json"
        deep.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")
        good = write_results("good.json", [{"id": "overall_grade", "finding": "C"}])

        run = AuditRunner(GRADE_RULES, max_workers=2).run([deep, good])

        assert "nested too deeply" in run.outcomes[0].error
        assert run.outcomes[1].violation_count == 1
        assert len(run.errors) == 1

    def test_non_list_document_yields_nothing(self, write_results) -> None:
        path = write_results("object.json", {"scanResult": []})
        outcome = AuditRunner(GRADE_RULES).audit_file(path)
        assert outcome.error is None
        assert outcome.results == []

    def test_violations_only(self, write_results, testssl_entries, fixed_clock) -> None:
        path = write_results("scan.json", testssl_entries)
        config = RulesConfig(min_grade="A", min_tls_version="1.2")

        outcome = AuditRunner(config, clock=fixed_clock, show_passed=False).audit_file(path)

        assert [r.rule for r in outcome.results] == ["overall-grade", "min-tls-version"]
        assert all(not r.passed for r in outcome.results)
        assert outcome.violation_count == 2

    def test_parallel_run_keeps_file_order(self, write_results, fixed_clock) -> None:
        grades = ["A", "B", "C", "A+", "F", "T"]
        files = [
            write_results(f"host{i}.json", [{"id": "overall_grade", "finding": grade}])
            for i, grade in enumerate(grades)
        ]

        run = AuditRunner(GRADE_RULES, clock=fixed_clock, max_workers=4).run(files)

        assert [o.path for o in run.outcomes] == files
        assert [o.violation_count for o in run.outcomes] == [0, 1, 1, 0, 1, 1]
        assert run.violation_count == 4

    def test_worker_count_is_at_least_one(self) -> None:
        assert AuditRunner(GRADE_RULES, max_workers=0).max_workers == 1

    def test_no_files(self) -> None:
        assert AuditRunner(GRADE_RULES).run([]).outcomes == []
