"""JSON report rendering."""

import json
from datetime import datetime, timezone
from pathlib import Path

from tlsaudit.modules.results import AuditRun
from tlsaudit.modules.rules import RulesConfig

from .summary import build_summary


def generate_json_report(
    report_path: Path,
    run: AuditRun,
    config: RulesConfig,
    version: str = "0.0.0+unknown",
) -> Path:
    """Write the audit run as a JSON report file and return its path."""
    report_data = {
        "report_metadata": {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "tool": "tlsaudit",
            "version": version,
        },
        "rules": config.to_dict()["rules"],
        "summary": build_summary(run),
        "files": [
            {
                "path": str(outcome.path),
                "error": outcome.error,
                "violationCount": outcome.violation_count,
                "results": [result.to_dict() for result in outcome.results],
            }
            for outcome in run.outcomes
        ],
    }

    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps(report_data, indent=2), encoding="utf-8")
    return report_path
