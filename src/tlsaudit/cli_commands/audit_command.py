"""``tlsaudit audit`` command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from tlsaudit.config import (
    get_fail_on_violation,
    get_results_path,
    get_rules_config_path,
    get_verbose,
    get_workers,
)
from tlsaudit.modules.report import generate_json_report
from tlsaudit.modules.results import AuditRun, AuditRunner, resolve_result_files
from tlsaudit.modules.rules import DEFAULT_RULES, RulesConfig, RulesConfigError, load_rules_config
from tlsaudit.utils.debug import debug_print, set_debug_enabled

from .shared import app, console, installed_version


def resolve_rules(
    rules_config: str | None,
    status_console: Console = console,
    announce: bool = True,
) -> RulesConfig:
    """Load the rules file, falling back to the defaults when it is unusable.

    Problems go to ``status_console``; ``announce`` also reports which existing
    file the rules came from.
    """
    config_path = rules_config or get_rules_config_path()
    try:
        rules = load_rules_config(config_path)
    except RulesConfigError as exc:
        status_console.print(
            f"[yellow]Could not load rules config from {escape(str(config_path))}, "
            f"using defaults: {escape(str(exc))}[/yellow]"
        )
        return DEFAULT_RULES
    if announce and config_path:
        if Path(config_path).exists():
            status_console.print(f"Loaded rules configuration from: {escape(str(config_path))}")
        else:
            status_console.print(
                f"[yellow]Rules config not found, using defaults: "
                f"{escape(str(config_path))}[/yellow]"
            )
    debug_print("rules", "Effective rules", Rules=rules.to_dict()["rules"])
    return rules


def print_run(run: AuditRun) -> None:
    for outcome in run.outcomes:
        console.print(f"Processing: {escape(str(outcome.path))}")
        if outcome.error:
            console.print(
                f"[red]Failed to process {escape(str(outcome.path))}: "
                f"{escape(outcome.error)}[/red]"
            )
            continue
        for result in outcome.results:
            if result.passed:
                console.print(f"  [green]✓[/green] {escape(result.message)}")
            else:
                console.print(f"  [red]✗[/red] {escape(result.message)}")


@app.command()
def audit(
    results_path: str | None = typer.Argument(
        None,
        help="Glob pattern for testssl.sh JSON result files (env: TLSAUDIT_RESULTS_PATH)",
    ),
    rules_config: str | None = typer.Option(
        None,
        "--rules-config",
        "-r",
        help="Rules configuration file, JSON or YAML (env: TLSAUDIT_RULES_CONFIG)",
    ),
    fail_on_violation: bool = typer.Option(
        False,
        "--fail-on-violation",
        help="Exit with status 1 when violations are found",
    ),
    violations_only: bool = typer.Option(
        False,
        "--violations-only",
        help="Only report failing checks",
    ),
    json_output: Path | None = typer.Option(
        None,
        "--json-output",
        help="Write a JSON report to this path",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        min=1,
        help="Number of result files audited in parallel",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Audit testssl.sh results against the configured rules."""
    set_debug_enabled(verbose or get_verbose())

    pattern = results_path or get_results_path()
    if not pattern:
        console.print(
            "[red]Error: No results path given. Pass a glob pattern or set "
            "TLSAUDIT_RESULTS_PATH.[/red]"
        )
        raise typer.Exit(1)

    fail_on_violation = fail_on_violation or get_fail_on_violation()

    console.print(f"Searching for testssl.sh results: {escape(pattern)}")
    files = resolve_result_files(pattern)
    rules = resolve_rules(rules_config)

    if not files:
        console.print(f"[yellow]No files found matching pattern: {escape(pattern)}[/yellow]")
        run = AuditRun()
    else:
        console.print(f"Found {len(files)} file(s) to audit")
        runner = AuditRunner(
            rules,
            max_workers=workers or get_workers(),
            show_passed=not violations_only,
        )
        run = runner.run(files)
        print_run(run)

    if json_output:
        report_file = generate_json_report(json_output, run, rules, version=installed_version())
        console.print(f"[green]Report written:[/green] {escape(str(report_file))}")

    console.print(f"\n[bold]{run.summary}[/bold]")

    if fail_on_violation and run.violations_found:
        console.print(
            f"[red]Found {run.violation_count} violations. "
            "Review the results above for details.[/red]"
        )
        raise typer.Exit(1)
    if run.violations_found:
        console.print(
            f"[yellow]Found {run.violation_count} violations but not failing "
            "(--fail-on-violation not set)[/yellow]"
        )
    elif run.outcomes:
        console.print("[green]All audits passed![/green]")
