"""``tlsaudit rules`` and ``tlsaudit version`` commands."""

import json

import typer

from .audit_command import resolve_rules
from .shared import app, console, err_console, installed_version


@app.command()
def rules(
    rules_config: str | None = typer.Option(
        None,
        "--rules-config",
        "-r",
        help="Rules configuration file, JSON or YAML (env: TLSAUDIT_RULES_CONFIG)",
    ),
) -> None:
    """Show the effective rules after merging the rules file over the defaults."""
    effective = resolve_rules(rules_config, status_console=err_console, announce=False)
    console.print_json(json.dumps(effective.to_dict()))


@app.command()
def version() -> None:
    """Show the installed tlsaudit version."""
    console.print(f"tlsaudit {installed_version()}")
