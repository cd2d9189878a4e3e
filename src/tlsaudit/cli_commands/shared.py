"""Shared CLI app objects and helpers."""

from importlib.metadata import PackageNotFoundError, version as pkg_version

import typer
from rich.console import Console

app = typer.Typer(
    name="tlsaudit",
    help="Audit testssl.sh results against a TLS policy",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def installed_version() -> str:
    try:
        return pkg_version("tlsaudit")
    except PackageNotFoundError:
        return "0.0.0+unknown"
