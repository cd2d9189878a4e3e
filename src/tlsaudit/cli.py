"""tlsaudit CLI - audit testssl.sh results against a TLS policy."""

from tlsaudit.cli_commands import audit_command, rules_command  # noqa: F401  (register commands)
from tlsaudit.cli_commands.shared import app, console

__all__ = ["app", "console", "main"]


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
