"""Output helpers separating human messages from machine-readable results.

user_output writes to stderr so stdout stays clean for values other
programs consume (e.g., `git checkout $(jira-branch --print-only)`).
"""

import click


def user_output(message: str = "", *, nl: bool = True) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, err=True, nl=nl)


def machine_output(message: str, *, nl: bool = True) -> None:
    """Write a machine-readable result to stdout."""
    click.echo(message, nl=nl)
