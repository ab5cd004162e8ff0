"""jira-branch CLI entry point.

This package provides a Click-based CLI for finding a Jira issue in an
interactive terminal browser and turning it into a git branch.
See `jira-branch --help` for details.
"""

from jira_branch.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `jira-branch` console script."""
    cli()
