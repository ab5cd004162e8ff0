"""Shared constants for the jira-branch CLI."""

# Process exit codes
EXIT_CONFIG_ERROR = 1
EXIT_CANCELLED = 3
EXIT_FETCH_FAILED = 4
EXIT_GIT_FAILED = 5
