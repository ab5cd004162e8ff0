"""Jira issue search gateway and fetcher."""
