"""Tests for the jira-branch command.

The TUI is replaced by FakeTuiRunner, so each test picks the session outcome
directly and checks what the command does with it.
"""

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from jira_branch.cli.cli import cli
from jira_branch.cli.constants import (
    EXIT_CANCELLED,
    EXIT_CONFIG_ERROR,
    EXIT_FETCH_FAILED,
    EXIT_GIT_FAILED,
)
from jira_branch.config import UserConfig, load_user_config, save_user_config
from jira_branch.context import JiraBranchContext
from jira_branch.git.fake import FakeGit
from jira_branch.git.types import GitError, GitErrorKind
from jira_branch.jira.fake import make_issue
from jira_branch.jira.types import Issue, RemoteError
from jira_branch.tui.runner import FakeTuiRunner
from jira_branch.tui.session import SessionOutcome, SessionState

ISSUE = make_issue("ABC-123", "Fix login bug!!")


def _selected(issue: Issue = ISSUE) -> SessionOutcome:
    return SessionOutcome(state=SessionState.SELECTED, issue=issue, error=None)


def _build_ctx(
    tmp_path: Path,
    *,
    outcome: SessionOutcome | None,
    git: FakeGit | None = None,
) -> tuple[JiraBranchContext, FakeTuiRunner]:
    tui_runner = FakeTuiRunner(outcome=outcome)
    ctx = JiraBranchContext.for_test(
        git=git,
        tui_runner=tui_runner,
        config_path=tmp_path / "config.toml",
    )
    return ctx, tui_runner


def test_selection_creates_branch(tmp_path: Path) -> None:
    """Selecting an issue creates and switches to its branch."""
    git = FakeGit()
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.created_branches == [("abc-123-fix-login-bug", None)]
    assert git.current_branch == "abc-123-fix-login-bug"
    assert "Created and switched to 'abc-123-fix-login-bug'" in result.output


def test_base_sets_start_point(tmp_path: Path) -> None:
    git = FakeGit()
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, ["--base", "origin/main"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.created_branches == [("abc-123-fix-login-bug", "origin/main")]


def test_existing_exact_branch_is_switched_to(tmp_path: Path) -> None:
    git = FakeGit(local_branches=["main", "abc-123-fix-login-bug"])
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 0, result.output
    assert git.created_branches == []
    assert git.checked_out_branches == ["abc-123-fix-login-bug"]
    assert "already exists; switched to it" in result.output


def test_other_issue_branch_can_be_chosen(tmp_path: Path) -> None:
    """An older branch for the same issue is offered and can be picked."""
    git = FakeGit(local_branches=["main", "abc-123-first-attempt"])
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, [], obj=ctx, input="1\n")

    assert result.exit_code == 0, result.output
    assert "Existing branches for ABC-123:" in result.output
    assert "1) abc-123-first-attempt" in result.output
    assert git.created_branches == []
    assert git.checked_out_branches == ["abc-123-first-attempt"]


def test_default_choice_creates_new_branch(tmp_path: Path) -> None:
    git = FakeGit(local_branches=["main", "abc-123-first-attempt"])
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, [], obj=ctx, input="\n")

    assert result.exit_code == 0, result.output
    assert git.created_branches == [("abc-123-fix-login-bug", None)]


def test_print_only_leaves_git_alone(tmp_path: Path) -> None:
    git = FakeGit()
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, ["--print-only"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert result.output == "abc-123-fix-login-bug\n"
    assert git.created_branches == []
    assert git.checked_out_branches == []


def test_emoji_summary_names_branch_after_key(tmp_path: Path) -> None:
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(make_issue("OPS-7", "🔥🔥🔥")))

    result = CliRunner().invoke(cli, ["--print-only"], obj=ctx)

    assert result.output == "ops-7\n"


def test_cancel_exits_with_cancelled_code(tmp_path: Path) -> None:
    git = FakeGit()
    outcome = SessionOutcome(state=SessionState.CANCELLED, issue=None, error=None)
    ctx, _ = _build_ctx(tmp_path, outcome=outcome, git=git)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_CANCELLED
    assert "Cancelled." in result.output
    assert git.created_branches == []


def test_app_exit_without_outcome_counts_as_cancel(tmp_path: Path) -> None:
    ctx, _ = _build_ctx(tmp_path, outcome=None)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_CANCELLED


def test_fetch_failure_exits_with_fetch_code(tmp_path: Path) -> None:
    error = RemoteError(kind="http", message="HTTP 500: Internal Server Error")
    outcome = SessionOutcome(state=SessionState.FAILED, issue=None, error=error)
    ctx, _ = _build_ctx(tmp_path, outcome=outcome)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_FETCH_FAILED
    assert "HTTP 500" in result.output
    assert "JIRA_TOKEN" not in result.output


def test_auth_failure_mentions_credentials(tmp_path: Path) -> None:
    error = RemoteError(kind="auth", message="HTTP 401: Unauthorized")
    outcome = SessionOutcome(state=SessionState.FAILED, issue=None, error=error)
    git = FakeGit()
    ctx, _ = _build_ctx(tmp_path, outcome=outcome, git=git)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_FETCH_FAILED
    assert "Jira request failed (auth)" in result.output
    assert "Check JIRA_USER and JIRA_TOKEN." in result.output
    assert git.created_branches == []


def test_not_a_repository_exits_with_git_code(tmp_path: Path) -> None:
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=FakeGit(inside_work_tree=False))

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_GIT_FAILED
    assert "not inside a git repository" in result.output
    assert "Run jira-branch from inside a git repository." in result.output


def test_unmerged_changes_exit_with_git_code(tmp_path: Path) -> None:
    git = FakeGit(unmerged=True)
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=git)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_GIT_FAILED
    assert "Resolve conflicts or stash local changes" in result.output
    assert git.current_branch == "main"


def test_git_failure_message_is_shown(tmp_path: Path) -> None:
    error = GitError(kind=GitErrorKind.FAILED, message="Failed to create branch: fatal: bad ref")
    ctx, _ = _build_ctx(tmp_path, outcome=_selected(), git=FakeGit(checkout_error=error))

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_GIT_FAILED
    assert "fatal: bad ref" in result.output


def test_default_jql_comes_from_preferences(tmp_path: Path) -> None:
    ctx, tui_runner = _build_ctx(tmp_path, outcome=None)

    CliRunner().invoke(cli, [], obj=ctx)

    (app,) = tui_runner.apps_run
    assert app.search_terms == (
        'assignee = currentUser() AND status = "In Progress" ORDER BY updated DESC'
    )


def test_flags_override_saved_preferences(tmp_path: Path) -> None:
    save_user_config(
        tmp_path / "config.toml",
        UserConfig(default_project_key="ABC", filter_in_progress=True, filter_mine=True),
    )
    ctx, tui_runner = _build_ctx(tmp_path, outcome=None)

    CliRunner().invoke(cli, ["--project", "OPS", "--everyone", "--any-status"], obj=ctx)

    (app,) = tui_runner.apps_run
    assert app.search_terms == "project = OPS ORDER BY updated DESC"


def test_jql_flag_replaces_default_query(tmp_path: Path) -> None:
    ctx, tui_runner = _build_ctx(tmp_path, outcome=None)

    CliRunner().invoke(cli, ["--jql", "sprint in openSprints()"], obj=ctx)

    (app,) = tui_runner.apps_run
    assert app.search_terms == "sprint in openSprints()"


def test_search_argument_seeds_filter(tmp_path: Path) -> None:
    ctx, tui_runner = _build_ctx(tmp_path, outcome=None)

    CliRunner().invoke(cli, ["login"], obj=ctx)

    (app,) = tui_runner.apps_run
    assert app.session.query == "login"


def test_save_persists_preferences(tmp_path: Path) -> None:
    ctx, _ = _build_ctx(tmp_path, outcome=None)

    result = CliRunner().invoke(cli, ["--project", "OPS", "--any-status", "--save"], obj=ctx)

    assert f"Saved preferences to {tmp_path / 'config.toml'}" in result.output
    assert load_user_config(tmp_path / "config.toml") == UserConfig(
        default_project_key="OPS", filter_in_progress=False, filter_mine=True
    )


def test_invalid_config_file_exits_with_config_code(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text("not = = toml", encoding="utf-8")
    ctx, tui_runner = _build_ctx(tmp_path, outcome=_selected())

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Invalid config file" in result.output
    assert tui_runner.apps_run == []


def test_missing_credentials_exit_with_config_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an injected context the command reads credentials from the environment."""
    for name in ("JIRA_HOST", "JIRA_USER", "JIRA_TOKEN", "JIRA_PASS"):
        monkeypatch.delenv(name, raising=False)

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Missing Jira credentials: set JIRA_HOST, JIRA_USER, JIRA_TOKEN" in result.output


def test_save_to_unwritable_location_exits_with_config_code(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("", encoding="utf-8")
    tui_runner = FakeTuiRunner(outcome=_selected())
    ctx = JiraBranchContext.for_test(tui_runner=tui_runner, config_path=blocker / "config.toml")

    result = CliRunner().invoke(cli, ["--project", "OPS", "--save"], obj=ctx)

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert "Could not save preferences" in result.output
    assert tui_runner.apps_run == []


def test_base_help_names_default_start_point() -> None:
    (base_option,) = [param for param in cli.params if param.name == "start_point"]
    assert isinstance(base_option, click.Option)
    assert base_option.help is not None
    assert "current HEAD" in base_option.help
