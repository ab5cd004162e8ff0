import logging
import os
from pathlib import Path
from typing import NoReturn

import click

from jira_branch.cli.constants import (
    EXIT_CANCELLED,
    EXIT_CONFIG_ERROR,
    EXIT_FETCH_FAILED,
    EXIT_GIT_FAILED,
)
from jira_branch.config import (
    ConfigError,
    UserConfig,
    build_jql,
    load_user_config,
    save_user_config,
)
from jira_branch.context import JiraBranchContext
from jira_branch.git.branch_creator import BranchCreator
from jira_branch.git.types import BranchCreated, GitError, GitErrorKind
from jira_branch.jira.types import Issue
from jira_branch.naming import matching_branches, synthesize_branch_name
from jira_branch.output import machine_output, user_output
from jira_branch.tui.app import IssueBrowserApp
from jira_branch.tui.session import SessionOutcome, SessionState

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

_GIT_ERROR_HINTS = {
    GitErrorKind.UNAVAILABLE: "Install git and make sure it is on your PATH.",
    GitErrorKind.NOT_A_REPOSITORY: "Run jira-branch from inside a git repository.",
    GitErrorKind.UNMERGED_CHANGES: "Resolve conflicts or stash local changes, then retry.",
}


@click.command("jira-branch", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="jira-branch")
@click.argument("search", required=False, default="")
@click.option("--jql", default=None, help="JQL to fetch instead of the configured default")
@click.option("--project", "project_key", default=None, help="Only show issues in this project")
@click.option(
    "--mine/--everyone", default=None, help="Only show issues assigned to you (default: on)"
)
@click.option(
    "--in-progress/--any-status",
    default=None,
    help="Only show issues that are In Progress (default: on)",
)
@click.option("--save", is_flag=True, help="Persist --project/--mine/--in-progress as defaults")
@click.option(
    "--base",
    "start_point",
    default=None,
    help=(
        "Start the new branch from this ref "
        "(default: current HEAD, not the remote's default branch)"
    ),
)
@click.option("--print-only", is_flag=True, help="Print the branch name without touching git")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    search: str,
    jql: str | None,
    project_key: str | None,
    mine: bool | None,
    in_progress: bool | None,
    save: bool,
    start_point: str | None,
    print_only: bool,
    debug: bool,
) -> None:
    """Pick a Jira issue and create a git branch for it.

    SEARCH pre-fills the filter box. Type to narrow the list, move with the
    arrow keys, press Enter to create and switch to a branch named after the
    issue, or Esc to quit.

    Requires JIRA_HOST, JIRA_USER and JIRA_TOKEN in the environment.

    \b
    Examples:
        jira-branch
        jira-branch login
        jira-branch --project OPS --everyone --save
        jira-branch --jql 'sprint in openSprints()' --base origin/main
        git switch $(jira-branch --print-only)
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = JiraBranchContext.for_production(os.environ, Path.cwd())
        except ConfigError as e:
            _fail(str(e), EXIT_CONFIG_ERROR)
    app_ctx: JiraBranchContext = ctx.obj

    try:
        user_config = load_user_config(app_ctx.config_path)
    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)

    effective = _apply_overrides(
        user_config, project_key=project_key, mine=mine, in_progress=in_progress
    )
    if save:
        try:
            save_user_config(app_ctx.config_path, effective)
        except OSError as e:
            _fail(f"Could not save preferences to {app_ctx.config_path}: {e}", EXIT_CONFIG_ERROR)
        user_output(f"Saved preferences to {app_ctx.config_path}")

    search_terms = jql if jql is not None else build_jql(effective)
    logger.debug("Using JQL: %s", search_terms)

    app = IssueBrowserApp(
        search=app_ctx.jira,
        browser=app_ctx.browser,
        search_terms=search_terms,
        initial_query=search,
    )
    outcome = app_ctx.tui_runner.run(app)
    issue = _require_selection(outcome)

    branch_name = synthesize_branch_name(issue)
    if print_only:
        machine_output(branch_name)
        return

    _switch_to_issue_branch(app_ctx, issue, branch_name, start_point)


def _apply_overrides(
    config: UserConfig,
    *,
    project_key: str | None,
    mine: bool | None,
    in_progress: bool | None,
) -> UserConfig:
    """Layer command-line flags over the persisted preferences."""
    return UserConfig(
        default_project_key=(
            project_key if project_key is not None else config.default_project_key
        ),
        filter_mine=mine if mine is not None else config.filter_mine,
        filter_in_progress=in_progress if in_progress is not None else config.filter_in_progress,
    )


def _require_selection(outcome: SessionOutcome | None) -> Issue:
    """Return the selected issue or exit with the code for the outcome."""
    if outcome is not None and outcome.state == SessionState.FAILED:
        assert outcome.error is not None
        message = str(outcome.error)
        if outcome.error.kind == "auth":
            message += "\nCheck JIRA_USER and JIRA_TOKEN."
        _fail(message, EXIT_FETCH_FAILED)

    if outcome is None or outcome.state != SessionState.SELECTED or outcome.issue is None:
        user_output("Cancelled.")
        raise SystemExit(EXIT_CANCELLED)

    return outcome.issue


def _switch_to_issue_branch(
    app_ctx: JiraBranchContext, issue: Issue, branch_name: str, start_point: str | None
) -> None:
    """Create the issue branch, or switch to an existing branch for the issue."""
    creator = BranchCreator(app_ctx.git, app_ctx.cwd)
    try:
        existing = [
            branch
            for branch in matching_branches(creator.local_branches(), issue)
            if branch != branch_name
        ]
        chosen = _choose_branch(issue, existing, branch_name) if existing else branch_name

        if chosen != branch_name:
            result = creator.switch_to_existing(chosen)
        else:
            result = creator.create_and_switch(branch_name, start_point=start_point)
    except GitError as e:
        hint = _GIT_ERROR_HINTS.get(e.kind)
        _fail(e.message if hint is None else f"{e.message}\n{hint}", EXIT_GIT_FAILED)

    if isinstance(result, BranchCreated):
        user_output(click.style("✓ ", fg="green") + f"Created and switched to '{branch_name}'")
    else:
        user_output(click.style("✓ ", fg="green") + result.message)


def _choose_branch(issue: Issue, existing: list[str], branch_name: str) -> str:
    """Ask whether to reuse an existing branch for the issue or create a new one."""
    user_output(f"Existing branches for {issue.key}:")
    user_output(f"  0) create '{branch_name}'")
    for index, branch in enumerate(existing, start=1):
        user_output(f"  {index}) {branch}")
    choice = click.prompt(
        "Branch", type=click.IntRange(0, len(existing)), default=0, err=True
    )
    if choice == 0:
        return branch_name
    return existing[choice - 1]


def _fail(message: str, exit_code: int) -> NoReturn:
    user_output(click.style("Error: ", fg="red") + message)
    raise SystemExit(exit_code)
