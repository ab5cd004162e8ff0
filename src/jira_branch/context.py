"""Dependency container for jira-branch commands.

JiraBranchContext bundles every gateway a command touches. The CLI builds
the production context on first use; tests pass a context built with
for_test() through click's `obj`, following the ABC/Real/Fake pattern.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from jira_branch.browser import BrowserLauncher, FakeBrowserLauncher, RealBrowserLauncher
from jira_branch.config import JiraConfig, build_jql, default_config_path, load_user_config
from jira_branch.git.abc import Git
from jira_branch.git.fake import FakeGit
from jira_branch.git.real import RealGit
from jira_branch.jira.abc import JiraSearch
from jira_branch.jira.fake import FakeJiraSearch
from jira_branch.jira.real import RealJiraSearch
from jira_branch.tui.runner import FakeTuiRunner, RealTuiRunner, TuiRunner


@dataclass(frozen=True)
class JiraBranchContext:
    """Gateways and paths used by the CLI.

    Attributes:
        jira: Issue search gateway
        git: Git gateway for branch creation
        browser: Launcher for opening issues in the web UI
        tui_runner: Runs (or, in tests, captures) the browser app
        cwd: Directory git commands run in
        config_path: Location of the persisted UserConfig
    """

    jira: JiraSearch
    git: Git
    browser: BrowserLauncher
    tui_runner: TuiRunner
    cwd: Path
    config_path: Path

    @classmethod
    def for_production(
        cls, environ: Mapping[str, str], cwd: Path, *, config_path: Path | None = None
    ) -> "JiraBranchContext":
        """Create production context with real implementations.

        The search gateway's default JQL comes from the saved preferences.

        Args:
            environ: Environment holding JIRA_HOST, JIRA_USER, JIRA_TOKEN
            cwd: Working directory for git operations
            config_path: Preferences file, None for the per-user default

        Raises:
            ConfigError: If Jira credentials are missing or the preferences
                file is invalid
        """
        jira_config = JiraConfig.from_env(environ)
        if config_path is None:
            config_path = default_config_path()
        default_jql = build_jql(load_user_config(config_path))
        return cls(
            jira=RealJiraSearch(jira_config, default_jql=default_jql),
            git=RealGit(),
            browser=RealBrowserLauncher(),
            tui_runner=RealTuiRunner(),
            cwd=cwd,
            config_path=config_path,
        )

    @classmethod
    def for_test(
        cls,
        *,
        jira: JiraSearch | None = None,
        git: Git | None = None,
        browser: BrowserLauncher | None = None,
        tui_runner: TuiRunner | None = None,
        cwd: Path | None = None,
        config_path: Path | None = None,
    ) -> "JiraBranchContext":
        """Create test context with injectable fakes.

        Example:
            tui_runner = FakeTuiRunner(outcome=selected_outcome)
            git = FakeGit()
            ctx = JiraBranchContext.for_test(git=git, tui_runner=tui_runner)
            result = CliRunner().invoke(cli, [], obj=ctx)
            assert git.created_branches == [("abc-1-fix", None)]
        """
        return cls(
            jira=jira or FakeJiraSearch(),
            git=git or FakeGit(),
            browser=browser or FakeBrowserLauncher(),
            tui_runner=tui_runner or FakeTuiRunner(),
            cwd=cwd or Path("/fake/repo"),
            config_path=config_path or Path("/fake/config/config.toml"),
        )
