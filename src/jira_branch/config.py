"""Configuration for jira-branch.

Two kinds of configuration exist:

- JiraConfig: host and credentials, read from the environment once at the CLI
  boundary and passed explicitly to the search gateway.
- UserConfig: browsing preferences persisted in the user's config directory as
  TOML. The default JQL is derived from it.

Example config.toml:
  default_project_key = "ABC"
  filter_in_progress = true
  filter_mine = true
"""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import click
import tomli_w

APP_NAME = "jira-branch"
CONFIG_FILE_NAME = "config.toml"


class ConfigError(Exception):
    """Configuration is missing or unreadable."""


@dataclass(frozen=True)
class JiraConfig:
    """Connection settings for the Jira REST API.

    Attributes:
        host: Base URL of the Jira site (e.g., "https://example.atlassian.net")
        user: Account email or username for basic auth
        token: API token (or password on self-hosted Jira)
    """

    host: str
    user: str
    token: str

    @staticmethod
    def from_env(environ: Mapping[str, str]) -> "JiraConfig":
        """Build a JiraConfig from JIRA_HOST, JIRA_USER and JIRA_TOKEN.

        JIRA_PASS is accepted in place of JIRA_TOKEN.

        Args:
            environ: Environment mapping (usually os.environ)

        Returns:
            JiraConfig with a normalized host

        Raises:
            ConfigError: If any of the variables is missing or empty
        """
        host = environ.get("JIRA_HOST", "").strip()
        user = environ.get("JIRA_USER", "").strip()
        token = environ.get("JIRA_TOKEN", "").strip() or environ.get("JIRA_PASS", "").strip()

        missing = [
            name
            for name, value in (("JIRA_HOST", host), ("JIRA_USER", user), ("JIRA_TOKEN", token))
            if not value
        ]
        if missing:
            raise ConfigError(f"Missing Jira credentials: set {', '.join(missing)}")

        if "://" not in host:
            host = f"https://{host}"
        return JiraConfig(host=host.rstrip("/"), user=user, token=token)


@dataclass(frozen=True)
class UserConfig:
    """Persisted browsing preferences.

    Attributes:
        default_project_key: Restrict the default query to this project ("" for all)
        filter_in_progress: Only show issues whose status is "In Progress"
        filter_mine: Only show issues assigned to the current user
    """

    default_project_key: str
    filter_in_progress: bool
    filter_mine: bool

    @staticmethod
    def default() -> "UserConfig":
        """Create default preferences (my in-progress issues, any project)."""
        return UserConfig(default_project_key="", filter_in_progress=True, filter_mine=True)


def default_config_path() -> Path:
    """Location of config.toml in the platform's per-user config directory."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def load_user_config(path: Path) -> UserConfig:
    """Load UserConfig from path if present; otherwise return defaults.

    Unknown keys are ignored. Missing keys fall back to their defaults.

    Raises:
        ConfigError: If the file exists but is not valid TOML
    """
    if not path.exists():
        return UserConfig.default()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e

    defaults = UserConfig.default()
    return UserConfig(
        default_project_key=str(data.get("default_project_key", defaults.default_project_key)),
        filter_in_progress=bool(data.get("filter_in_progress", defaults.filter_in_progress)),
        filter_mine=bool(data.get("filter_mine", defaults.filter_mine)),
    )


def save_user_config(path: Path, config: UserConfig) -> None:
    """Write UserConfig to path as TOML, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    content = tomli_w.dumps(
        {
            "default_project_key": config.default_project_key,
            "filter_in_progress": config.filter_in_progress,
            "filter_mine": config.filter_mine,
        }
    )
    path.write_text(content, encoding="utf-8")


def build_jql(config: UserConfig) -> str:
    """Build the default JQL query from user preferences.

    Examples:
        >>> build_jql(UserConfig.default())
        'assignee = currentUser() AND status = "In Progress" ORDER BY updated DESC'
        >>> build_jql(UserConfig("OPS", filter_in_progress=False, filter_mine=False))
        'project = OPS ORDER BY updated DESC'
    """
    clauses: list[str] = []
    if config.default_project_key:
        clauses.append(f"project = {config.default_project_key}")
    if config.filter_mine:
        clauses.append("assignee = currentUser()")
    if config.filter_in_progress:
        clauses.append('status = "In Progress"')

    order = "ORDER BY updated DESC"
    if not clauses:
        return order
    return f"{' AND '.join(clauses)} {order}"
