"""Production implementation of git operations using subprocess."""

import logging
import subprocess
from pathlib import Path

from jira_branch.git.abc import Git
from jira_branch.git.types import GitError, GitErrorKind

logger = logging.getLogger(__name__)

# Fragments of git's stderr that mean the working tree blocks a branch switch.
_BLOCKED_SWITCH_MARKERS = (
    "resolve your current index first",
    "needs merge",
    "would be overwritten by checkout",
    "you have unmerged paths",
)


class RealGit(Git):
    """Production implementation of git operations using subprocess.

    All operations execute actual git commands.
    """

    def is_available(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "--version"],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError:
            return False
        return result.returncode == 0

    def is_inside_work_tree(self, cwd: Path) -> bool:
        result = self._run(["git", "rev-parse", "--is-inside-work-tree"], cwd)
        return result.returncode == 0 and result.stdout.strip() == "true"

    def has_unmerged_paths(self, cwd: Path) -> bool:
        result = self._run(["git", "ls-files", "--unmerged"], cwd)
        return result.returncode == 0 and bool(result.stdout.strip())

    def branch_exists(self, cwd: Path, branch_name: str) -> bool:
        result = self._run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}"], cwd
        )
        return result.returncode == 0

    def list_local_branches(self, cwd: Path) -> list[str]:
        result = self._run(["git", "branch", "--format=%(refname:short)"], cwd)
        if result.returncode != 0:
            raise _classify_failure(result.stderr, "list local branches")
        return [line.strip() for line in result.stdout.strip().split("\n") if line.strip()]

    def create_and_checkout(self, cwd: Path, branch_name: str, start_point: str | None) -> None:
        cmd = ["git", "checkout", "-b", branch_name]
        if start_point is not None:
            cmd.append(start_point)
        result = self._run(cmd, cwd)
        if result.returncode != 0:
            raise _classify_failure(result.stderr, f"create branch '{branch_name}'")

    def checkout_branch(self, cwd: Path, branch_name: str) -> None:
        result = self._run(["git", "checkout", branch_name], cwd)
        if result.returncode != 0:
            raise _classify_failure(result.stderr, f"checkout branch '{branch_name}'")

    def _run(self, cmd: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
        """Run a git command without raising on non-zero exit.

        Raises:
            GitError: If the git executable cannot be started
        """
        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            return subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=False)
        except FileNotFoundError as e:
            raise GitError(kind=GitErrorKind.UNAVAILABLE, message="git is not installed") from e


def _classify_failure(stderr: str, operation: str) -> GitError:
    """Map git's stderr to a GitError with the matching kind."""
    detail = stderr.strip()
    lowered = detail.lower()
    if "not a git repository" in lowered:
        kind = GitErrorKind.NOT_A_REPOSITORY
    elif any(marker in lowered for marker in _BLOCKED_SWITCH_MARKERS):
        kind = GitErrorKind.UNMERGED_CHANGES
    else:
        kind = GitErrorKind.FAILED
    return GitError(kind=kind, message=f"Failed to {operation}: {detail}")
