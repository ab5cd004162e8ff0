"""Create and switch to the branch for a selected issue."""

import logging
from pathlib import Path

from jira_branch.git.abc import Git
from jira_branch.git.types import BranchAlreadyExists, BranchCreated, GitError, GitErrorKind

logger = logging.getLogger(__name__)


class BranchCreator:
    """Checks preconditions, then creates or switches to a branch.

    Every precondition failure is raised as a GitError with its own kind so
    the CLI can report it distinctly:

    - UNAVAILABLE: git is not installed
    - NOT_A_REPOSITORY: cwd is not inside a working tree
    - UNMERGED_CHANGES: the index has conflicts (or git refused the switch)
    """

    def __init__(self, git: Git, cwd: Path) -> None:
        self._git = git
        self._cwd = cwd

    def create_and_switch(
        self, branch_name: str, *, start_point: str | None = None
    ) -> BranchCreated | BranchAlreadyExists:
        """Create branch_name and check it out.

        If the branch already exists it is checked out instead and
        BranchAlreadyExists is returned; start_point is ignored in that case.

        Args:
            branch_name: Branch to create
            start_point: Commit or branch to start from, None for HEAD

        Returns:
            BranchCreated or BranchAlreadyExists

        Raises:
            GitError: If git is unavailable, cwd is not a repository, the
                tree has unmerged paths, or git fails
        """
        self._ensure_ready()

        if self._git.branch_exists(self._cwd, branch_name):
            logger.debug("Branch %s exists, switching to it", branch_name)
            self._git.checkout_branch(self._cwd, branch_name)
            return BranchAlreadyExists(branch_name=branch_name)

        self._git.create_and_checkout(self._cwd, branch_name, start_point)
        return BranchCreated(branch_name=branch_name)

    def switch_to_existing(self, branch_name: str) -> BranchAlreadyExists:
        """Check out a branch that is known to exist.

        Raises:
            GitError: Same conditions as create_and_switch, or FAILED if the
                branch does not exist
        """
        self._ensure_ready()
        if not self._git.branch_exists(self._cwd, branch_name):
            raise GitError(
                kind=GitErrorKind.FAILED, message=f"Branch '{branch_name}' does not exist"
            )
        self._git.checkout_branch(self._cwd, branch_name)
        return BranchAlreadyExists(branch_name=branch_name)

    def local_branches(self) -> list[str]:
        """List local branches, raising GitError if git cannot be used here."""
        self._ensure_ready()
        return self._git.list_local_branches(self._cwd)

    def _ensure_ready(self) -> None:
        if not self._git.is_available():
            raise GitError(kind=GitErrorKind.UNAVAILABLE, message="git is not installed")
        if not self._git.is_inside_work_tree(self._cwd):
            raise GitError(
                kind=GitErrorKind.NOT_A_REPOSITORY,
                message=f"{self._cwd} is not inside a git repository",
            )
        if self._git.has_unmerged_paths(self._cwd):
            raise GitError(
                kind=GitErrorKind.UNMERGED_CHANGES,
                message="Resolve merge conflicts before switching branches",
            )
