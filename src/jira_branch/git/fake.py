"""Fake git operations for testing."""

from pathlib import Path

from jira_branch.git.abc import Git
from jira_branch.git.types import GitError


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    State Management:
    -----------------
    The fake keeps a list of local branches and the current branch.
    create_and_checkout and checkout_branch update both, so later queries
    see the change.

    Mutation Tracking:
    -----------------
    - created_branches: (branch_name, start_point) passed to create_and_checkout()
    - checked_out_branches: Branches switched to via checkout_branch()
    """

    def __init__(
        self,
        *,
        available: bool = True,
        inside_work_tree: bool = True,
        unmerged: bool = False,
        local_branches: list[str] | None = None,
        current_branch: str | None = "main",
        checkout_error: GitError | None = None,
    ) -> None:
        """Create FakeGit with pre-configured state.

        Args:
            available: Whether git "is installed"
            inside_work_tree: Whether cwd is a repository
            unmerged: Whether the index has unresolved conflicts
            local_branches: Existing local branches (defaults to ["main"])
            current_branch: Checked-out branch
            checkout_error: Raised by create_and_checkout and checkout_branch when set
        """
        self._available = available
        self._inside_work_tree = inside_work_tree
        self._unmerged = unmerged
        self._local_branches = list(local_branches) if local_branches is not None else ["main"]
        self._current_branch = current_branch
        self._checkout_error = checkout_error

        self._created_branches: list[tuple[str, str | None]] = []
        self._checked_out_branches: list[str] = []

    def is_available(self) -> bool:
        return self._available

    def is_inside_work_tree(self, cwd: Path) -> bool:
        return self._inside_work_tree

    def has_unmerged_paths(self, cwd: Path) -> bool:
        return self._unmerged

    def branch_exists(self, cwd: Path, branch_name: str) -> bool:
        return branch_name in self._local_branches

    def list_local_branches(self, cwd: Path) -> list[str]:
        return list(self._local_branches)

    def create_and_checkout(self, cwd: Path, branch_name: str, start_point: str | None) -> None:
        if self._checkout_error is not None:
            raise self._checkout_error
        self._created_branches.append((branch_name, start_point))
        self._local_branches.append(branch_name)
        self._current_branch = branch_name

    def checkout_branch(self, cwd: Path, branch_name: str) -> None:
        if self._checkout_error is not None:
            raise self._checkout_error
        self._checked_out_branches.append(branch_name)
        self._current_branch = branch_name

    @property
    def current_branch(self) -> str | None:
        return self._current_branch

    @property
    def created_branches(self) -> list[tuple[str, str | None]]:
        """Branches created via create_and_checkout().

        This property is for test assertions only.
        """
        return self._created_branches

    @property
    def checked_out_branches(self) -> list[str]:
        """Branches switched to via checkout_branch().

        This property is for test assertions only.
        """
        return self._checked_out_branches
