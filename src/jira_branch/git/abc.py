"""Abstract base class for the git operations jira-branch needs.

All implementations (real, fake) must implement this interface. Mutations
raise GitError on failure; queries return plain values.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Abstract interface for git branch operations."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the git executable can be run."""
        ...

    @abstractmethod
    def is_inside_work_tree(self, cwd: Path) -> bool:
        """Check whether cwd is inside a git working tree.

        Args:
            cwd: Directory to check
        """
        ...

    @abstractmethod
    def has_unmerged_paths(self, cwd: Path) -> bool:
        """Check whether the index has unresolved merge conflicts.

        Args:
            cwd: Working directory of the repository
        """
        ...

    @abstractmethod
    def branch_exists(self, cwd: Path, branch_name: str) -> bool:
        """Check whether a local branch exists.

        Args:
            cwd: Working directory of the repository
            branch_name: Short branch name (without refs/heads/)
        """
        ...

    @abstractmethod
    def list_local_branches(self, cwd: Path) -> list[str]:
        """List all local branch names.

        Args:
            cwd: Working directory of the repository

        Returns:
            Short branch names in git's sort order
        """
        ...

    @abstractmethod
    def create_and_checkout(self, cwd: Path, branch_name: str, start_point: str | None) -> None:
        """Create a new branch and switch to it.

        Args:
            cwd: Working directory of the repository
            branch_name: Name of the new branch
            start_point: Commit or branch to start from, None for HEAD

        Raises:
            GitError: If git refuses to create or switch
        """
        ...

    @abstractmethod
    def checkout_branch(self, cwd: Path, branch_name: str) -> None:
        """Switch to an existing local branch.

        Args:
            cwd: Working directory of the repository
            branch_name: Branch to check out

        Raises:
            GitError: If git refuses to switch
        """
        ...
