"""Result and error types for branch creation.

BranchCreated | BranchAlreadyExists is a discriminated success union: an
existing branch is switched to rather than treated as a failure. Hard
failures raise GitError with a GitErrorKind.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class BranchCreated:
    """A new branch was created and checked out."""

    branch_name: str


@dataclass(frozen=True)
class BranchAlreadyExists:
    """The branch already existed and was checked out instead."""

    branch_name: str

    @property
    def message(self) -> str:
        return f"Branch '{self.branch_name}' already exists; switched to it"


class GitErrorKind(Enum):
    """Why a branch operation failed."""

    UNAVAILABLE = "git-unavailable"
    NOT_A_REPOSITORY = "not-a-repository"
    UNMERGED_CHANGES = "unmerged-changes"
    FAILED = "git-failed"


class GitError(Exception):
    """A git operation failed.

    Attributes:
        kind: Failure category callers can branch on
        message: Human-readable detail, usually git's stderr
    """

    def __init__(self, *, kind: GitErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
