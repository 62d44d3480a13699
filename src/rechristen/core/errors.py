"""Exceptions raised by the rename pipeline."""

from __future__ import annotations

from pathlib import Path


class RenameError(Exception):
    """Base exception for rename failures.

    Attributes:
        path: The offending path, when the failure is tied to one.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(RenameError):
    """The package path does not exist."""


class NotAPackageError(RenameError):
    """The directory has no DESCRIPTION manifest."""


class AlreadyExistsError(RenameError):
    """The destination path is already taken."""


class InvalidNameError(RenameError):
    """The new name cannot be used as a directory name."""


class UserDeclinedError(RenameError):
    """The user declined the confirmation prompt (clean abort)."""


class IoFailureError(RenameError):
    """A file could not be read, written, renamed or deleted."""


class MoveFailedError(RenameError):
    """The package root directory could not be moved."""


class VcsUpdateFailedError(RenameError):
    """The version-control remote URL could not be updated."""


class NotAVcsRepoError(Exception):
    """The path is not under version control."""
