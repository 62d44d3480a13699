"""Rename engine: classification, rewriting, path renames and the pipeline."""

from rechristen.core.errors import (
    AlreadyExistsError,
    InvalidNameError,
    IoFailureError,
    MoveFailedError,
    NotAPackageError,
    NotAVcsRepoError,
    NotFoundError,
    RenameError,
    UserDeclinedError,
    VcsUpdateFailedError,
)
from rechristen.core.models import (
    FileSet,
    NameVerdict,
    Package,
    RemoteChange,
    RenameOptions,
    RenameRecord,
    RenameReport,
    RenameRequest,
)

__all__ = [
    "AlreadyExistsError",
    "FileSet",
    "InvalidNameError",
    "IoFailureError",
    "MoveFailedError",
    "NameVerdict",
    "NotAPackageError",
    "NotAVcsRepoError",
    "NotFoundError",
    "Package",
    "RemoteChange",
    "RenameError",
    "RenameOptions",
    "RenameRecord",
    "RenameReport",
    "RenameRequest",
    "UserDeclinedError",
    "VcsUpdateFailedError",
]
