"""Rename an existing R package in place."""

from rechristen.core.errors import RenameError
from rechristen.core.models import RenameOptions, RenameReport, RenameRequest
from rechristen.core.orchestrator import Renamer, rename_package

__all__ = [
    "RenameError",
    "RenameOptions",
    "RenameReport",
    "RenameRequest",
    "Renamer",
    "rename_package",
]
