"""Selecting the files whose contents get rewritten."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rechristen.core.models import FileSet

logger = logging.getLogger(__name__)

# Lower-cased extensions of text files that may mention the package name
SCRIPT_EXTENSIONS = {".r"}
COMPILED_EXTENSIONS = {".c", ".cc", ".cpp", ".h", ".hpp"}
NUMERICAL_EXTENSIONS = {".f", ".f90", ".f95"}
DSL_EXTENSIONS = {".stan"}
DOC_EXTENSIONS = {".md", ".rmd", ".qmd", ".rnw", ".rd", ".html", ".bib", ".tex"}
DATA_EXTENSIONS = {".yml", ".yaml", ".json"}

REWRITE_EXTENSIONS = (
    SCRIPT_EXTENSIONS
    | COMPILED_EXTENSIONS
    | NUMERICAL_EXTENSIONS
    | DSL_EXTENSIONS
    | DOC_EXTENSIONS
    | DATA_EXTENSIONS
)

# Extension-less files at the package root
MANIFEST_FILES = ("DESCRIPTION", "NAMESPACE")

# Included only when present; "{name}" is the old package name
OPTIONAL_FILES = (".Rbuildignore", ".gitignore", "inst/CITATION", "{name}.Rproj")

# Never descended into
VCS_DIRS = {".git", ".svn", ".hg"}


def has_rewrite_extension(path: Path) -> bool:
    """Check if a file's extension (case-insensitive) marks it for rewriting."""
    return path.suffix.lower() in REWRITE_EXTENSIONS


def _is_regular_file(path: Path) -> bool:
    # Symlinks may point outside the package
    return path.is_file() and not path.is_symlink()


def classify_files(root: Path, old_name: str) -> FileSet:
    """Collect every file under ``root`` whose contents should be rewritten.

    Walks the whole tree, hidden files and directories included, skipping
    version-control metadata and symlinked files. Adds the root manifests
    and the optional dotfiles/project file when they exist.

    Args:
        root: Absolute package root
        old_name: Current package name

    Returns:
        De-duplicated set of absolute file paths
    """
    selected: set[Path] = set()

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in VCS_DIRS]
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if has_rewrite_extension(candidate) and _is_regular_file(candidate):
                selected.add(candidate)

    extras = [*MANIFEST_FILES, *(name.format(name=old_name) for name in OPTIONAL_FILES)]
    for relative in extras:
        candidate = root / relative
        if _is_regular_file(candidate):
            selected.add(candidate)

    logger.debug(f"Classified {len(selected)} file(s) under {root} for rewriting")
    return frozenset(selected)
