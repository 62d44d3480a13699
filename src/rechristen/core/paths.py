"""Renaming files whose names embed the package name."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rechristen.core.errors import IoFailureError
from rechristen.core.models import RenameRecord

logger = logging.getLogger(__name__)

_LONGFORM_TEMPLATES = (
    "{name}.Rmd",
    "{name}.Rnw",
    "{name}.qmd",
    "{name}.pdf",
    "{name}.html",
    "{name}.bib",
)

RENAME_TABLE: tuple[RenameRecord, ...] = (
    # RStudio project
    RenameRecord("", "{name}.Rproj"),
    # R scripts
    RenameRecord("R", "{name}.R"),
    RenameRecord("R", "{name}-package.R"),
    RenameRecord("R", "{name}-deprecated.R"),
    RenameRecord("R", "{name}-defunct.R"),
    # Compiled code
    RenameRecord("src", "{name}.c"),
    RenameRecord("src", "{name}.cpp"),
    RenameRecord("src", "{name}.h"),
    RenameRecord("src", "{name}.hpp"),
    RenameRecord("src", "{name}.f"),
    RenameRecord("src", "{name}.f90"),
    # Stan models
    RenameRecord("exec", "{name}.stan"),
    RenameRecord("inst/stan", "{name}.stan"),
    # Long-form docs and their rendered forms
    *(RenameRecord("", template) for template in _LONGFORM_TEMPLATES),
    *(RenameRecord("vignettes", template) for template in _LONGFORM_TEMPLATES),
    # CI workflows
    RenameRecord("", "{name}.yml"),
    RenameRecord("", "{name}.yaml"),
    RenameRecord(".github/workflows", "{name}.yml"),
    RenameRecord(".github/workflows", "{name}.yaml"),
)


def rename_paths(
    root: Path,
    old_name: str,
    new_name: str,
    table: tuple[RenameRecord, ...] = RENAME_TABLE,
) -> list[tuple[Path, Path]]:
    """Rename every table entry present under ``root``.

    Missing entries are skipped. Renames already done are kept if a later
    one fails.

    Returns:
        (source, target) pairs that were renamed, in table order

    Raises:
        IoFailureError: If a target already exists or the OS refuses a rename.
    """
    renamed: list[tuple[Path, Path]] = []

    for record in table:
        source = record.source(root, old_name)
        if not source.is_file():
            continue
        target = record.target(root, new_name)
        if target.exists():
            raise IoFailureError(f"Cannot rename '{source}': '{target}' already exists", path=target)
        try:
            os.rename(source, target)
        except OSError as e:
            raise IoFailureError(f"Cannot rename '{source}' to '{target}': {e}", path=source) from e
        logger.debug(f"Renamed {source} -> {target}")
        renamed.append((source, target))

    logger.info(f"Renamed {len(renamed)} file(s) under {root}")
    return renamed
