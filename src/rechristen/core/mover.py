"""Moving the package root directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rechristen.core.errors import MoveFailedError

logger = logging.getLogger(__name__)


def move_directory(source: Path, target: Path) -> Path:
    """Rename ``source`` to ``target`` with a single ``os.rename``.

    Raises:
        MoveFailedError: If the target exists or the OS denies the rename.
    """
    # Checked again here since the target may have appeared after preflight
    if target.exists():
        raise MoveFailedError(f"Cannot move '{source}': '{target}' already exists", path=target)

    try:
        os.rename(source, target)
    except OSError as e:
        raise MoveFailedError(f"Cannot move '{source}' to '{target}': {e}", path=source) from e

    logger.info(f"Moved {source} -> {target}")
    return target
