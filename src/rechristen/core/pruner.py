"""Deleting generated artifacts so they get rebuilt under the new name."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DOCS_DIR = "man"
DOC_EXTENSION = ".Rd"

SOURCES_DIR = "src"
BINARY_EXTENSIONS = (".o", ".so", ".dll", ".dylib")

# Serialized R objects that may record the old namespace
CACHED_DATA_GLOBS = ("data/*.rda", "data/*.RData", "data/*.rds", "R/sysdata.rda", "inst/extdata/*.rds")


@dataclass
class PruneResult:
    """Outcome of a best-effort deletion pass."""

    deleted: list[Path] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)


def _delete_all(paths: Iterable[Path]) -> PruneResult:
    result = PruneResult()
    for path in paths:
        try:
            path.unlink()
        except OSError as e:
            logger.debug(f"Could not delete {path}: {e}")
            result.failures.append(f"Could not delete '{path}': {e}")
            continue
        logger.debug(f"Deleted {path}")
        result.deleted.append(path)
    return result


def prune_docs(root: Path) -> PruneResult:
    """Delete every generated ``man/*.Rd`` page."""
    docs_dir = root / DOCS_DIR
    if not docs_dir.is_dir():
        return PruneResult()
    return _delete_all(sorted(p for p in docs_dir.iterdir() if p.suffix == DOC_EXTENSION and p.is_file()))


def prune_binaries(root: Path, old_name: str) -> PruneResult:
    """Delete compiled objects and libraries named after the old package."""
    candidates = (root / SOURCES_DIR / f"{old_name}{ext}" for ext in BINARY_EXTENSIONS)
    return _delete_all(p for p in candidates if p.is_file())


def find_cached_data(root: Path) -> list[Path]:
    """Find serialized data files that may need to be reloaded and resaved."""
    found: set[Path] = set()
    for pattern in CACHED_DATA_GLOBS:
        found.update(p for p in root.glob(pattern) if p.is_file())
    return sorted(found)
