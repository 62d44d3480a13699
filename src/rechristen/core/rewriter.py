"""Textual replacement of the package name inside files."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from rechristen.core.errors import IoFailureError

logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def build_pattern(old_name: str, whole_word_only: bool = True) -> re.Pattern[str]:
    """Compile the pattern matching ``old_name``.

    In whole-word mode a match may not touch a letter, digit or underscore
    on either side, so ``oldname_helper`` and ``myoldname`` are left alone.
    """
    escaped = re.escape(old_name)
    if whole_word_only:
        return re.compile(rf"(?<!\w){escaped}(?!\w)")
    return re.compile(escaped)


def rewrite_text(text: str, pattern: re.Pattern[str], new_name: str) -> str:
    """Replace every match line by line, normalizing line endings to ``\\n``.

    The result keeps the line count of the input, and every line, the last
    one included, ends with a newline.
    """
    if not text:
        return ""
    lines = _NEWLINE_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    lines = [pattern.sub(lambda _: new_name, line) for line in lines]
    return "\n".join(lines) + "\n"


def rewrite_file(path: Path, pattern: re.Pattern[str], new_name: str) -> bool:
    """Rewrite one file in place.

    Returns:
        True if the file content changed and was written back

    Raises:
        IoFailureError: If the file cannot be read, decoded or written.
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            original = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailureError(f"Cannot read '{path}': {e}", path=path) from e

    updated = rewrite_text(original, pattern, new_name)
    if updated == original:
        return False

    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(updated)
    except OSError as e:
        raise IoFailureError(f"Cannot write '{path}': {e}", path=path) from e

    logger.debug(f"Rewrote {path}")
    return True


def rewrite_contents(
    files: Iterable[Path],
    old_name: str,
    new_name: str,
    whole_word_only: bool = True,
) -> list[Path]:
    """Replace ``old_name`` with ``new_name`` in every file.

    Stops at the first file that fails; files already rewritten stay rewritten.

    Returns:
        Files whose content changed, sorted
    """
    pattern = build_pattern(old_name, whole_word_only)
    changed = [path for path in sorted(files) if rewrite_file(path, pattern, new_name)]
    logger.info(f"Rewrote {len(changed)} file(s) replacing '{old_name}' with '{new_name}'")
    return changed
