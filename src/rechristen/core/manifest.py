"""Reading the DESCRIPTION manifest of an R package.

DESCRIPTION files use the Debian control format: ``Field: value`` lines,
with continuation lines starting with whitespace.
"""

from __future__ import annotations

import re
from pathlib import Path

from rechristen.core.errors import IoFailureError

_FIELD_RE = re.compile(r"^([A-Za-z0-9/@._-]+):\s*(.*)$")

# Roxygen roclets always run after a rename
BASE_ROCLETS = ["namespace", "rd"]


def parse_description(text: str) -> dict[str, str]:
    """Parse DESCRIPTION text into a field -> value mapping.

    Continuation lines are joined to the previous field with a single space.
    Lines that are neither fields nor continuations are ignored.
    """
    fields: dict[str, str] = {}
    current: str | None = None

    for line in text.splitlines():
        if not line.strip():
            continue
        if line[0] in " \t":
            if current is not None:
                fields[current] = f"{fields[current]} {line.strip()}".strip()
            continue
        match = _FIELD_RE.match(line)
        if match:
            current = match.group(1)
            fields[current] = match.group(2).strip()
        else:
            current = None

    return fields


def read_description(path: Path) -> dict[str, str]:
    """Read and parse a DESCRIPTION file.

    Raises:
        IoFailureError: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IoFailureError(f"Cannot read manifest '{path}': {e}", path=path) from e
    return parse_description(text)


def roclets_for(fields: dict[str, str]) -> list[str]:
    """Roclets to run for a package, adding ``collate`` when it declares a Collate order."""
    roclets = list(BASE_ROCLETS)
    if any(name.startswith("Collate") for name in fields):
        roclets.append("collate")
    return roclets
