"""Documentation rebuilds through roxygen2."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from rechristen.integrations.base import DocGenerator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 600


class DocGenerationError(Exception):
    """Roxygen could not rebuild the documentation."""


def _r_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_roxygen_call(package_dir: Path, roclets: list[str]) -> str:
    """Build the R expression that rebuilds docs for ``package_dir``."""
    roclet_vector = ", ".join(_r_string(r) for r in roclets)
    return f"roxygen2::roxygenise(package.dir = {_r_string(package_dir.as_posix())}, roclets = c({roclet_vector}))"


class RoxygenDocGenerator(DocGenerator):
    """Runs ``roxygen2::roxygenise`` through ``Rscript``."""

    def __init__(self, rscript: str = "Rscript", timeout: int = DEFAULT_TIMEOUT) -> None:
        self.rscript = rscript
        self.timeout = timeout

    def generate(self, package_dir: Path, roclets: list[str]) -> None:
        """Rebuild docs in place.

        Raises:
            DocGenerationError: If Rscript is missing, times out or fails.
        """
        if shutil.which(self.rscript) is None:
            raise DocGenerationError(f"{self.rscript} not found. Install R to rebuild documentation.")

        cmd = [self.rscript, "-e", build_roxygen_call(package_dir, roclets)]
        logger.info(f"Rebuilding docs for {package_dir} with roclets {roclets}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=package_dir,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise DocGenerationError(f"roxygen timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise DocGenerationError(f"roxygen failed: {result.stderr.strip()[:500]}")
