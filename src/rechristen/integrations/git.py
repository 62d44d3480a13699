"""Remote URL management through the ``git`` command line."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from rechristen.core.errors import NotAVcsRepoError
from rechristen.integrations.base import VcsClient

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class GitError(Exception):
    """A git command failed."""


@dataclass(frozen=True)
class GitRepository:
    """Handle to an opened git working tree."""

    root: Path


@dataclass
class GitResult:
    """Result of a git command execution."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command succeeded."""
        return self.returncode == 0


def parse_remotes_output(output: str) -> list[str]:
    """Parse ``git remote`` output into remote names, keeping order."""
    return [line.strip() for line in output.splitlines() if line.strip()]


class GitCliClient(VcsClient):
    """VCS client running ``git`` in a subprocess."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT, executable: str = "git") -> None:
        self.timeout = timeout
        self.executable = executable

    def _run(self, cwd: Path, args: list[str]) -> GitResult:
        """Run a git command in ``cwd``.

        Raises:
            GitError: If git is not installed or times out.
        """
        cmd = [self.executable, *args]
        logger.debug(f"Running git command: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                cwd=cwd,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitError("git not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {args[0]} timed out after {self.timeout}s") from e
        return GitResult(stdout=result.stdout, stderr=result.stderr, returncode=result.returncode)

    def _checked(self, repo: GitRepository, args: list[str]) -> str:
        result = self._run(repo.root, args)
        if not result.success:
            raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return result.stdout

    def open(self, path: Path) -> GitRepository:
        """Open the working tree containing ``path``.

        A missing git executable is treated the same as an unversioned path.
        """
        try:
            result = self._run(path, ["rev-parse", "--show-toplevel"])
        except GitError as e:
            raise NotAVcsRepoError(f"'{path}' is not under version control: {e}") from e
        if not result.success:
            raise NotAVcsRepoError(f"'{path}' is not under version control")
        return GitRepository(root=Path(result.stdout.strip()))

    def list_remotes(self, repo: GitRepository) -> list[str]:
        return parse_remotes_output(self._checked(repo, ["remote"]))

    def get_remote_url(self, repo: GitRepository, remote: str) -> str:
        return self._checked(repo, ["remote", "get-url", remote]).strip()

    def set_remote_url(self, repo: GitRepository, remote: str, url: str) -> None:
        self._checked(repo, ["remote", "set-url", remote, url])
        logger.info(f"Remote '{remote}' now points at {url}")
