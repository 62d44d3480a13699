"""Interfaces for the external services a rename talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

from rechristen.core.errors import NotAVcsRepoError
from rechristen.core.models import NameVerdict

# Asks a yes/no question; None means no usable answer
Confirmer = Callable[[str], bool | None]


class NameValidator(ABC):
    """Checks whether a package name is valid and available."""

    @abstractmethod
    def check(self, name: str) -> NameVerdict:
        """Check a candidate name.

        Args:
            name: Candidate package name

        Returns:
            Verdict for display; never blocks the rename
        """


class DocGenerator(ABC):
    """Regenerates reference documentation for a package."""

    @abstractmethod
    def generate(self, package_dir: Path, roclets: list[str]) -> None:
        """Rebuild docs in place.

        Args:
            package_dir: Package root
            roclets: Roxygen roclets to run
        """


class VcsClient(ABC):
    """Reads and writes remote URLs of a version-controlled directory."""

    @abstractmethod
    def open(self, path: Path) -> Any:
        """Open the repository containing ``path``.

        Raises:
            NotAVcsRepoError: If ``path`` is not under version control.
        """

    @abstractmethod
    def list_remotes(self, repo: Any) -> list[str]:
        """Configured remote names, in configuration order."""

    @abstractmethod
    def get_remote_url(self, repo: Any, remote: str) -> str:
        """URL of the named remote."""

    @abstractmethod
    def set_remote_url(self, repo: Any, remote: str, url: str) -> None:
        """Point the named remote at ``url``."""


class NullNameValidator(NameValidator):
    """Accepts every name without looking anything up."""

    def check(self, name: str) -> NameVerdict:
        return NameVerdict(name=name, valid=True, available=None, details=["Not checked"])


class NullDocGenerator(DocGenerator):
    """Does nothing; used when docs are not rebuilt."""

    def generate(self, package_dir: Path, roclets: list[str]) -> None:
        """Do nothing."""


class NullVcsClient(VcsClient):
    """Treats every path as unversioned."""

    def open(self, path: Path) -> Any:
        raise NotAVcsRepoError(f"'{path}' is not under version control")

    def list_remotes(self, repo: Any) -> list[str]:
        return []

    def get_remote_url(self, repo: Any, remote: str) -> str:
        raise NotAVcsRepoError("No repository")

    def set_remote_url(self, repo: Any, remote: str, url: str) -> None:
        raise NotAVcsRepoError("No repository")
