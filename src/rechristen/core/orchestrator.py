"""Rename pipeline: sequences the steps of renaming an R package in place."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from rechristen.core.classifier import classify_files
from rechristen.core.errors import (
    AlreadyExistsError,
    InvalidNameError,
    NotAPackageError,
    NotFoundError,
    UserDeclinedError,
    VcsUpdateFailedError,
)
from rechristen.core.manifest import read_description, roclets_for
from rechristen.core.models import NameVerdict, Package, RenameReport, RenameRequest
from rechristen.core.mover import move_directory
from rechristen.core.paths import rename_paths
from rechristen.core.pruner import PruneResult, find_cached_data, prune_binaries, prune_docs
from rechristen.core.remote import update_remote
from rechristen.core.rewriter import rewrite_contents
from rechristen.integrations.base import Confirmer, DocGenerator, NameValidator, VcsClient
from rechristen.integrations.cran import CranNameValidator
from rechristen.integrations.git import GitCliClient
from rechristen.integrations.roxygen import RoxygenDocGenerator

logger = logging.getLogger(__name__)

CONFIRM_MESSAGE = (
    "Warning! This modifies the contents and names of the files within '{path}'. "
    "Make sure you have a backup. Do you wish to continue?"
)


def validate_new_name(new_name: str) -> None:
    """Reject names that cannot be a sibling directory name.

    Raises:
        InvalidNameError: If the name is empty, '.', '..' or contains a separator.
    """
    if not new_name or new_name in (".", "..") or "/" in new_name or "\\" in new_name:
        raise InvalidNameError(f"'{new_name}' cannot be used as a package directory name")


class Renamer:
    """Runs one rename request against the file system.

    Preconditions are all checked before the first file is touched. After
    that nothing is rolled back: a failure while rewriting or renaming
    leaves a partially renamed package.
    """

    def __init__(
        self,
        request: RenameRequest,
        validator: NameValidator | None = None,
        vcs: VcsClient | None = None,
        docs: DocGenerator | None = None,
        confirm: Confirmer | None = None,
        on_verdict: Callable[[NameVerdict], None] | None = None,
    ) -> None:
        """Initialize the renamer.

        Args:
            request: What to rename and how
            validator: Name checker; CRAN lookup when None
            vcs: Remote URL client; git CLI when None
            docs: Documentation builder; roxygen when None
            confirm: Yes/no prompt; without one a requested confirmation aborts
            on_verdict: Called with the name verdict before confirmation
        """
        self.request = request
        self.options = request.options
        self.validator = validator
        self.vcs = vcs
        self.docs = docs
        self.confirm = confirm
        self.on_verdict = on_verdict

    # =========================================================================
    # Preflight
    # =========================================================================

    def _resolve(self) -> Path:
        path = self.request.path.expanduser()
        if not path.exists():
            raise NotFoundError(f"Path '{path}' does not exist", path=path)
        path = path.resolve()
        if not path.is_dir():
            raise NotFoundError(f"Path '{path}' is not a directory", path=path)
        return path

    def _check_validity(self, report: RenameReport) -> None:
        validator = self.validator or CranNameValidator()
        try:
            report.verdict = validator.check(self.request.new_name)
        except Exception as e:
            self._warn(report, f"Could not check name '{self.request.new_name}': {e}")
            return
        if self.on_verdict is not None:
            self.on_verdict(report.verdict)
        if not report.verdict.usable:
            self._warn(report, f"'{self.request.new_name}' may not be a usable name: {'; '.join(report.verdict.details)}")

    def _warn(self, report: RenameReport, message: str) -> None:
        logger.warning(message)
        report.warn(message)

    def _ask(self, path: Path) -> None:
        answer = self.confirm(CONFIRM_MESSAGE.format(path=path)) if self.confirm else None
        if answer is not True:
            raise UserDeclinedError("Rename aborted, nothing was changed", path=path)

    # =========================================================================
    # Pipeline
    # =========================================================================

    def run(self) -> RenameReport:
        """Execute the rename.

        Returns:
            Report of everything the run changed and any warnings

        Raises:
            RenameError: A subclass describing the first fatal failure.
        """
        new_name = self.request.new_name
        path = self._resolve()
        validate_new_name(new_name)
        package = Package(path=path)
        old_name = package.name
        if not old_name:
            raise NotAPackageError(f"'{path}' has no name and cannot be a package directory", path=path)
        new_path = path.with_name(new_name)

        report = RenameReport(old_name=old_name, new_name=new_name, old_path=path, new_path=new_path)

        if self.options.check_validity:
            self._check_validity(report)

        if self.options.confirm:
            self._ask(path)

        if new_name == old_name:
            raise InvalidNameError(f"Package is already named '{new_name}'", path=path)
        if new_path.exists():
            raise AlreadyExistsError(f"Path '{new_path}' already exists", path=new_path)
        if not package.is_valid():
            raise NotAPackageError(f"'{path}' is not an R package: no DESCRIPTION file found", path=path)

        logger.info(f"Renaming package '{old_name}' to '{new_name}' at {path}")

        files = classify_files(path, old_name)
        report.rewritten = rewrite_contents(files, old_name, new_name, self.options.whole_word_only)
        report.renamed = rename_paths(path, old_name, new_name)

        if self.options.regenerate_docs:
            self._prune(report, prune_docs(path))
        self._prune(report, prune_binaries(path, old_name))

        cached = find_cached_data(path)
        if cached:
            names = ", ".join(str(p.relative_to(path)) for p in cached)
            self._warn(report, f"Serialized data may reference the old name and must be reloaded and resaved: {names}")

        move_directory(path, new_path)

        if self.options.change_remote:
            self._update_remote(report, new_path, old_name, new_name)

        if self.options.regenerate_docs:
            self._regenerate_docs(report, new_path)

        logger.info(f"Package '{old_name}' renamed to '{new_name}'")
        return report

    def _prune(self, report: RenameReport, result: PruneResult) -> None:
        report.pruned.extend(result.deleted)
        for failure in result.failures:
            self._warn(report, failure)

    def _update_remote(self, report: RenameReport, new_path: Path, old_name: str, new_name: str) -> None:
        vcs = self.vcs or GitCliClient()
        try:
            report.remote = update_remote(vcs, new_path, old_name, new_name, self.options.remote_name)
        except VcsUpdateFailedError as e:
            self._warn(report, str(e))

    def _regenerate_docs(self, report: RenameReport, new_path: Path) -> None:
        docs = self.docs or RoxygenDocGenerator()
        try:
            roclets = roclets_for(read_description(new_path / "DESCRIPTION"))
            docs.generate(new_path, roclets)
        except Exception as e:
            self._warn(report, f"Documentation was not regenerated: {e}")


def rename_package(
    request: RenameRequest,
    *,
    validator: NameValidator | None = None,
    vcs: VcsClient | None = None,
    docs: DocGenerator | None = None,
    confirm: Confirmer | None = None,
    on_verdict: Callable[[NameVerdict], None] | None = None,
) -> RenameReport:
    """Rename an R package in place.

    Convenience wrapper around :class:`Renamer`.
    """
    return Renamer(request, validator=validator, vcs=vcs, docs=docs, confirm=confirm, on_verdict=on_verdict).run()
