"""Tests for the rename pipeline."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from rechristen.core.errors import (
    AlreadyExistsError,
    InvalidNameError,
    IoFailureError,
    MoveFailedError,
    NotAPackageError,
    NotFoundError,
    UserDeclinedError,
)
from rechristen.core.models import NameVerdict, RenameRequest
from rechristen.core.orchestrator import Renamer, rename_package, validate_new_name
from rechristen.integrations.base import DocGenerator, NameValidator, NullVcsClient, VcsClient

PackageFactory = Callable[..., Path]
RequestFactory = Callable[..., RenameRequest]


class StubValidator(NameValidator):
    def __init__(self, verdict: NameVerdict | None = None, error: Exception | None = None) -> None:
        self.verdict = verdict
        self.error = error
        self.checked: list[str] = []

    def check(self, name: str) -> NameVerdict:
        self.checked.append(name)
        if self.error:
            raise self.error
        return self.verdict or NameVerdict(name=name, valid=True, available=True)


class RecordingDocs(DocGenerator):
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[Path, list[str]]] = []
        self.error = error

    def generate(self, package_dir: Path, roclets: list[str]) -> None:
        self.calls.append((package_dir, roclets))
        if self.error:
            raise self.error


class DictVcsClient(VcsClient):
    def __init__(self, remotes: dict[str, str], fail: bool = False) -> None:
        self.remotes = remotes
        self.fail = fail
        self.opened: list[Path] = []

    def open(self, path: Path) -> Any:
        self.opened.append(path)
        return path

    def list_remotes(self, repo: Any) -> list[str]:
        return list(self.remotes)

    def get_remote_url(self, repo: Any, remote: str) -> str:
        return self.remotes[remote]

    def set_remote_url(self, repo: Any, remote: str, url: str) -> None:
        if self.fail:
            raise RuntimeError("permission denied")
        self.remotes[remote] = url


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under root to its bytes."""
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}


class TestValidateNewName:
    """Tests for validate_new_name."""

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b"])
    def test_rejects_unusable(self, name: str) -> None:
        with pytest.raises(InvalidNameError):
            validate_new_name(name)

    def test_accepts_package_name(self) -> None:
        validate_new_name("my.pkg2")


class TestEndToEnd:
    """Full renames on a temporary package."""

    def test_boringname_to_superpack(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("boringname", {"R/boringname.R": "boringname <- function() 1\n"})

        report = rename_package(make_request(root, "superpack"))

        new_root = root.parent / "superpack"
        assert not root.exists()
        assert new_root.is_dir()
        assert "Package: superpack" in (new_root / "DESCRIPTION").read_text().splitlines()
        assert not (new_root / "R" / "boringname.R").exists()
        assert (new_root / "R" / "superpack.R").read_text() == "superpack <- function() 1\n"
        assert report.new_path == new_root
        assert report.old_name == "boringname"

    def test_no_whole_word_occurrences_left(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package(
            "oldname",
            {
                "NAMESPACE": "useDynLib(oldname, .registration = TRUE)\n",
                "R/oldname-package.R": "#' oldname: things\n\"_PACKAGE\"\n",
                "R/zzz.R": ".onLoad <- function(lib, pkg) library.dynam('oldname', pkg, lib)\n",
                "src/init.c": "void R_init_oldname(DllInfo *dll) {}\n",
                "README.md": "# oldname\n\n`oldnameX` stays\n",
                "vignettes/oldname.Rmd": "library(oldname)\n",
                "tests/testthat.R": "library(oldname)\ntest_check(\"oldname\")\n",
                ".Rbuildignore": "^oldname\\.Rproj$\n",
                "oldname.Rproj": "Version: 1.0\n",
            },
        )

        rename_package(make_request(root, "newname"))

        new_root = root.parent / "newname"
        whole_word = re.compile(r"(?<!\w)oldname(?!\w)")
        for path in new_root.rglob("*"):
            if path.is_file():
                assert not whole_word.search(path.read_text()), path
        assert "`oldnameX` stays" in (new_root / "README.md").read_text()
        assert (new_root / "newname.Rproj").exists()
        assert (new_root / "R" / "newname-package.R").exists()
        assert (new_root / "vignettes" / "newname.Rmd").exists()
        assert "R_init_oldname" in (new_root / "src" / "init.c").read_text()

    def test_substring_mode_changes_embedded(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"R/a.R": "oldnameX <- oldname_helper()\n"})

        rename_package(make_request(root, "newname", whole_word_only=False))

        assert (root.parent / "newname" / "R" / "a.R").read_text() == "newnameX <- newname_helper()\n"

    def test_unclassified_file_untouched(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"inst/notes.txt": "oldname\r\n", "data/x.csv": "oldname,1\n"})

        rename_package(make_request(root, "newname"))

        new_root = root.parent / "newname"
        assert (new_root / "inst" / "notes.txt").read_bytes() == b"oldname\r\n"
        assert (new_root / "data" / "x.csv").read_text() == "oldname,1\n"

    def test_binaries_always_pruned(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"src/oldname.so": b"\x7fELF", "src/oldname.o": b"\x7fELF", "man/f.Rd": "x\n"})

        report = rename_package(make_request(root, "newname"))

        new_root = root.parent / "newname"
        assert not (new_root / "src" / "oldname.so").exists()
        assert not (new_root / "src" / "oldname.o").exists()
        assert (new_root / "man" / "f.Rd").exists()
        assert len(report.pruned) == 2

    def test_cached_data_warning(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"data/set.rda": b"RDX3"})

        report = rename_package(make_request(root, "newname"))

        assert any("data/set.rda" in w for w in report.warnings)
        assert (root.parent / "newname" / "data" / "set.rda").read_bytes() == b"RDX3"

    def test_warning_logged_once(
        self, make_package: PackageFactory, make_request: RequestFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = make_package("oldname", {"data/set.rda": b"RDX3"})

        with caplog.at_level(logging.WARNING):
            rename_package(make_request(root, "newname"))

        assert [r.getMessage() for r in caplog.records if "set.rda" in r.getMessage()] == [
            "Serialized data may reference the old name and must be reloaded and resaved: data/set.rda"
        ]

    def test_symlink_target_outside_package_untouched(
        self, make_package: PackageFactory, make_request: RequestFactory, tmp_path: Path
    ) -> None:
        shared = tmp_path / "shared" / "common.h"
        shared.parent.mkdir()
        shared.write_text("#include <oldname.h>\n")
        root = make_package("oldname", {"src/oldname.c": "#include <oldname.h>\n"})
        (root / "src" / "common.h").symlink_to(shared)

        rename_package(make_request(root, "newname"))

        assert shared.read_text() == "#include <oldname.h>\n"
        assert (root.parent / "newname" / "src" / "newname.c").read_text() == "#include <newname.h>\n"


class TestPreconditions:
    """Failures before any file is touched."""

    def test_missing_path(self, tmp_path: Path, make_request: RequestFactory) -> None:
        with pytest.raises(NotFoundError):
            rename_package(make_request(tmp_path / "nope", "newname"))

    def test_file_instead_of_directory(self, tmp_path: Path, make_request: RequestFactory) -> None:
        target = tmp_path / "file"
        target.write_text("x")
        with pytest.raises(NotFoundError):
            rename_package(make_request(target, "newname"))

    def test_sibling_exists(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"R/oldname.R": "oldname <- 1\n", "oldname.Rproj": "x\n"})
        (root.parent / "newname").mkdir()
        before = snapshot(root)

        with pytest.raises(AlreadyExistsError):
            rename_package(make_request(root, "newname"))

        assert snapshot(root) == before

    def test_missing_description(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"R/oldname.R": "oldname <- 1\n"}, description=False)
        before = snapshot(root)

        with pytest.raises(NotAPackageError):
            rename_package(make_request(root, "newname"))

        assert snapshot(root) == before
        assert not (root.parent / "newname").exists()

    def test_missing_path_reported_before_bad_name(self, tmp_path: Path, make_request: RequestFactory) -> None:
        with pytest.raises(NotFoundError):
            rename_package(make_request(tmp_path / "nope", "a/b"))

    def test_filesystem_root_is_not_a_package(self, make_request: RequestFactory) -> None:
        with pytest.raises(NotAPackageError):
            rename_package(make_request(Path("/"), "newname"))

    def test_same_name(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        with pytest.raises(InvalidNameError):
            rename_package(make_request(root, "oldname"))

    def test_relative_path_resolved(
        self,
        make_package: PackageFactory,
        make_request: RequestFactory,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        root = make_package("oldname")
        monkeypatch.chdir(root.parent)

        report = rename_package(make_request(Path("oldname"), "newname"))

        assert report.new_path.is_absolute()
        assert (root.parent / "newname" / "DESCRIPTION").exists()


class TestConfirmation:
    """Tests for the injected confirmation prompt."""

    def test_declined_has_no_side_effects(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname", {"R/oldname.R": "oldname <- 1\n"})
        before = snapshot(root)
        asked: list[str] = []

        def decline(message: str) -> bool:
            asked.append(message)
            return False

        with pytest.raises(UserDeclinedError):
            rename_package(make_request(root, "newname", confirm=True), confirm=decline)

        assert snapshot(root) == before
        assert str(root) in asked[0]

    def test_inconclusive_answer_aborts(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        with pytest.raises(UserDeclinedError):
            rename_package(make_request(root, "newname", confirm=True), confirm=lambda _: None)
        assert root.exists()

    def test_no_prompt_available_aborts(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        with pytest.raises(UserDeclinedError):
            rename_package(make_request(root, "newname", confirm=True))

    def test_accepted(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        rename_package(make_request(root, "newname", confirm=True), confirm=lambda _: True)
        assert (root.parent / "newname").exists()

    def test_prompt_comes_before_collision_check(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        (root.parent / "newname").mkdir()
        with pytest.raises(UserDeclinedError):
            rename_package(make_request(root, "newname", confirm=True), confirm=lambda _: False)


class TestValidityCheck:
    """Tests for the informational name check."""

    def test_verdict_reported_and_not_blocking(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        verdict = NameVerdict(name="newname", valid=True, available=False, details=["Already taken on CRAN"])
        validator = StubValidator(verdict)
        seen: list[NameVerdict] = []

        report = rename_package(
            make_request(root, "newname", check_validity=True),
            validator=validator,
            on_verdict=seen.append,
        )

        assert validator.checked == ["newname"]
        assert seen == [verdict]
        assert report.verdict == verdict
        assert any("Already taken" in w for w in report.warnings)
        assert (root.parent / "newname").exists()

    def test_validator_error_is_warning(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")

        report = rename_package(
            make_request(root, "newname", check_validity=True),
            validator=StubValidator(error=RuntimeError("offline")),
        )

        assert report.verdict is None
        assert any("offline" in w for w in report.warnings)

    def test_skipped_when_disabled(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        validator = StubValidator()
        rename_package(make_request(make_package("oldname"), "newname"), validator=validator)
        assert validator.checked == []


class TestRemoteAndDocs:
    """Tests for the post-move steps."""

    def test_remote_updated_against_new_path(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        vcs = DictVcsClient({"origin": "git@github.com:me/oldname.git"})

        report = rename_package(make_request(root, "newname", change_remote=True), vcs=vcs)

        assert vcs.opened == [root.parent / "newname"]
        assert vcs.remotes["origin"] == "git@github.com:me/newname.git"
        assert report.remote is not None
        assert report.remote.old_url == "git@github.com:me/oldname.git"

    def test_remote_failure_is_warning(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        vcs = DictVcsClient({"origin": "git@github.com:me/oldname.git"}, fail=True)

        report = rename_package(make_request(root, "newname", change_remote=True), vcs=vcs)

        assert (root.parent / "newname").exists()
        assert report.remote is None
        assert any("permission denied" in w for w in report.warnings)

    def test_unversioned_is_fine(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        report = rename_package(make_request(make_package("oldname"), "newname", change_remote=True), vcs=NullVcsClient())
        assert report.remote is None
        assert report.warnings == []

    def test_docs_pruned_and_regenerated(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package(
            "oldname",
            {
                "DESCRIPTION": "Package: oldname\nCollate:\n    'a.R'\n",
                "man/oldname.Rd": "\\name{oldname}\n",
            },
        )
        docs = RecordingDocs()

        report = rename_package(make_request(root, "newname", regenerate_docs=True), docs=docs)

        new_root = root.parent / "newname"
        assert not (new_root / "man" / "oldname.Rd").exists()
        assert docs.calls == [(new_root, ["namespace", "rd", "collate"])]
        assert report.warnings == []

    def test_docs_failure_is_warning(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        root = make_package("oldname")
        report = rename_package(
            make_request(root, "newname", regenerate_docs=True),
            docs=RecordingDocs(error=RuntimeError("Rscript not found")),
        )
        assert any("Rscript not found" in w for w in report.warnings)

    def test_docs_not_touched_by_default(self, make_package: PackageFactory, make_request: RequestFactory) -> None:
        docs = RecordingDocs()
        rename_package(make_request(make_package("oldname"), "newname"), docs=docs)
        assert docs.calls == []


class TestPartialFailure:
    """Failures after mutation has started are not rolled back."""

    def test_rewrite_failure_leaves_directory_in_place(
        self, make_package: PackageFactory, make_request: RequestFactory
    ) -> None:
        root = make_package("oldname", {"R/oldname.R": "oldname <- 1\n", "vignettes/bad.Rmd": b"\xff\xfe\x00"})

        with pytest.raises(IoFailureError) as exc_info:
            Renamer(make_request(root, "newname")).run()

        assert exc_info.value.path == root / "vignettes" / "bad.Rmd"
        assert root.exists()
        assert not (root.parent / "newname").exists()
        assert (root / "R" / "oldname.R").exists()

    def test_warnings_logged_when_move_fails(
        self, make_package: PackageFactory, make_request: RequestFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = make_package("oldname", {"data/set.rda": b"RDX3"})

        with (
            caplog.at_level(logging.WARNING),
            patch("rechristen.core.mover.os.rename", side_effect=PermissionError("denied")),
        ):
            with pytest.raises(MoveFailedError):
                rename_package(make_request(root, "newname"))

        assert any("data/set.rda" in r.getMessage() for r in caplog.records)
        assert root.exists()
