"""Shared fixtures for rechristen tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from rechristen.core.models import RenameOptions, RenameRequest

PackageFactory = Callable[..., Path]


def write_files(root: Path, files: dict[str, str | bytes]) -> None:
    """Write a mapping of relative path -> content under root."""
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")


@pytest.fixture
def make_package(tmp_path: Path) -> PackageFactory:
    """Factory creating an R package directory under tmp_path.

    A DESCRIPTION with ``Package: <name>`` is written unless
    ``description=False`` or the files mapping provides its own.
    """

    def _make(name: str = "boringname", files: dict[str, str | bytes] | None = None, description: bool = True) -> Path:
        root = tmp_path / name
        root.mkdir()
        contents: dict[str, str | bytes] = {}
        if description:
            contents["DESCRIPTION"] = f"Package: {name}\nTitle: Does Things\nVersion: 0.1.0\n"
        contents.update(files or {})
        write_files(root, contents)
        return root

    return _make


@pytest.fixture
def quiet_options() -> RenameOptions:
    """Options with every external call and prompt disabled."""
    return RenameOptions(check_validity=False, change_remote=False, regenerate_docs=False, confirm=False)


@pytest.fixture
def make_request(quiet_options: RenameOptions) -> Callable[..., RenameRequest]:
    def _make(path: Path, new_name: str, **overrides: object) -> RenameRequest:
        options = quiet_options.model_copy(update=overrides)
        return RenameRequest(path=path, new_name=new_name, options=options)

    return _make
