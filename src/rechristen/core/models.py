"""Core data models for a rename run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Files selected for content rewriting
FileSet = frozenset[Path]


class RenameOptions(BaseModel):
    """Switches controlling a single rename."""

    model_config = ConfigDict(frozen=True)

    check_validity: bool = Field(default=True, description="Check name validity and CRAN availability first")
    change_remote: bool = Field(default=True, description="Repoint the git remote URL to the new name")
    regenerate_docs: bool = Field(default=False, description="Delete man/*.Rd and rerun roxygen")
    remote_name: str | None = Field(default=None, description="Remote to update (default: first configured)")
    confirm: bool = Field(default=True, description="Ask before touching any file")
    whole_word_only: bool = Field(default=True, description="Only replace the old name as a delimited token")


class RenameRequest(BaseModel):
    """Immutable input to the rename pipeline."""

    model_config = ConfigDict(frozen=True)

    path: Path
    new_name: str
    options: RenameOptions = Field(default_factory=RenameOptions)


class Package(BaseModel):
    """An R package directory on disk."""

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def name(self) -> str:
        """Package name, taken from the directory's final segment."""
        return self.path.name

    @property
    def manifest(self) -> Path:
        return self.path / "DESCRIPTION"

    def is_valid(self) -> bool:
        """Check that the DESCRIPTION manifest exists directly under the root."""
        return self.manifest.is_file()


@dataclass(frozen=True)
class RenameRecord:
    """A file whose name embeds the package name.

    Attributes:
        directory: Directory relative to the package root ("" for the root)
        template: Filename with a ``{name}`` placeholder, e.g. ``"{name}-package.R"``
    """

    directory: str
    template: str

    def source(self, root: Path, old_name: str) -> Path:
        return root / self.directory / self.template.format(name=old_name)

    def target(self, root: Path, new_name: str) -> Path:
        return root / self.directory / self.template.format(name=new_name)


@dataclass(frozen=True)
class NameVerdict:
    """Result of a name validity/availability check.

    Attributes:
        name: The checked name
        valid: True if the name follows R package naming rules
        available: True if free on the registry, None if unknown
        details: Human-readable notes for display
    """

    name: str
    valid: bool
    available: bool | None = None
    details: list[str] = field(default_factory=list)

    @property
    def usable(self) -> bool:
        """Check if the name is valid and not known to be taken."""
        return self.valid and self.available is not False


@dataclass
class RemoteChange:
    """A remote URL rewrite."""

    remote: str
    old_url: str
    new_url: str


@dataclass
class RenameReport:
    """Summary of what a finished rename did."""

    old_name: str
    new_name: str
    old_path: Path
    new_path: Path
    rewritten: list[Path] = field(default_factory=list)
    renamed: list[tuple[Path, Path]] = field(default_factory=list)
    pruned: list[Path] = field(default_factory=list)
    verdict: NameVerdict | None = None
    remote: RemoteChange | None = None
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)
