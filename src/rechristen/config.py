"""Configuration management for rechristen."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from rechristen.core.models import RenameOptions

DEFAULT_CONFIG_PATH = Path(".rechristen/config.yaml")


class Config(BaseModel):
    """rechristen configuration.

    Rename defaults:
        check_validity, change_remote, regenerate_docs, remote_name, confirm
        and whole_word_only seed the options of every rename; CLI flags win.
    """

    check_validity: bool = Field(default=True, description="Check name validity and CRAN availability first")
    change_remote: bool = Field(default=True, description="Repoint the git remote URL to the new name")
    regenerate_docs: bool = Field(default=False, description="Delete man/*.Rd and rerun roxygen")
    remote_name: str | None = Field(default=None, description="Remote to update (default: first configured)")
    confirm: bool = Field(default=True, description="Ask before touching any file")
    whole_word_only: bool = Field(default=True, description="Only replace the old name as a delimited token")
    git_timeout: int = Field(default=10, description="Timeout for git commands in seconds")
    rscript: str = Field(default="Rscript", description="Rscript executable used to run roxygen")
    roxygen_timeout: int = Field(default=600, description="Timeout for documentation rebuilds in seconds")
    registry_url: str = Field(default="https://crandb.r-pkg.org", description="CRAN metadata API base URL")
    http_timeout: float = Field(default=10.0, description="Timeout for registry lookups in seconds")

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file or use defaults."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if config_path.exists():
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path) -> None:
        """Save configuration to file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)

    def rename_options(self) -> RenameOptions:
        """Options for a rename, taken from this configuration."""
        return RenameOptions(
            check_validity=self.check_validity,
            change_remote=self.change_remote,
            regenerate_docs=self.regenerate_docs,
            remote_name=self.remote_name,
            confirm=self.confirm,
            whole_word_only=self.whole_word_only,
        )
