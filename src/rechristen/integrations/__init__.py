"""External services: name registry, git and roxygen."""

from rechristen.integrations.base import (
    Confirmer,
    DocGenerator,
    NameValidator,
    NullDocGenerator,
    NullNameValidator,
    NullVcsClient,
    VcsClient,
)
from rechristen.integrations.cran import CranNameValidator
from rechristen.integrations.git import GitCliClient
from rechristen.integrations.roxygen import RoxygenDocGenerator

__all__ = [
    "Confirmer",
    "CranNameValidator",
    "DocGenerator",
    "GitCliClient",
    "NameValidator",
    "NullDocGenerator",
    "NullNameValidator",
    "NullVcsClient",
    "RoxygenDocGenerator",
    "VcsClient",
]
