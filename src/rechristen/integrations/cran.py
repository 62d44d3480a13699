"""Package-name checks against R naming rules and CRAN.

Availability is looked up through the crandb API, which answers 404 for
packages that were never published on CRAN.
"""

from __future__ import annotations

import logging
import re

import httpx

from rechristen.core.models import NameVerdict
from rechristen.integrations.base import NameValidator

logger = logging.getLogger(__name__)

CRANDB_URL = "https://crandb.r-pkg.org"
DEFAULT_TIMEOUT = 10.0

# Letters, digits and dots; starts with a letter, does not end with a dot
R_PACKAGE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9.]*[A-Za-z0-9]$")


class RegistryError(Exception):
    """The package registry could not be queried."""


def is_valid_package_name(name: str) -> bool:
    """Check a name against the R package naming rules."""
    return bool(R_PACKAGE_NAME_RE.match(name))


class CranNameValidator(NameValidator):
    """Validates names locally and looks them up on CRAN.

    A failed lookup yields ``available=None`` instead of raising, since the
    verdict is informational only.
    """

    def __init__(
        self,
        base_url: str = CRANDB_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def _lookup(self, name: str) -> bool:
        """Check whether ``name`` is free on CRAN.

        Raises:
            RegistryError: On network errors or unexpected responses.
        """
        url = f"{self.base_url}/{name}"
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
        except httpx.HTTPError as e:
            raise RegistryError(f"CRAN lookup failed: {e}") from e

        if response.status_code == 404:
            return True
        if response.status_code == 200:
            return False
        raise RegistryError(f"CRAN lookup returned HTTP {response.status_code}")

    def check(self, name: str) -> NameVerdict:
        details: list[str] = []
        valid = is_valid_package_name(name)
        if valid:
            details.append("Valid R package name")
        else:
            details.append("Invalid R package name: use letters, digits and dots, start with a letter, no trailing dot")

        try:
            available: bool | None = self._lookup(name)
        except RegistryError as e:
            logger.warning(f"Name check incomplete: {e}")
            available = None
            details.append(f"CRAN availability unknown ({e})")
        else:
            details.append("Available on CRAN" if available else "Already taken on CRAN")

        return NameVerdict(name=name, valid=valid, available=available, details=details)
