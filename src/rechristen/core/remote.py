"""Repointing the version-control remote after a rename."""

from __future__ import annotations

import logging
from pathlib import Path

from rechristen.core.errors import NotAVcsRepoError, VcsUpdateFailedError
from rechristen.core.models import RemoteChange
from rechristen.integrations.base import VcsClient

logger = logging.getLogger(__name__)


def update_remote(
    vcs: VcsClient,
    path: Path,
    old_name: str,
    new_name: str,
    remote_name: str | None = None,
) -> RemoteChange | None:
    """Replace ``old_name`` with ``new_name`` in a remote URL.

    Plain substring replacement: URLs are not source identifiers, so
    ``git@host:me/oldname.git`` becomes ``git@host:me/newname.git``.

    Args:
        vcs: Client used to open the repository
        path: Directory inside the working tree (the renamed package root)
        old_name: Previous package name
        new_name: New package name
        remote_name: Remote to update; the first configured remote if None

    Returns:
        The change made, or None if there was nothing to update

    Raises:
        VcsUpdateFailedError: If the client fails to read or write the remote.
    """
    try:
        repo = vcs.open(path)
    except NotAVcsRepoError:
        logger.info(f"{path} is not under version control, leaving remotes alone")
        return None

    try:
        if remote_name is None:
            remotes = vcs.list_remotes(repo)
            if not remotes:
                logger.info("Repository has no remotes configured")
                return None
            remote_name = remotes[0]

        old_url = vcs.get_remote_url(repo, remote_name)
        new_url = old_url.replace(old_name, new_name)
        if new_url == old_url:
            logger.info(f"Remote '{remote_name}' URL does not mention '{old_name}'")
            return None

        vcs.set_remote_url(repo, remote_name, new_url)
    except Exception as e:
        raise VcsUpdateFailedError(f"Could not update remote for '{path}': {e}", path=path) from e

    return RemoteChange(remote=remote_name, old_url=old_url, new_url=new_url)
