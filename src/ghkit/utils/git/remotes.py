"""
Remote recreation.

Replacing a remote leaves nothing of the old one behind: branches that
tracked it lose their upstream, the refs its fetch refspecs created are
deleted and the whole remote.<name> section is removed before the remote is
added again with the new URL.
"""

import re
from typing import List, Tuple

from git import GitCommandError, Remote, Repo

from ghkit.errors import RemoteRegistryError
from ghkit.logging import get_logger
from ghkit.utils.git.common import ere_escape, list_refs, ref_matches, refspec_destination

logger = get_logger("ghkit.utils.git.remotes")

# git config exit codes
_NO_MATCH = 1
_KEY_NOT_SET = 5

_BRANCH_REMOTE_KEY = re.compile(r"^branch\.(.+)\.remote$")


def _config_get_regexp(repo: Repo, pattern: str) -> List[Tuple[str, str]]:
    try:
        output = repo.git.config("--local", "--get-regexp", pattern)
    except GitCommandError as e:
        if e.status == _NO_MATCH:
            return []
        raise
    entries = []
    for line in output.splitlines():
        key, _, value = line.partition(" ")
        entries.append((key, value))
    return entries


def _config_get_all(repo: Repo, key: str) -> List[str]:
    try:
        output = repo.git.config("--local", "--get-all", key)
    except GitCommandError as e:
        if e.status == _NO_MATCH:
            return []
        raise
    return [line for line in output.splitlines() if line]


def _config_unset_all(repo: Repo, key: str) -> None:
    try:
        repo.git.config("--local", "--unset-all", key)
    except GitCommandError as e:
        if e.status != _KEY_NOT_SET:
            raise


def remote_exists(repo: Repo, name: str) -> bool:
    return name in [remote.name for remote in repo.remotes]


class RemoteRegistry:
    """Deletes a remote with everything attached to it, then adds it again"""

    def tracking_branches(self, repo: Repo, name: str) -> List[str]:
        """Local branches whose upstream is the named remote"""
        branches = []
        for key, value in _config_get_regexp(repo, r"^branch\..*\.remote$"):
            match = _BRANCH_REMOTE_KEY.match(key)
            if match and value == name and match.group(1) not in branches:
                branches.append(match.group(1))
        return branches

    def _detach_branches(self, repo: Repo, name: str) -> None:
        for branch in self.tracking_branches(repo, name):
            _config_unset_all(repo, f"branch.{branch}.remote")
            _config_unset_all(repo, f"branch.{branch}.merge")
            logger.debug(f"Removed upstream of branch '{branch}' (was '{name}')")

    def _delete_fetched_refs(self, repo: Repo, name: str) -> None:
        patterns = [
            dst
            for dst in map(refspec_destination, _config_get_all(repo, f"remote.{name}.fetch"))
            if dst
        ]
        if not patterns:
            return
        for ref_name in list_refs(repo):
            if any(ref_matches(ref_name, pattern) for pattern in patterns):
                repo.git.update_ref("--no-deref", "-d", ref_name)
                logger.debug(f"Deleted ref {ref_name}")

    def _remove_section(self, repo: Repo, name: str) -> None:
        keys = []
        for key, _ in _config_get_regexp(repo, rf"^remote\.{ere_escape(name)}\."):
            if key not in keys:
                keys.append(key)
        for key in keys:
            _config_unset_all(repo, key)
        try:
            repo.git.config("--local", "--remove-section", f"remote.{name}")
        except GitCommandError as e:
            # Older git versions drop the empty section with its last key
            if "no such section" not in str(e).lower():
                raise

    def remove(self, repo: Repo, name: str) -> None:
        """
        Remove a remote and its traces.

        Raises:
            RemoteRegistryError: naming the step that failed; earlier steps
                are not rolled back
        """
        steps = (
            ("remove branch tracking", self._detach_branches),
            ("delete fetched refs", self._delete_fetched_refs),
            ("remove configuration", self._remove_section),
        )
        for step, action in steps:
            try:
                action(repo, name)
            except GitCommandError as e:
                raise RemoteRegistryError(step, name, e) from e
        logger.debug(f"Removed remote '{name}'")

    def recreate(self, repo: Repo, name: str, url: str) -> Remote:
        """
        Make ``name`` a fresh remote pointing at ``url``.

        Raises:
            RemoteRegistryError: cleanup or creation failed
        """
        if remote_exists(repo, name):
            self.remove(repo, name)
        try:
            remote = repo.create_remote(name, url)
        except GitCommandError as e:
            raise RemoteRegistryError("create remote", name, e) from e
        logger.info(f"Remote '{name}' now points to {url}")
        return remote
