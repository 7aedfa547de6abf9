"""
Fetch-until-commit.

Right after a push the hosting service may not serve the new objects yet.
The engine re-fetches at a fixed pace until the commit resolves locally.
"""

import time
from typing import Callable, Optional

from git import GitCommandError, Remote, Repo

from ghkit.auth.provider import CredentialProvider, git_environment
from ghkit.constants import FETCH_RETRY_DELAY, FETCH_RETRY_LIMIT
from ghkit.errors import CommandError, RetriesExhaustedError
from ghkit.logging import get_logger
from ghkit.utils.git.common import tracked_git_operation
from ghkit.utils.git.remotes import RemoteRegistry

logger = get_logger("ghkit.utils.git.sync")


def commit_exists(repo: Repo, commit_id: str) -> bool:
    """Whether commit_id resolves to a commit object in the repository"""
    try:
        repo.git.cat_file("-e", f"{commit_id}^{{commit}}")
    except GitCommandError:
        return False
    return True


class SyncRetryEngine:
    def __init__(
        self,
        registry: Optional[RemoteRegistry] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.registry = registry or RemoteRegistry()
        self.sleep = sleep
        self.clock = clock

    def _fetch(self, repo: Repo, remote: Remote, url: str, credentials) -> None:
        try:
            with tracked_git_operation("fetch", remote.name):
                with repo.git.custom_environment(**git_environment(credentials, url)):
                    remote.fetch()
        except GitCommandError as e:
            raise CommandError(str(e), operation="Fetch", target=remote.name) from e

    def fetch_until_commit(
        self,
        repo: Repo,
        remote_name: str,
        remote_url: str,
        commit_id: str,
        delay: float = FETCH_RETRY_DELAY,
        max_retries: int = FETCH_RETRY_LIMIT,
        credentials: Optional[CredentialProvider] = None,
    ) -> None:
        """
        Return once commit_id is present locally.

        Each fetch cycle is paced to take at least ``delay`` seconds. A fetch
        error aborts the loop.

        Raises:
            RetriesExhaustedError: not found after the initial check and
                max_retries fetch cycles
            CommandError: a fetch failed
            RemoteRegistryError: the remote could not be recreated
        """
        if commit_exists(repo, commit_id):
            logger.debug(f"Commit {commit_id} already present, nothing to fetch")
            return

        remote = self.registry.recreate(repo, remote_name, remote_url)
        for attempt in range(1, max_retries + 1):
            started_at = self.clock()
            self._fetch(repo, remote, remote_url, credentials)
            if commit_exists(repo, commit_id):
                logger.info(f"Commit {commit_id} fetched after {attempt} attempt(s)")
                return
            logger.debug(f"Commit {commit_id} not available yet (attempt {attempt})")
            self.sleep(max(0.0, delay - (self.clock() - started_at)))

        raise RetriesExhaustedError(commit_id, max_retries + 1)
