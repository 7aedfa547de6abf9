"""
ghkit fork: copy an existing repository into a new one on the account.

Unlike a GitHub fork, the result is an independent repository. All
branches and tags are mirrored through a temporary bare clone, which is then
replaced by a regular clone of the new repository once the service serves
the pushed history.
"""

import shutil
from typing import Optional

from ghkit.errors import CommandError
from ghkit.utils.console import status
from ghkit.utils.git import (
    add_remote,
    clone,
    default_branch_name,
    fetch_remote_branches,
    fetch_until_commit,
    head_commit_id,
    push,
    set_branch_upstream,
)
from ghkit.utils.url import https_url

from .shared import BaseCommand, CommonOptions
from .shared.prompts import resolve_external, resolve_is_public, resolve_repo_name


class ForkCommand(BaseCommand):
    def execute(
        self,
        external: Optional[str] = None,
        name: Optional[str] = None,
        public: bool = False,
        token: Optional[str] = None,
        cli_only: bool = False,
    ) -> str:
        session = self.auth_manager.authenticate(token, cli_only)
        username = session.username
        owner, external_name, external_repo = resolve_external(
            session.client, external, cli_only
        )
        repo_name = resolve_repo_name(
            session.client,
            username,
            name,
            cli_only,
            prompt_default=external_name,
            base_dir=self.base_dir,
        )
        public = resolve_is_public(public, False, cli_only)

        path = self.base_dir / repo_name
        try:
            path.mkdir()
        except OSError as e:
            raise CommandError(
                f"Failed to create directory ./{repo_name}, error: {e}"
            ) from e

        key_pair = self.auth_manager.ensure_ssh_key(session)
        credentials = self.auth_manager.credentials(session, key_pair)
        remote_name = self.settings.remote_name
        external_remote = self.settings.external_remote_name
        external_url = https_url(owner, external_name)
        remote_url = https_url(username, repo_name)

        with status(f"Mirroring {owner}/{external_name}..."):
            mirror = clone(
                external_url, path, bare=True, credentials=credentials,
                remote_name=external_remote,
            )
            try:
                fetch_remote_branches(mirror, external_remote, external_url, credentials)
                session.client.create_repo(
                    repo_name, external_repo.get("description") or "", private=not public
                )
                push(mirror, remote_name, remote_url, mirror=True, credentials=credentials)
                last_commit_id = head_commit_id(mirror)
            finally:
                mirror.close()

        try:
            shutil.rmtree(path)
        except OSError as e:
            raise CommandError(f"Failed to remove directory \"{path}\", error: {e}") from e

        with status(f"Cloning {username}/{repo_name}..."):
            repo = clone(
                remote_url, path, bare=False, credentials=credentials,
                remote_name=remote_name,
            )
            fetch_until_commit(
                repo,
                remote_name,
                remote_url,
                last_commit_id,
                delay=self.settings.fetch_retry_delay,
                max_retries=self.settings.fetch_retry_limit,
                credentials=credentials,
            )
        set_branch_upstream(repo, default_branch_name(repo), remote_name)
        add_remote(repo, external_remote, external_url)

        self.logger.info(f"Forked {owner}/{external_name} into {username}/{repo_name}")
        return f"Forked {external_name} repo."


def fork_repo(
    external: Optional[str] = CommonOptions.external(),
    name: Optional[str] = CommonOptions.name(),
    public: bool = CommonOptions.public(),
    token: Optional[str] = CommonOptions.token(),
    cli_only: bool = CommonOptions.cli_only(),
):
    """Copy an existing repository, with all branches and tags, into a new one"""
    ForkCommand().run(
        external=external, name=name, public=public, token=token, cli_only=cli_only
    )
