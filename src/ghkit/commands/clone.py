"""
ghkit clone: clone an existing GitHub repository.
"""

from typing import Optional

from ghkit.errors import CommandError
from ghkit.utils.console import status
from ghkit.utils.git import clone
from ghkit.utils.url import https_url

from .shared import BaseCommand, CommonOptions
from .shared.prompts import resolve_external


class CloneCommand(BaseCommand):
    def execute(
        self,
        external: Optional[str] = None,
        token: Optional[str] = None,
        cli_only: bool = False,
    ) -> str:
        session = self.auth_manager.authenticate(token, cli_only)
        owner, repo_name, _ = resolve_external(session.client, external, cli_only)

        path = self.base_dir / repo_name
        try:
            path.mkdir()
        except OSError as e:
            raise CommandError(
                f"Failed to create directory ./{repo_name}, error: {e}"
            ) from e

        key_pair = self.auth_manager.ensure_ssh_key(session)
        credentials = self.auth_manager.credentials(session, key_pair)
        with status(f"Cloning {owner}/{repo_name}..."):
            clone(
                https_url(owner, repo_name),
                path,
                bare=False,
                credentials=credentials,
                remote_name=self.settings.remote_name,
            )
        return f"Cloned {repo_name} repo."


def clone_repo(
    external: Optional[str] = CommonOptions.external(),
    token: Optional[str] = CommonOptions.token(),
    cli_only: bool = CommonOptions.cli_only(),
):
    """Clone an existing GitHub repository"""
    CloneCommand().run(external=external, token=token, cli_only=cli_only)
