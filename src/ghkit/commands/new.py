"""
ghkit new: create a local repository and its GitHub counterpart.
"""

from typing import Optional

from ghkit.constants import INITIAL_COMMIT_MESSAGE
from ghkit.errors import CommandError
from ghkit.utils.git import add_and_commit, init_repository

from .shared import BaseCommand, CommonOptions
from .shared.prompts import resolve_description, resolve_is_public, resolve_repo_name
from .shared.readme import README_FILE_NAME, render_readme


class NewCommand(BaseCommand):
    def execute(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        public: bool = False,
        token: Optional[str] = None,
        cli_only: bool = False,
    ) -> str:
        session = self.auth_manager.authenticate(token, cli_only)
        username = session.username
        repo_name = resolve_repo_name(
            session.client, username, name, cli_only, base_dir=self.base_dir
        )
        description = resolve_description(description, cli_only)
        public = resolve_is_public(public, False, cli_only)
        signature = self.auth_manager.signature(session)

        repo_path = self.base_dir / repo_name
        try:
            repo_path.mkdir()
        except OSError as e:
            raise CommandError(
                f"Failed to create directory ./{repo_name}, error: {e}"
            ) from e

        branch = self.settings.default_branch
        repo = init_repository(repo_path, branch)
        readme_path = repo_path / README_FILE_NAME
        try:
            readme_path.write_text(
                render_readme(username, repo_name, description), encoding="utf-8"
            )
        except OSError as e:
            raise CommandError(f"Failed to write {README_FILE_NAME}, error: {e}") from e
        add_and_commit(repo, signature, [readme_path], INITIAL_COMMIT_MESSAGE)

        key_pair = self.auth_manager.ensure_ssh_key(session)
        credentials = self.auth_manager.credentials(session, key_pair)
        self.publish_repository(
            session, credentials, repo, repo_name, description, public, branch
        )
        self.logger.info(f"Created repository {username}/{repo_name}")
        return f"Created {repo_name} repo."


def new_repo(
    name: Optional[str] = CommonOptions.name(),
    description: Optional[str] = CommonOptions.description(),
    public: bool = CommonOptions.public(),
    token: Optional[str] = CommonOptions.token(),
    cli_only: bool = CommonOptions.cli_only(),
):
    """Create a new repository locally and on GitHub"""
    NewCommand().run(
        name=name,
        description=description,
        public=public,
        token=token,
        cli_only=cli_only,
    )
