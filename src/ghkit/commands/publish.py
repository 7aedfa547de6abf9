"""
ghkit publish: put the current directory on GitHub.
"""

from typing import Optional

from ghkit.constants import INITIAL_COMMIT_MESSAGE
from ghkit.errors import CommandError
from ghkit.utils.git import add_all_and_commit, default_branch_name, open_or_init_repository

from .shared import BaseCommand, CommonOptions
from .shared.prompts import resolve_description, resolve_is_public
from .shared.readme import README_FILE_NAME, render_readme


class PublishCommand(BaseCommand):
    def execute(
        self,
        description: Optional[str] = None,
        public: bool = False,
        token: Optional[str] = None,
        cli_only: bool = False,
    ) -> str:
        session = self.auth_manager.authenticate(token, cli_only)
        username = session.username
        description = resolve_description(description, cli_only)
        public = resolve_is_public(public, False, cli_only)
        signature = self.auth_manager.signature(session)

        repo_path = self.base_dir.resolve()
        repo_name = repo_path.name
        repo = open_or_init_repository(repo_path, self.settings.default_branch)

        readme_path = repo_path / README_FILE_NAME
        if not readme_path.exists():
            try:
                readme_path.write_text(
                    render_readme(username, repo_name, description), encoding="utf-8"
                )
            except OSError as e:
                raise CommandError(
                    f"Failed to write {README_FILE_NAME}, error: {e}"
                ) from e
        add_all_and_commit(repo, signature, INITIAL_COMMIT_MESSAGE)

        key_pair = self.auth_manager.ensure_ssh_key(session)
        credentials = self.auth_manager.credentials(session, key_pair)
        self.publish_repository(
            session,
            credentials,
            repo,
            repo_name,
            description,
            public,
            default_branch_name(repo),
        )
        self.logger.info(f"Published {repo_path} as {username}/{repo_name}")
        return f"Published {repo_name} repo."


def publish_repo(
    description: Optional[str] = CommonOptions.description(),
    public: bool = CommonOptions.public(),
    token: Optional[str] = CommonOptions.token(),
    cli_only: bool = CommonOptions.cli_only(),
):
    """Publish the current directory as a new GitHub repository"""
    PublishCommand().run(
        description=description, public=public, token=token, cli_only=cli_only
    )
