"""
Base command class providing common functionality.

This module provides the base class for the repository commands: settings,
authentication, uniform error reporting and the steps new and publish share.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import typer
from git import Repo

from ghkit.auth.credentials import AuthSession
from ghkit.auth.provider import CredentialProvider
from ghkit.errors import GhkitError
from ghkit.logging import get_logger, log_application_event
from ghkit.utils.config_store import ConfigStore
from ghkit.utils.console import console, error, info, rule, status, success
from ghkit.utils.git import push, set_branch_upstream
from ghkit.utils.url import https_url

from .auth_manager import AuthManager


class BaseCommand(ABC):
    """Base class for all repository commands"""

    def __init__(
        self,
        config_store: Optional[ConfigStore] = None,
        auth_manager: Optional[AuthManager] = None,
    ):
        self.config_store = config_store or ConfigStore()
        self.settings = self.config_store.load_settings()
        self.auth_manager = auth_manager or AuthManager(self.settings)
        self.base_dir = Path.cwd()
        self.logger = get_logger(
            f"ghkit.{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @abstractmethod
    def execute(self, **kwargs) -> str:
        """Do the work; return the success message"""

    def run(self, **kwargs) -> None:
        """Execute and report, exiting with status 1 on any ghkit error"""
        name = self.__class__.__name__
        try:
            message = self.execute(**kwargs)
        except GhkitError as e:
            self.logger.error(f"{name} failed: {e}")
            log_application_event(f"{name.lower()}_failed", "ERROR", {"error": str(e)})
            error(str(e))
            raise typer.Exit(1)
        log_application_event(f"{name.lower()}_succeeded", "INFO")
        self.report_success(message)

    def report_success(self, message: str) -> None:
        rule()
        console.print()
        success(f"SUCCESS! {message}")
        info("Happy hacking & have a nice day :)")

    def publish_repository(
        self,
        session: AuthSession,
        credentials: CredentialProvider,
        repo: Repo,
        repo_name: str,
        description: str,
        public: bool,
        branch: str,
    ) -> None:
        """Create the hosted repository, push branch to it and track it"""
        session.client.create_repo(repo_name, description, private=not public)
        remote_name = self.settings.remote_name
        with status(f"Pushing to {session.username}/{repo_name}..."):
            push(
                repo,
                remote_name,
                https_url(session.username, repo_name),
                mirror=False,
                credentials=credentials,
            )
        set_branch_upstream(repo, branch, remote_name)
