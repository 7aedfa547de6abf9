"""
Common CLI options for the repository commands.

This module provides standardized CLI options that are used across
multiple commands to ensure consistency.
"""

import typer


class CommonOptions:
    """Common CLI options for repository commands"""

    @staticmethod
    def token():
        return typer.Option(
            None,
            "--token",
            "-t",
            help="GitHub personal access token (also looked up in GITHUB_TOKEN, "
            "~/.gitconfig and ~/.git-credentials)",
        )

    @staticmethod
    def cli_only():
        return typer.Option(
            False,
            "--cli-only",
            "-c",
            help="Never prompt; fail when a required value is missing",
        )

    @staticmethod
    def name():
        return typer.Option(None, "--name", "-n", help="Name of the new repository")

    @staticmethod
    def description():
        return typer.Option(
            None, "--description", "-d", help="Description of the new repository"
        )

    @staticmethod
    def public():
        return typer.Option(False, "--public", "-p", help="Make the repository public")

    @staticmethod
    def external():
        return typer.Option(
            None,
            "--external",
            "-e",
            help="Existing repository: URL, github.com/owner/repo or owner/repo",
        )
