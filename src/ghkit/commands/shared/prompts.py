"""
Interactive resolution of command arguments.

Each resolver takes the value given on the command line (if any). A valid
value is used as is; otherwise the user is prompted until a valid answer is
given, unless cli_only is set, in which case MissingCredentialError is raised.
"""

import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from rich.prompt import Confirm, Prompt

from ghkit.api.client import GitHubClient
from ghkit.constants import APP_REPO_PATH, APP_URL, MAX_DESCRIPTION_LENGTH, REPO_NAME_PATTERN
from ghkit.errors import HostingApiError, MissingCredentialError
from ghkit.utils.console import warning
from ghkit.utils.url import resolve_github_path

_REPO_NAME_RE = re.compile(REPO_NAME_PATTERN)


def _prompt_repo_name(default: Optional[str], base_dir: Path) -> str:
    while True:
        answer = Prompt.ask("GitHub new repo name", default=default).strip()
        if not answer:
            warning("Invalid name format, empty string")
        elif not _REPO_NAME_RE.match(answer):
            warning("Invalid name format")
        elif (base_dir / answer).exists():
            warning(f"Directory with name {answer} already exists")
        else:
            return answer


def resolve_repo_name(
    client: GitHubClient,
    username: str,
    raw: Optional[str],
    cli_only: bool,
    prompt_default: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> str:
    """A repository name free both locally and on the account"""
    base_dir = base_dir or Path.cwd()
    candidate = raw
    while True:
        if candidate is None or not _REPO_NAME_RE.match(candidate):
            if candidate is not None:
                warning("Invalid name format")
            if cli_only:
                raise MissingCredentialError("new repo name")
            candidate = _prompt_repo_name(prompt_default, base_dir)

        if (base_dir / candidate).exists():
            warning(f"Directory with name {candidate} already exists")
        elif client.repo_exists(username, candidate):
            warning(f"Repo with name {candidate} already exists")
        else:
            return candidate

        if cli_only:
            raise MissingCredentialError("new repo name")
        candidate = None


def _prompt_description() -> str:
    while True:
        answer = Prompt.ask("GitHub new repo description").strip()
        if len(answer) <= MAX_DESCRIPTION_LENGTH:
            return answer
        warning(
            f"Too long description, maximum length {MAX_DESCRIPTION_LENGTH}, "
            f"now: {len(answer)}"
        )


def resolve_description(raw: Optional[str], cli_only: bool) -> str:
    if raw is not None:
        if len(raw) <= MAX_DESCRIPTION_LENGTH:
            return raw
        warning(
            f"Too long description, maximum length {MAX_DESCRIPTION_LENGTH}, "
            f"now: {len(raw)}"
        )
    if cli_only:
        raise MissingCredentialError("new repo description")
    return _prompt_description()


def resolve_is_public(public: bool, default: bool, cli_only: bool) -> bool:
    if public:
        return True
    if cli_only:
        return False
    return Confirm.ask("Make it public?", default=default)


def _invalid_external_path() -> None:
    warning(f"Invalid url format, expected {APP_URL} or just {APP_REPO_PATH}")


def _prompt_external_path() -> Tuple[str, str]:
    while True:
        resolved = resolve_github_path(Prompt.ask("GitHub external repo url").strip())
        if resolved is not None:
            return resolved
        _invalid_external_path()


def resolve_external(
    client: GitHubClient, raw: Optional[str], cli_only: bool
) -> Tuple[str, str, Dict[str, Any]]:
    """
    An existing repository to clone or fork.

    Returns:
        (owner, repo_name, repository) with the API's repository payload
    """
    resolved = resolve_github_path(raw) if raw is not None else None
    if raw is not None and resolved is None:
        _invalid_external_path()
    while True:
        if resolved is None:
            if cli_only:
                raise MissingCredentialError("external repo url")
            resolved = _prompt_external_path()

        owner, repo_name = resolved
        try:
            return owner, repo_name, client.get_repo(owner, repo_name)
        except HostingApiError:
            warning(f"Repo {owner}/{repo_name} is unavailable")
        if cli_only:
            raise MissingCredentialError("external repo url")
        resolved = None
