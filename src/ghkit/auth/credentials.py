"""
Access token discovery.

Tokens are looked for, in order, in the value given on the command line,
the GITHUB_TOKEN environment variable, ~/.gitconfig, ~/.git-credentials and
finally an interactive prompt. Every candidate is checked against the API
before it is used. A resolution session remembers which sources were already
consulted so a rejected token never causes the same source to be read again.
"""

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from git import Actor
from git.config import GitConfigParser
from rich.prompt import Prompt

from ghkit.api.client import GitHubClient
from ghkit.constants import (
    CREDENTIALS_FILE_TOKEN_PATTERN,
    DEFAULT_API_BASE_URL,
    GIT_CREDENTIALS_PATH,
    GITCONFIG_PATH,
    GITCONFIG_SECTION,
    GITCONFIG_TOKEN_KEY,
    TOKEN_ENV_VAR,
    TOKEN_LENGTH,
    TOKEN_PATTERN,
)
from ghkit.errors import HostingApiError, MissingCredentialError
from ghkit.logging import get_logger, log_authentication_event
from ghkit.utils.console import warning

logger = get_logger("ghkit.auth.credentials")

_TOKEN_RE = re.compile(TOKEN_PATTERN)
_CREDENTIALS_FILE_RE = re.compile(CREDENTIALS_FILE_TOKEN_PATTERN)


class CredentialSource(Enum):
    EXPLICIT = "explicit"
    ENVIRONMENT = "environment"
    CONFIG_FILE = "config-file"
    CREDENTIALS_FILE = "credentials-file"
    PROMPT = "prompt"


# Sources consulted automatically, in order; PROMPT is the interactive fallback
DISCOVERY_ORDER = (
    CredentialSource.EXPLICIT,
    CredentialSource.ENVIRONMENT,
    CredentialSource.CONFIG_FILE,
    CredentialSource.CREDENTIALS_FILE,
)


@dataclass(frozen=True)
class CredentialSession:
    """Sources already consulted during one resolution"""

    tried: FrozenSet[CredentialSource] = field(default_factory=frozenset)

    def was_tried(self, source: CredentialSource) -> bool:
        return source in self.tried

    def with_tried(self, source: CredentialSource) -> "CredentialSession":
        return CredentialSession(self.tried | {source})

    @property
    def exhausted(self) -> bool:
        return all(source in self.tried for source in DISCOVERY_ORDER)


@dataclass
class AuthSession:
    """A validated token together with the API session it opened"""

    token: str
    user: Dict[str, Any]
    client: GitHubClient
    source: CredentialSource

    @property
    def username(self) -> str:
        return self.user["login"]


def is_valid_token(candidate: Optional[str]) -> bool:
    """40 characters and the personal access token shape"""
    return (
        candidate is not None
        and len(candidate) == TOKEN_LENGTH
        and _TOKEN_RE.match(candidate) is not None
    )


def _read_gitconfig_value(path: Path, option: str) -> Optional[str]:
    if not path.is_file():
        return None
    parser = GitConfigParser(str(path), read_only=True)
    try:
        parser.read()
        if not parser.has_option(GITCONFIG_SECTION, option):
            return None
        value = parser.get_value(GITCONFIG_SECTION, option)
    finally:
        parser.release()
    return str(value)


def read_gitconfig_token(path: Path) -> Optional[str]:
    """Token stored under user.passoword in a gitconfig file, if any"""
    try:
        value = _read_gitconfig_value(path, GITCONFIG_TOKEN_KEY)
    except Exception as e:
        # A broken gitconfig is an unavailable source, not a failure
        logger.debug(f"Could not read {path}: {e}")
        return None
    if value is None:
        return None
    return value.rstrip(":")


def read_credentials_file_token(path: Path) -> Optional[str]:
    """First 40-character token found in a git-credentials file"""
    if not path.is_file():
        return None
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                for match in _CREDENTIALS_FILE_RE.finditer(line):
                    token = match.group(1)
                    if len(token) == TOKEN_LENGTH:
                        return token
    except OSError as e:
        logger.debug(f"Could not read {path}: {e}")
    return None


def read_signature(path: Optional[Path] = None) -> Optional[Actor]:
    """Commit identity from user.name / user.email in ~/.gitconfig"""
    path = path or Path(GITCONFIG_PATH).expanduser()
    try:
        name = _read_gitconfig_value(path, "name")
        email = _read_gitconfig_value(path, "email")
    except Exception as e:
        logger.debug(f"Could not read signature from {path}: {e}")
        return None
    if name and email:
        return Actor(name, email)
    return None


def prompt_token() -> str:
    """Ask for a token until one with a valid format is entered"""
    while True:
        answer = Prompt.ask("GitHub access token", password=True).strip()
        if is_valid_token(answer):
            return answer
        warning("Invalid token format")


class CredentialResolver:
    """Finds a token the hosting API accepts"""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        gitconfig_path: Optional[Path] = None,
        credentials_path: Optional[Path] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        client_factory: Optional[Callable[[str], GitHubClient]] = None,
        prompt: Callable[[], str] = prompt_token,
    ):
        self.environ = os.environ if environ is None else environ
        self.gitconfig_path = gitconfig_path or Path(GITCONFIG_PATH).expanduser()
        self.credentials_path = (
            credentials_path or Path(GIT_CREDENTIALS_PATH).expanduser()
        )
        self.client_factory = client_factory or (
            lambda token: GitHubClient(token, base_url=api_base_url)
        )
        self.prompt = prompt

    def _consult(
        self, source: CredentialSource, explicit: Optional[str]
    ) -> Optional[str]:
        if source is CredentialSource.EXPLICIT:
            return explicit if is_valid_token(explicit) else None

        if source is CredentialSource.ENVIRONMENT:
            # Generic credential: checked by length only, never the ghp_ shape
            candidate = self.environ.get(TOKEN_ENV_VAR)
            if (
                candidate
                and len(candidate) == TOKEN_LENGTH
                and not _TOKEN_RE.match(candidate)
            ):
                return candidate
            return None

        if source is CredentialSource.CONFIG_FILE:
            candidate = read_gitconfig_token(self.gitconfig_path)
            return candidate if is_valid_token(candidate) else None

        if source is CredentialSource.CREDENTIALS_FILE:
            return read_credentials_file_token(self.credentials_path)

        raise ValueError(f"{source} is not a discovery source")

    def next_candidate(
        self, session: CredentialSession, explicit: Optional[str] = None
    ) -> Tuple[Optional[CredentialSource], Optional[str], CredentialSession]:
        """
        Consult untried sources in order until one yields a candidate.

        Returns:
            (source, token, session) where source and token are None when all
            sources are exhausted; session has every consulted source marked.
        """
        for source in DISCOVERY_ORDER:
            if session.was_tried(source):
                continue
            session = session.with_tried(source)
            token = self._consult(source, explicit)
            if token is not None:
                logger.debug(f"Found access token candidate in {source.value}")
                return source, token, session
        return None, None, session

    def resolve(
        self, explicit: Optional[str] = None, interactive: bool = True
    ) -> AuthSession:
        """
        Find a token and validate it with a "who am I" call.

        Raises:
            MissingCredentialError: non-interactive and no accepted token
        """
        session = CredentialSession()
        while True:
            source, token, session = self.next_candidate(session, explicit)
            if token is None:
                if not interactive:
                    raise MissingCredentialError("access token")
                source, token = CredentialSource.PROMPT, self.prompt()

            client = self.client_factory(token)
            try:
                user = client.current_user()
            except HostingApiError as e:
                client.close()
                log_authentication_event(source.value, False, {"error": str(e)})
                warning(
                    "Invalid answer received from API, possible access token "
                    f"is wrong, error: {e}"
                )
                if not interactive:
                    raise MissingCredentialError("access token") from e
                continue

            log_authentication_event(source.value, True, {"login": user.get("login")})
            return AuthSession(token=token, user=user, client=client, source=source)
