"""
Credentials handed to git subprocesses.

A CredentialProvider answers "which credential for this kind of
authentication"; git_environment() turns the answer into environment
variables for a single git invocation. Nothing is written to the repository
configuration, so tokens never outlive the process.
"""

import base64
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union
from urllib.parse import urlparse

from ghkit.errors import CommandError


class CredentialKind(Enum):
    SSH_KEY = "ssh-key"
    USERPASS = "userpass"


@dataclass(frozen=True)
class UserPassCredential:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"UserPassCredential(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class SshKeyCredential:
    key_path: Path


Credential = Union[UserPassCredential, SshKeyCredential]


class CredentialProvider(ABC):
    """Supplies the credential for a requested authentication kind"""

    @abstractmethod
    def credential(self, kind: CredentialKind) -> Credential:
        """
        Raises:
            CommandError: this provider cannot serve the requested kind
        """


class SessionCredentialProvider(CredentialProvider):
    """Username + token for HTTPS, managed key file for SSH"""

    def __init__(self, username: str, token: str, key_path: Optional[Path] = None):
        self._username = username
        self._token = token
        self._key_path = key_path

    def credential(self, kind: CredentialKind) -> Credential:
        if kind is CredentialKind.USERPASS:
            return UserPassCredential(self._username, self._token)
        if kind is CredentialKind.SSH_KEY and self._key_path is not None:
            return SshKeyCredential(self._key_path)
        raise CommandError(f"no credential available for type: {kind.value}")


def credential_kind_for_url(url: str) -> Optional[CredentialKind]:
    """Authentication kind a remote URL calls for; None for local paths"""
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        return CredentialKind.USERPASS
    if parsed.scheme in ("ssh", "git+ssh"):
        return CredentialKind.SSH_KEY
    # scp-like syntax: user@host:path
    if not parsed.scheme and "@" in url and ":" in url.split("@", 1)[1]:
        return CredentialKind.SSH_KEY
    return None


def git_environment(provider: Optional[CredentialProvider], url: str) -> Dict[str, str]:
    """
    Environment variables that authenticate one git command against ``url``.

    HTTPS gets a per-command ``http.extraHeader`` (via GIT_CONFIG_COUNT),
    SSH gets ``GIT_SSH_COMMAND`` pinned to the managed key.
    """
    kind = credential_kind_for_url(url)
    if provider is None or kind is None:
        return {}

    credential = provider.credential(kind)
    if isinstance(credential, UserPassCredential):
        basic = base64.b64encode(
            f"{credential.username}:{credential.password}".encode("utf-8")
        ).decode("ascii")
        return {
            "GIT_TERMINAL_PROMPT": "0",
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": f"Authorization: Basic {basic}",
        }
    return {
        "GIT_SSH_COMMAND": (
            f"ssh -i {shlex.quote(str(credential.key_path))} -o IdentitiesOnly=yes"
        ),
    }
