"""
SSH key pair lifecycle and registration with the hosting service.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from ghkit.api.client import GitHubClient
from ghkit.constants import SSH_DIR, SSH_KEY_IN_USE_PATTERN, SSH_KEY_NAME, SSH_KEY_TITLE
from ghkit.errors import HostingApiError, KeyProvisioningError
from ghkit.logging import get_logger
from ghkit.utils.console import warning

logger = get_logger("ghkit.auth.ssh_keys")

_KEY_IN_USE_RE = re.compile(SSH_KEY_IN_USE_PATTERN)


def default_key_path() -> Path:
    return Path(SSH_DIR).expanduser() / SSH_KEY_NAME


def is_key_already_registered(error: HostingApiError) -> bool:
    """
    Whether a key registration failure means the key is already on the account.

    The API reports this only through its error message text, so this is the
    one place that knows the wording.
    """
    return bool(
        _KEY_IN_USE_RE.search(error.body or "") or _KEY_IN_USE_RE.search(str(error))
    )


@dataclass(frozen=True)
class KeyPair:
    """A private key and the file it is stored in"""

    private_key: Ed25519PrivateKey
    path: Path

    @classmethod
    def generate(cls, path: Path) -> "KeyPair":
        return cls(Ed25519PrivateKey.generate(), path)

    @classmethod
    def load(cls, path: Path) -> Optional["KeyPair"]:
        """Read an OpenSSH private key; None when missing or unreadable"""
        if not path.is_file():
            return None
        try:
            private_key = serialization.load_ssh_private_key(
                path.read_bytes(), password=None
            )
        except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as e:
            logger.warning(f"Ignoring unusable SSH key at {path}: {e}")
            return None
        return cls(private_key, path)

    def public_openssh(self) -> str:
        return self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH,
        ).decode("ascii")

    def private_openssh(self) -> bytes:
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def save(self) -> None:
        """Write the private key, owner read/write only"""
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(self.private_openssh())
        os.chmod(self.path, 0o600)


class SshKeyManager:
    """Finds or creates the managed key and makes sure the service knows it"""

    def __init__(self, key_path: Optional[Path] = None, title: str = SSH_KEY_TITLE):
        self.key_path = key_path or default_key_path()
        self.title = title

    def _register(self, client: GitHubClient, key_pair: KeyPair) -> None:
        client.create_ssh_key(self.title, key_pair.public_openssh())
        logger.info(f"Registered SSH key {key_pair.path} as '{self.title}'")

    def ensure_registered(self, client: GitHubClient) -> KeyPair:
        """
        Return a key pair that is registered with the service.

        An existing local key is reused when it registers or is already
        registered. Otherwise a fresh key is generated, saved and registered.

        Raises:
            KeyProvisioningError: the fresh key could not be saved or registered
        """
        existing = KeyPair.load(self.key_path)
        if existing is not None:
            try:
                self._register(client, existing)
                return existing
            except HostingApiError as e:
                if is_key_already_registered(e):
                    logger.debug(f"SSH key {self.key_path} already registered")
                    return existing
                logger.warning(f"Failed to register existing SSH key: {e}")
                warning(f"Failed send ssh key to GitHub, error: {e}")

        try:
            key_pair = KeyPair.generate(self.key_path)
            key_pair.save()
        except (OSError, ValueError) as e:
            raise KeyProvisioningError(f"Failed to create SSH key, error: {e}") from e
        logger.info(f"Generated new SSH key at {self.key_path}")

        try:
            self._register(client, key_pair)
        except HostingApiError as e:
            raise KeyProvisioningError(
                f"Failed to save GitHub SSH key, that was just created, error: {e}"
            ) from e
        return key_pair
