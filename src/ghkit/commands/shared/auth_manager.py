"""
Authentication helpers shared by the repository commands.

Resolves the access token, provisions the SSH key and works out the commit
identity, so every command gets them the same way.
"""

from typing import Optional

from git import Actor

from ghkit.auth.credentials import AuthSession, CredentialResolver, read_signature
from ghkit.auth.provider import SessionCredentialProvider
from ghkit.auth.ssh_keys import KeyPair, SshKeyManager
from ghkit.errors import CommandError
from ghkit.logging import get_logger
from ghkit.utils.config_store import Settings


class AuthManager:
    """Handles authentication and identity for commands"""

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[CredentialResolver] = None,
        key_manager: Optional[SshKeyManager] = None,
    ):
        self.settings = settings
        self.resolver = resolver or CredentialResolver(api_base_url=settings.api_base_url)
        self.key_manager = key_manager or SshKeyManager()
        self.logger = get_logger("ghkit.commands.shared.auth_manager")

    def authenticate(self, token: Optional[str], cli_only: bool) -> AuthSession:
        session = self.resolver.resolve(explicit=token, interactive=not cli_only)
        self.logger.info(
            f"Authenticated as '{session.username}' using {session.source.value}"
        )
        return session

    def ensure_ssh_key(self, session: AuthSession) -> KeyPair:
        return self.key_manager.ensure_registered(session.client)

    def credentials(
        self, session: AuthSession, key_pair: Optional[KeyPair] = None
    ) -> SessionCredentialProvider:
        return SessionCredentialProvider(
            session.username,
            session.token,
            key_pair.path if key_pair is not None else None,
        )

    def signature(self, session: AuthSession) -> Actor:
        """
        Commit identity: user.name/user.email from ~/.gitconfig, else the
        account's login and public email.
        """
        signature = read_signature()
        if signature is not None:
            return signature
        email = session.user.get("email")
        if email:
            return Actor(session.username, email)
        raise CommandError("Failed to find signature")
