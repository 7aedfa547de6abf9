import pytest
from unittest.mock import MagicMock

from git import Actor

from ghkit.auth.credentials import AuthSession, CredentialSource

VALID_TOKEN = "ghp_" + "b" * 36


@pytest.fixture
def session():
    client = MagicMock()
    client.repo_exists.return_value = False
    client.get_repo.return_value = {"name": "hello", "description": "Say hello"}
    return AuthSession(
        token=VALID_TOKEN,
        user={"login": "octocat", "email": "octocat@example.com"},
        client=client,
        source=CredentialSource.EXPLICIT,
    )


@pytest.fixture
def auth_manager(session, tmp_path):
    """Authentication stub; credentials stay None so local git remotes need none"""
    manager = MagicMock()
    manager.authenticate.return_value = session
    manager.signature.return_value = Actor("Octo Cat", "octocat@example.com")
    manager.ensure_ssh_key.return_value = MagicMock(path=tmp_path / "key.pem")
    manager.credentials.return_value = None
    return manager


@pytest.fixture
def base_dir(tmp_path):
    path = tmp_path / "base"
    path.mkdir()
    return path


@pytest.fixture
def make_command():
    def factory(command_cls, auth_manager, base_dir):
        command = command_cls(auth_manager=auth_manager)
        command.base_dir = base_dir
        return command

    return factory
