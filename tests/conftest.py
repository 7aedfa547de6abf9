"""Shared pytest configuration and fixtures for the ghkit test suite.

This module provides:
- Isolation of HOME, XDG directories and token environment variables
- Real temporary git repositories for tests that exercise the git layer
- Test configuration (paths, markers)
"""
import sys
from pathlib import Path

import pytest
from git import Actor, Repo


# Add src/ to path so test modules can import ghkit package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and credentials."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return home


@pytest.fixture
def signature():
    return Actor("Test User", "test@example.com")


@pytest.fixture
def git_repo(tmp_path, signature):
    """A real repository on branch main with one commit."""
    path = tmp_path / "work"
    path.mkdir()
    repo = Repo.init(str(path))
    repo.git.symbolic_ref("HEAD", "refs/heads/main")
    (path / "README.md").write_text("# work\n", encoding="utf-8")
    repo.index.add(["README.md"])
    repo.index.commit("first", author=signature, committer=signature)
    yield repo
    repo.close()


@pytest.fixture
def bare_remote(tmp_path):
    """An empty bare repository usable as a push/fetch target."""
    path = tmp_path / "remote.git"
    repo = Repo.init(str(path), bare=True)
    repo.git.symbolic_ref("HEAD", "refs/heads/main")
    yield repo
    repo.close()


VALID_TOKEN = "ghp_" + "a" * 36


@pytest.fixture
def valid_token():
    return VALID_TOKEN


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (real git)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their fixtures."""
    for item in items:
        fixtures = getattr(item, "fixturenames", ())
        if "git_repo" in fixtures or "bare_remote" in fixtures:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
