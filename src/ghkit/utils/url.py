"""
GitHub URL utilities.

This module turns the many ways a user may point at a repository into an
owner/name pair, and builds the URLs git talks to.
"""

import re
from typing import Optional, Tuple

from ghkit.constants import DEFAULT_WEB_BASE_URL, REPO_NAME_PATTERN, USERNAME_PATTERN

_USERNAME_RE = re.compile(USERNAME_PATTERN)
_REPO_NAME_RE = re.compile(REPO_NAME_PATTERN)


def _strip_prefix(text: str, prefix: str) -> str:
    return text[len(prefix):] if text.startswith(prefix) else text


def _strip_suffix(text: str, suffix: str) -> str:
    return text[: -len(suffix)] if suffix and text.endswith(suffix) else text


def resolve_github_path(path_or_url: str) -> Optional[Tuple[str, str]]:
    """
    Extract (owner, repo) from a GitHub URL or path.

    Accepts 'https://github.com/owner/repo', 'github.com/owner/repo.git',
    'owner/repo' and the like; query strings, fragments and extra path
    segments are ignored.

    Returns:
        (owner, repo) or None when the input does not name a repository
    """
    path = path_or_url
    path = _strip_prefix(path, "https://")
    path = _strip_prefix(path, "http://")
    path = _strip_prefix(path, "github.com")
    path = _strip_prefix(path, "/")
    path = _strip_suffix(path, "/")
    for separator in ("?", "#"):
        if separator in path:
            path = _strip_suffix(path.split(separator, 1)[0], "/")

    parts = path.split("/", 2)
    if len(parts) < 2:
        return None
    owner, repo_name = parts[0], _strip_suffix(parts[1], ".git")
    if not _USERNAME_RE.match(owner) or not _REPO_NAME_RE.match(repo_name):
        return None
    return owner, repo_name


def https_url(owner: str, repo_name: str, base_url: str = DEFAULT_WEB_BASE_URL) -> str:
    """Clone/push URL of a hosted repository"""
    return f"{base_url.rstrip('/')}/{owner}/{repo_name}.git"
