"""
Common Git utilities.
"""

import re
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from git import GitCommandError, Repo

from ghkit.errors import CommandError
from ghkit.logging import log_git_operation

HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"
TAGS_PREFIX = "refs/tags/"

# Characters with a meaning in git's POSIX extended regexes
_ERE_SPECIAL = re.compile(r"([.^$*+?()\[\]{}|\\])")


def ere_escape(text: str) -> str:
    """Escape text for use inside a git config --get-regexp pattern"""
    return _ERE_SPECIAL.sub(r"\\\1", text)


def refspec_destination(refspec: str) -> Optional[str]:
    """
    Destination side of a refspec.

    '+refs/heads/*:refs/remotes/origin/*' -> 'refs/remotes/origin/*'.
    Returns None when the refspec has no destination.
    """
    _, sep, dst = refspec.lstrip("+").partition(":")
    if not sep or not dst:
        return None
    return dst


def ref_matches(ref_name: str, pattern: str) -> bool:
    """Match a full ref name against a refspec side (one '*' at most)"""
    if "*" not in pattern:
        return ref_name == pattern
    prefix, suffix = pattern.split("*", 1)
    return (
        len(ref_name) >= len(prefix) + len(suffix)
        and ref_name.startswith(prefix)
        and ref_name.endswith(suffix)
    )


def split_remote_ref(ref_name: str) -> Optional[Tuple[str, str]]:
    """
    Split a remote-tracking ref into (remote, branch).

    Handles branch names with slashes: 'refs/remotes/origin/feature/x'
    gives ('origin', 'feature/x').
    """
    if not ref_name.startswith(REMOTES_PREFIX):
        return None
    remote, sep, branch = ref_name[len(REMOTES_PREFIX):].partition("/")
    if not sep or not branch:
        return None
    return remote, branch


def list_refs(repo: Repo, prefix: str = "") -> List[str]:
    """Full names of all refs under prefix, symbolic refs included"""
    args = ["--format=%(refname)"]
    if prefix:
        args.append(prefix)
    output = repo.git.for_each_ref(*args)
    return [line.strip() for line in output.splitlines() if line.strip()]


def default_branch_name(repo: Repo) -> str:
    """Branch HEAD points to, even when it has no commits yet"""
    try:
        head = repo.git.symbolic_ref("HEAD")
    except GitCommandError as e:
        raise CommandError(
            "HEAD does not point to a branch",
            operation="Resolve default branch",
            target=str(repo.git_dir),
        ) from e
    if head.startswith(HEADS_PREFIX):
        return head[len(HEADS_PREFIX):]
    return head


@contextmanager
def tracked_git_operation(operation: str, target: str, **details) -> Iterator[None]:
    """Time the enclosed git call and record its outcome in the git log"""
    started = time.monotonic()
    try:
        yield
    except GitCommandError as e:
        log_git_operation(
            operation,
            target,
            success=False,
            duration=time.monotonic() - started,
            details={**details, "status": e.status},
        )
        raise
    log_git_operation(
        operation, target, duration=time.monotonic() - started, details=details or None
    )
