"""
Git operations (init, commit, clone, push, fetch).

Every collaborator failure leaves this module as a CommandError that names
the operation and its target.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from git import Actor, GitCommandError, PushInfo, RemoteReference, Repo

from ghkit.auth.provider import CredentialProvider, git_environment
from ghkit.constants import (
    DEFAULT_BRANCH,
    DEFAULT_REMOTE_NAME,
    FETCH_RETRY_DELAY,
    FETCH_RETRY_LIMIT,
)
from ghkit.errors import CommandError, InvalidInputError
from ghkit.logging import get_logger
from ghkit.utils.git.common import (
    HEADS_PREFIX,
    refspec_destination,
    tracked_git_operation,
)
from ghkit.utils.git.common import default_branch_name as _default_branch_name
from ghkit.utils.git.refspecs import RefspecPlanner
from ghkit.utils.git.remotes import RemoteRegistry
from ghkit.utils.git.sync import SyncRetryEngine
from ghkit.utils.paths import relativize

logger = get_logger("ghkit.utils.git.operations")

PathLike = Union[str, Path]

_PUSH_FAILED = (
    PushInfo.REJECTED | PushInfo.REMOTE_REJECTED | PushInfo.REMOTE_FAILURE | PushInfo.ERROR
)


def init_repository(path: PathLike, initial_branch: str = DEFAULT_BRANCH) -> Repo:
    """Create a repository whose unborn HEAD points to initial_branch"""
    try:
        repo = Repo.init(str(path))
        repo.git.symbolic_ref("HEAD", f"{HEADS_PREFIX}{initial_branch}")
    except (GitCommandError, OSError) as e:
        raise CommandError(str(e), operation="Init repository", target=str(path)) from e
    logger.info(f"Initialized repository at {path} on branch '{initial_branch}'")
    return repo


def open_or_init_repository(
    path: PathLike, initial_branch: str = DEFAULT_BRANCH
) -> Repo:
    if (Path(path) / ".git").is_dir():
        try:
            return Repo(str(path))
        except Exception as e:
            raise CommandError(str(e), operation="Open repository", target=str(path)) from e
    return init_repository(path, initial_branch)


def _commit(repo: Repo, signature: Actor, message: str) -> str:
    try:
        commit = repo.index.commit(message, author=signature, committer=signature)
    except (GitCommandError, ValueError, OSError) as e:
        raise CommandError(str(e), operation="Commit", target=repo.working_tree_dir) from e
    logger.info(f"Committed {commit.hexsha[:8]}: {message}")
    return commit.hexsha


def add_and_commit(
    repo: Repo, signature: Actor, file_paths: Iterable[PathLike], message: str
) -> str:
    """
    Stage the given files and commit them.

    Paths may be relative to the current directory or absolute; they are
    staged relative to the working tree.

    Returns:
        str: id of the new commit
    """
    work_tree = Path(repo.working_tree_dir).resolve()
    relative_paths: List[str] = []
    for file_path in file_paths:
        try:
            absolute = Path(file_path).resolve(strict=True)
        except OSError as e:
            raise CommandError(
                f"Cannot canonicalize path {file_path}, error: {e}", operation="Stage"
            ) from e
        try:
            relative = relativize(work_tree, absolute)
        except InvalidInputError as e:
            raise CommandError(str(e), operation="Stage", target=str(file_path)) from e
        if not relative or relative.split(os.sep, 1)[0] == os.pardir:
            raise CommandError(
                f"{absolute} is outside of the working tree {work_tree}",
                operation="Stage",
            )
        relative_paths.append(relative)

    try:
        repo.index.add(relative_paths)
    except (GitCommandError, OSError) as e:
        raise CommandError(str(e), operation="Stage", target=", ".join(relative_paths)) from e
    return _commit(repo, signature, message)


def add_all_and_commit(repo: Repo, signature: Actor, message: str) -> str:
    """Stage every change in the working tree (git add -A) and commit it"""
    try:
        repo.git.add("--all")
    except GitCommandError as e:
        raise CommandError(str(e), operation="Stage", target=repo.working_tree_dir) from e
    return _commit(repo, signature, message)


def clone(
    url: str,
    path: PathLike,
    bare: bool = False,
    credentials: Optional[CredentialProvider] = None,
    remote_name: str = DEFAULT_REMOTE_NAME,
) -> Repo:
    env = git_environment(credentials, url)
    try:
        with tracked_git_operation("clone", url, bare=bare):
            repo = Repo.clone_from(
                url, str(path), env=env, bare=bare, origin=remote_name
            )
    except GitCommandError as e:
        raise CommandError(str(e), operation="Clone", target=url) from e
    logger.info(f"Cloned {url} into {path}{' (bare)' if bare else ''}")
    return repo


def fetch_remote_branches(
    repo: Repo,
    remote_name: str,
    remote_url: str,
    credentials: Optional[CredentialProvider] = None,
) -> None:
    """Fetch every branch of a remote into refs/remotes/<remote_name>/"""
    refspec = f"+{HEADS_PREFIX}*:refs/remotes/{remote_name}/*"
    try:
        with tracked_git_operation("fetch", remote_name, refspec=refspec):
            with repo.git.custom_environment(**git_environment(credentials, remote_url)):
                repo.git.fetch(remote_name, refspec)
    except GitCommandError as e:
        raise CommandError(str(e), operation="Fetch", target=remote_name) from e


def _unique_destinations(refspecs: List[str]) -> List[str]:
    # git refuses a push where two refspecs update the same ref
    seen = set()
    unique = []
    for refspec in refspecs:
        dst = refspec_destination(refspec) or refspec.lstrip("+")
        if dst in seen:
            continue
        seen.add(dst)
        unique.append(refspec)
    return unique


def push(
    repo: Repo,
    remote_name: str,
    remote_url: str,
    mirror: bool = False,
    credentials: Optional[CredentialProvider] = None,
    planner: Optional[RefspecPlanner] = None,
    registry: Optional[RemoteRegistry] = None,
) -> None:
    """
    Point remote_name at remote_url and push the default branch to it.

    With mirror, remote-tracking branches and tags are pushed as well and the
    remote keeps catch-all push refspecs.
    """
    planner = planner or RefspecPlanner()
    registry = registry or RemoteRegistry()

    try:
        refspecs = planner.plan(repo, remote_name, mirror)
    except GitCommandError as e:
        raise CommandError(str(e), operation="Plan push", target=remote_name) from e
    remote = registry.recreate(repo, remote_name, remote_url)
    to_push = _unique_destinations(refspecs.push)
    try:
        planner.register(repo, remote_name, refspecs)
        with tracked_git_operation(
            "push", remote_name, refspecs=len(to_push), mirror=mirror
        ):
            with repo.git.custom_environment(**git_environment(credentials, remote_url)):
                results = remote.push(refspec=to_push)
            results.raise_if_error()
    except GitCommandError as e:
        raise CommandError(str(e), operation="Push", target=remote_url) from e

    failed = [info for info in results if info.flags & _PUSH_FAILED]
    if failed:
        details = "; ".join(
            f"{info.local_ref or info.remote_ref_string}: {info.summary.strip()}"
            for info in failed
        )
        raise CommandError(details, operation="Push", target=remote_url)
    logger.info(f"Pushed {len(to_push)} refspec(s) to '{remote_name}'")


def fetch_until_commit(
    repo: Repo,
    remote_name: str,
    remote_url: str,
    commit_id: str,
    delay: float = FETCH_RETRY_DELAY,
    max_retries: int = FETCH_RETRY_LIMIT,
    credentials: Optional[CredentialProvider] = None,
    engine: Optional[SyncRetryEngine] = None,
) -> None:
    engine = engine or SyncRetryEngine()
    engine.fetch_until_commit(
        repo, remote_name, remote_url, commit_id, delay, max_retries, credentials
    )


def add_remote(repo: Repo, remote_name: str, remote_url: str) -> None:
    """Add (or replace) a remote without contacting it"""
    RemoteRegistry().recreate(repo, remote_name, remote_url)


def set_branch_upstream(repo: Repo, branch: str, remote_name: str) -> None:
    """Make remote_name/branch the upstream of a local branch"""
    try:
        head = repo.heads[branch]
    except IndexError as e:
        raise CommandError(
            f"Branch '{branch}' does not exist", operation="Set upstream"
        ) from e
    try:
        head.set_tracking_branch(
            RemoteReference(repo, f"refs/remotes/{remote_name}/{branch}")
        )
    except (GitCommandError, ValueError, OSError) as e:
        raise CommandError(str(e), operation="Set upstream", target=branch) from e
    logger.debug(f"Branch '{branch}' now tracks '{remote_name}/{branch}'")


def default_branch_name(repo: Repo) -> str:
    return _default_branch_name(repo)


def head_commit_id(repo: Repo) -> str:
    try:
        return repo.head.commit.hexsha
    except ValueError as e:
        raise CommandError(
            "Repository has no commits", operation="Read HEAD", target=str(repo.git_dir)
        ) from e
