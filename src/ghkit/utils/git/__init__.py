"""
Git utilities package.
"""

from ghkit.utils.git.operations import (
    add_all_and_commit,
    add_and_commit,
    add_remote,
    clone,
    default_branch_name,
    fetch_remote_branches,
    fetch_until_commit,
    head_commit_id,
    init_repository,
    open_or_init_repository,
    push,
    set_branch_upstream,
)
from ghkit.utils.git.refspecs import RefspecPlanner, RefspecSet
from ghkit.utils.git.remotes import RemoteRegistry
from ghkit.utils.git.sync import SyncRetryEngine

__all__ = [
    "add_all_and_commit",
    "add_and_commit",
    "add_remote",
    "clone",
    "default_branch_name",
    "fetch_remote_branches",
    "fetch_until_commit",
    "head_commit_id",
    "init_repository",
    "open_or_init_repository",
    "push",
    "set_branch_upstream",
    "RefspecPlanner",
    "RefspecSet",
    "RemoteRegistry",
    "SyncRetryEngine",
]
