"""
Push refspec planning.
"""

from dataclasses import dataclass, field
from typing import List

from git import Repo

from ghkit.constants import MIRROR_TAGS_REFSPEC
from ghkit.logging import get_logger
from ghkit.utils.git.common import (
    HEADS_PREFIX,
    REMOTES_PREFIX,
    TAGS_PREFIX,
    default_branch_name,
    list_refs,
    split_remote_ref,
)

logger = get_logger("ghkit.utils.git.refspecs")


def mirror_push_refspecs(remote_name: str) -> List[str]:
    """Catch-all push configuration of a mirror remote"""
    return [
        f"{REMOTES_PREFIX}{remote_name}/*:{HEADS_PREFIX}*",
        MIRROR_TAGS_REFSPEC,
    ]


@dataclass
class RefspecSet:
    """
    push: refspecs for the push itself, in order, not deduplicated
    remote_config: refspecs to store as the remote's push configuration
    """

    push: List[str] = field(default_factory=list)
    remote_config: List[str] = field(default_factory=list)


class RefspecPlanner:
    def plan(self, repo: Repo, remote_name: str, mirror: bool = False) -> RefspecSet:
        """
        Default branch first; with mirror, every remote-tracking branch of
        every remote (as a local branch of the same name) and every tag.
        """
        refspecs = RefspecSet(push=[f"{HEADS_PREFIX}{default_branch_name(repo)}"])
        if not mirror:
            return refspecs

        refspecs.remote_config = mirror_push_refspecs(remote_name)
        for ref_name in list_refs(repo, REMOTES_PREFIX.rstrip("/")):
            parts = split_remote_ref(ref_name)
            if parts is None:
                continue
            _, branch = parts
            if branch == "HEAD":
                continue
            refspecs.push.append(f"{ref_name}:{HEADS_PREFIX}{branch}")
        for ref_name in list_refs(repo, TAGS_PREFIX.rstrip("/")):
            refspecs.push.append(f"{ref_name}:{ref_name}")

        logger.debug(f"Planned {len(refspecs.push)} refspecs for '{remote_name}'")
        return refspecs

    def register(self, repo: Repo, remote_name: str, refspecs: RefspecSet) -> None:
        """Store the set's push configuration on the remote"""
        for refspec in refspecs.remote_config:
            repo.git.config("--local", "--add", f"remote.{remote_name}.push", refspec)
