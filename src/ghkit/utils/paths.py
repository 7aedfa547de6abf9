"""
Lexical path helpers.
"""

import os
import re
from pathlib import PurePath
from typing import Iterator, List, Union

from ghkit.errors import InvalidInputError, UnrelatedPathsError

PathLike = Union[str, "os.PathLike[str]"]

_SEPARATORS = re.compile(
    "|".join(re.escape(sep) for sep in (os.sep, os.altsep) if sep)
)


def split_components(path: str) -> List[str]:
    """
    Split a path into its anchor followed by its components.

    ``.`` components are dropped, except a leading one on a relative path.
    ``..`` is kept as is.
    """
    anchor = PurePath(path).anchor
    rest = path[len(anchor):]
    parts = [part for part in _SEPARATORS.split(rest) if part]
    components = [
        part
        for i, part in enumerate(parts)
        if part != os.curdir or (i == 0 and not anchor)
    ]
    return [anchor, *components] if anchor else components


def _parent_steps(first: str, remaining: Iterator[str], parent: str) -> List[str]:
    steps = []
    for component in (first, *remaining):
        if component == os.pardir:
            raise UnrelatedPathsError(
                f"Parent path ({parent}) contains '{os.pardir}' after the paths diverged"
            )
        steps.append(os.pardir)
    return steps


def relativize(parent: PathLike, child: PathLike) -> str:
    """
    Compute the path of ``child`` relative to ``parent``.

    Both paths must be absolute. The comparison is purely lexical: nothing is
    read from disk and symlinks are not resolved. Paths that only share the
    filesystem root are supported (``/a/b`` -> ``/c`` gives ``../../c``).

    Args:
        parent: Absolute directory path to start from
        child: Absolute target path

    Returns:
        str: Relative path, ``""`` when both paths are the same

    Raises:
        InvalidInputError: either path is relative
        UnrelatedPathsError: parent contains ``..`` where it cannot be walked
    """
    parent_str = os.fspath(parent)
    child_str = os.fspath(child)
    if not PurePath(parent_str).is_absolute():
        raise InvalidInputError(f"Parent path ({parent_str}) must be absolute")
    if not PurePath(child_str).is_absolute():
        raise InvalidInputError(f"Child path ({child_str}) must be absolute")

    parent_it = iter(split_components(parent_str))
    child_it = iter(split_components(child_str))
    result: List[str] = []

    while True:
        c = next(child_it, None)
        p = next(parent_it, None)

        if c is None and p is None:
            break
        if p is None:
            result.append(c)
            result.extend(child_it)
            break
        if c is None:
            result.extend(_parent_steps(p, parent_it, parent_str))
            break
        if not result and c == p:
            continue
        if p == os.curdir:
            result.append(c)
            continue
        if p == os.pardir:
            raise UnrelatedPathsError(
                f"Parent path ({parent_str}) does not contain child path ({child_str})"
            )

        # First divergence: climb out of what is left of parent, then descend
        result.extend(_parent_steps(p, parent_it, parent_str))
        result.append(c)
        result.extend(child_it)
        break

    return os.sep.join(result)
