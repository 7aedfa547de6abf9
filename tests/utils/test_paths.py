import os

import pytest

from ghkit.errors import InvalidInputError, UnrelatedPathsError
from ghkit.utils.paths import relativize, split_components


def test_split_components_drops_interior_dot():
    assert split_components("/a/./b//c/.") == ["/", "a", "b", "c"]


def test_split_components_keeps_leading_dot_of_relative_path():
    assert split_components("./a/./b") == [".", "a", "b"]


def test_relativize_parent_with_dot_component():
    assert relativize("/a/./b", "/a/x/b") == "../x/b"


@pytest.mark.parametrize(
    "parent, child",
    [
        ("/a/b/c", "/a/b/d/e"),
        ("/a/./b", "/a/x/b"),
        ("/a/b/.", "/a/b"),
        ("/a/b", "/a/./b/./c"),
        ("/a/b", "/c"),
        ("/a/b/c", "/a"),
        ("/a/b", "/a/c/../d"),
        ("/", "/x/y"),
    ],
)
def test_relativize_resolves_back_to_child(parent, child):
    result = relativize(parent, child)

    assert os.path.normpath(os.path.join(parent, result)) == os.path.normpath(child)


def test_relativize_sibling_subtree():
    assert relativize("/a/b/c", "/a/b/d/e") == "../d/e"


def test_relativize_only_root_shared():
    assert relativize("/a/b", "/c") == "../../c"


def test_relativize_same_path():
    assert relativize("/a/b", "/a/b") == ""


def test_relativize_descendant():
    assert relativize("/repo", "/repo/src/main.py") == "src/main.py"


def test_relativize_ancestor():
    assert relativize("/a/b/c", "/a") == "../.."


def test_relativize_accepts_path_objects(tmp_path):
    assert relativize(tmp_path, tmp_path / "x" / "y") == "x/y"


@pytest.mark.parametrize(
    "parent, child",
    [("a/b", "/a/b"), ("/a/b", "a/b"), ("", "/a")],
)
def test_relativize_rejects_relative_paths(parent, child):
    with pytest.raises(InvalidInputError):
        relativize(parent, child)


def test_relativize_parent_dotdot_after_divergence():
    with pytest.raises(UnrelatedPathsError):
        relativize("/a/../b", "/c")


def test_relativize_parent_dotdot_at_divergence():
    with pytest.raises(UnrelatedPathsError):
        relativize("/a/../b", "/a/c")


def test_unrelated_paths_is_invalid_input():
    with pytest.raises(InvalidInputError):
        relativize("/x/..", "/y")
