import pytest
from unittest.mock import MagicMock

from git import GitCommandError, Repo

from ghkit.errors import CommandError
from ghkit.utils.git import operations
from ghkit.utils.git.common import list_refs


def test_init_repository_sets_initial_branch(tmp_path):
    repo = operations.init_repository(tmp_path / "fresh", "trunk")

    assert repo.git.symbolic_ref("HEAD") == "refs/heads/trunk"
    assert operations.default_branch_name(repo) == "trunk"


def test_open_or_init_reuses_existing(git_repo):
    repo = operations.open_or_init_repository(git_repo.working_tree_dir)

    assert repo.head.commit.hexsha == git_repo.head.commit.hexsha


def test_open_or_init_creates_missing(tmp_path):
    target = tmp_path / "empty"
    target.mkdir()

    operations.open_or_init_repository(target, "main")

    assert (target / ".git").is_dir()


def test_head_commit_id_of_unborn_branch(tmp_path):
    repo = operations.init_repository(tmp_path / "fresh")

    with pytest.raises(CommandError, match="Repository has no commits"):
        operations.head_commit_id(repo)


def test_add_and_commit_chains_on_head(git_repo, signature, tmp_path):
    previous = git_repo.head.commit.hexsha
    notes = tmp_path / "work" / "notes.txt"
    notes.write_text("notes\n", encoding="utf-8")

    commit_id = operations.add_and_commit(git_repo, signature, [notes], "Add notes")

    commit = git_repo.commit(commit_id)
    assert commit.parents[0].hexsha == previous
    assert commit.message == "Add notes"
    assert commit.author.name == "Test User"
    assert "notes.txt" in commit.tree


def test_add_and_commit_first_commit(tmp_path, signature):
    repo = operations.init_repository(tmp_path / "fresh")
    readme = tmp_path / "fresh" / "README.md"
    readme.write_text("# fresh\n", encoding="utf-8")

    commit_id = operations.add_and_commit(repo, signature, [readme], "Initial commit")

    assert operations.head_commit_id(repo) == commit_id
    assert repo.commit(commit_id).parents == ()


def test_add_and_commit_rejects_path_outside_tree(git_repo, signature, tmp_path):
    outside = tmp_path / "outside.txt"
    outside.write_text("x", encoding="utf-8")

    with pytest.raises(CommandError, match="outside of the working tree"):
        operations.add_and_commit(git_repo, signature, [outside], "nope")


def test_add_and_commit_rejects_missing_path(git_repo, signature, tmp_path):
    with pytest.raises(CommandError, match="Cannot canonicalize path"):
        operations.add_and_commit(git_repo, signature, [tmp_path / "work" / "ghost"], "nope")


def test_add_all_and_commit_stages_everything(git_repo, signature, tmp_path):
    work = tmp_path / "work"
    (work / "src").mkdir()
    (work / "src" / "app.py").write_text("print()\n", encoding="utf-8")
    (work / "README.md").unlink()

    commit_id = operations.add_all_and_commit(git_repo, signature, "Publish")

    tree = git_repo.commit(commit_id).tree
    assert "src/app.py" in tree
    assert "README.md" not in tree


def test_push_default_branch(git_repo, bare_remote):
    operations.push(git_repo, "origin", bare_remote.git_dir)

    assert bare_remote.heads.main.commit.hexsha == git_repo.head.commit.hexsha
    assert git_repo.remote("origin").url == bare_remote.git_dir


def test_push_mirror(git_repo, bare_remote, signature, tmp_path):
    git_repo.git.update_ref("refs/remotes/external/main", "HEAD")
    git_repo.git.update_ref("refs/remotes/external/dev", "HEAD")
    git_repo.create_tag("v1.0")

    operations.push(git_repo, "origin", bare_remote.git_dir, mirror=True)

    assert list_refs(bare_remote) == [
        "refs/heads/dev",
        "refs/heads/main",
        "refs/tags/v1.0",
    ]
    pushed = git_repo.git.config("--local", "--get-all", "remote.origin.push")
    assert "refs/tags/*:refs/tags/*" in pushed.splitlines()


def test_push_rejected_non_fast_forward(git_repo, bare_remote, signature, tmp_path):
    operations.push(git_repo, "origin", bare_remote.git_dir)
    git_repo.index.commit(
        "rewritten", parent_commits=[], author=signature, committer=signature
    )

    with pytest.raises(CommandError) as exc_info:
        operations.push(git_repo, "origin", bare_remote.git_dir)

    assert exc_info.value.operation == "Push"


def test_push_plan_failure(mocker):
    planner = MagicMock()
    planner.plan.side_effect = GitCommandError(["git", "symbolic-ref"], 128)
    registry = MagicMock()

    with pytest.raises(CommandError, match="Plan push failed"):
        operations.push(MagicMock(), "origin", "/nowhere", planner=planner, registry=registry)

    registry.recreate.assert_not_called()


def test_clone_names_remote(git_repo, bare_remote, tmp_path):
    operations.push(git_repo, "origin", bare_remote.git_dir)

    cloned = operations.clone(bare_remote.git_dir, tmp_path / "copy", remote_name="upstream")

    assert [remote.name for remote in cloned.remotes] == ["upstream"]
    assert cloned.head.commit.hexsha == git_repo.head.commit.hexsha


def test_clone_bare(git_repo, bare_remote, tmp_path):
    operations.push(git_repo, "origin", bare_remote.git_dir)

    cloned = operations.clone(
        bare_remote.git_dir, tmp_path / "mirror.git", bare=True, remote_name="external"
    )

    assert cloned.bare
    assert cloned.remotes[0].name == "external"


def test_clone_failure(tmp_path):
    with pytest.raises(CommandError, match="Clone failed"):
        operations.clone(str(tmp_path / "missing.git"), tmp_path / "copy")


def test_fetch_remote_branches_into_tracking_refs(git_repo, bare_remote, tmp_path):
    git_repo.git.branch("dev")
    git_repo.git.push(bare_remote.git_dir, "main", "dev")
    mirror = Repo.clone_from(bare_remote.git_dir, str(tmp_path / "m.git"), bare=True, origin="external")

    operations.fetch_remote_branches(mirror, "external", bare_remote.git_dir)

    assert list_refs(mirror, "refs/remotes/external") == [
        "refs/remotes/external/dev",
        "refs/remotes/external/main",
    ]


def test_set_branch_upstream(git_repo, bare_remote):
    operations.push(git_repo, "origin", bare_remote.git_dir)
    git_repo.remote("origin").fetch()

    operations.set_branch_upstream(git_repo, "main", "origin")

    assert git_repo.git.config("--get", "branch.main.remote") == "origin"
    assert git_repo.git.config("--get", "branch.main.merge") == "refs/heads/main"


def test_set_branch_upstream_missing_branch(git_repo):
    with pytest.raises(CommandError, match="Branch 'nope' does not exist"):
        operations.set_branch_upstream(git_repo, "nope", "origin")


def test_add_remote(git_repo):
    operations.add_remote(git_repo, "external", "https://github.com/octocat/hello.git")

    assert git_repo.remote("external").url == "https://github.com/octocat/hello.git"


def test_fetch_until_commit_picks_up_new_commit(git_repo, bare_remote, signature, tmp_path):
    operations.push(git_repo, "origin", bare_remote.git_dir)
    follower = operations.clone(bare_remote.git_dir, tmp_path / "follower")
    notes = tmp_path / "work" / "notes.txt"
    notes.write_text("more\n", encoding="utf-8")
    commit_id = operations.add_and_commit(git_repo, signature, [notes], "More")
    operations.push(git_repo, "origin", bare_remote.git_dir)

    operations.fetch_until_commit(
        follower, "origin", bare_remote.git_dir, commit_id, delay=0, max_retries=2
    )

    assert follower.commit(commit_id).hexsha == commit_id
