"""Tests for opening repositories and the git invocation wrapper."""

import os

import pytest
from git import Repo

from gitreword.errors import GitCommandFailedError, NotARepositoryError
from gitreword.repository import has_commits, is_ancestor, open_repository, resolve_commit, run_git


def test_open_repository_accepts_working_tree(temp_git_repo):
    repo = open_repository(temp_git_repo.working_dir)
    assert repo.working_tree_dir == temp_git_repo.working_tree_dir


def test_open_repository_accepts_subdirectory(temp_git_repo):
    subdir = temp_git_repo.working_tree_dir + "/nested/dir"
    os.makedirs(subdir)
    repo = open_repository(subdir)
    assert repo.working_tree_dir == temp_git_repo.working_tree_dir


def test_open_repository_rejects_plain_directory(tmp_path):
    plain = tmp_path / "plain"
    plain.mkdir()
    with pytest.raises(NotARepositoryError):
        open_repository(str(plain))


def test_open_repository_rejects_missing_path(tmp_path):
    with pytest.raises(NotARepositoryError):
        open_repository(str(tmp_path / "does-not-exist"))


def test_open_repository_rejects_bare_repository(tmp_path):
    bare_path = tmp_path / "bare.git"
    Repo.init(bare_path, bare=True)
    with pytest.raises(NotARepositoryError):
        open_repository(str(bare_path))


def test_run_git_wraps_failures_with_stderr(temp_git_repo):
    with pytest.raises(GitCommandFailedError) as exc_info:
        run_git(temp_git_repo, "rev-parse", "--verify", "no-such-ref")
    assert exc_info.value.code == "git_command_failed"
    assert exc_info.value.status == 128
    assert exc_info.value.details


def test_resolve_commit(three_commit_repo):
    head = three_commit_repo.head.commit.hexsha
    assert resolve_commit(three_commit_repo, head[:7]) == head
    assert resolve_commit(three_commit_repo, "HEAD") == head
    assert resolve_commit(three_commit_repo, "deadbeef") is None
    assert resolve_commit(three_commit_repo, "--all") is None
    assert resolve_commit(three_commit_repo, "") is None


def test_has_commits(temp_git_repo, make_commit):
    assert not has_commits(temp_git_repo)
    make_commit(temp_git_repo, "a.txt", "alpha", "a")
    assert has_commits(temp_git_repo)


def test_is_ancestor(three_commit_repo):
    head = three_commit_repo.head.commit
    root = head.parents[0].parents[0]
    assert is_ancestor(three_commit_repo, root.hexsha, head.hexsha)
    assert not is_ancestor(three_commit_repo, head.hexsha, root.hexsha)
