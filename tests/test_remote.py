"""Tests for remote reachability."""

from gitreword.remote import is_reachable_from_any_remote


def test_no_remote_configured(three_commit_repo):
    head = three_commit_repo.head.commit.hexsha
    assert not is_reachable_from_any_remote(three_commit_repo.working_dir, head)


def test_pushed_commits_are_reachable(pushed_repo):
    head = pushed_repo.head.commit
    pushed_tip = head.parents[0]

    assert is_reachable_from_any_remote(pushed_repo.working_dir, pushed_tip.hexsha)
    assert is_reachable_from_any_remote(pushed_repo.working_dir, pushed_tip.parents[0].hexsha)


def test_unpushed_commit_is_not_reachable(pushed_repo):
    assert not is_reachable_from_any_remote(pushed_repo.working_dir, pushed_repo.head.commit.hexsha)


def test_unknown_commit_degrades_to_false(pushed_repo):
    assert not is_reachable_from_any_remote(pushed_repo.working_dir, "f" * 40)
