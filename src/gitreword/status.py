"""Working tree status: current branch, cleanliness, replay detection."""

from git import Repo

from gitreword.config import get_settings
from gitreword.errors import GitCommandFailedError
from gitreword.models.base import RepoStatus
from gitreword.repository import git_dir, has_commits, open_repository, run_git

# Directories git keeps while an interactive (merge) or apply-style rebase runs
REPLAY_STATE_DIRS = ("rebase-merge", "rebase-apply")


def current_branch(repo: Repo) -> str:
    """Short name of the checked-out branch, ``HEAD`` when detached.

    A repository without commits reports the configured primary branch name.
    """
    if not has_commits(repo):
        return get_settings().default_branch
    return run_git(repo, "rev-parse", "--abbrev-ref", "HEAD").strip()


def has_uncommitted_changes(repo: Repo) -> bool:
    return bool(run_git(repo, "status", "--porcelain").strip())


def is_replay_in_progress(repo: Repo) -> bool:
    """True while a rebase is stopped or running in this working tree.

    A missing REBASE_HEAD is the normal case; any other rev-parse failure is
    propagated.
    """
    state_dir = git_dir(repo)
    if any((state_dir / name).is_dir() for name in REPLAY_STATE_DIRS):
        return True
    try:
        run_git(repo, "rev-parse", "--verify", "--quiet", "REBASE_HEAD")
    except GitCommandFailedError as e:
        if e.status == 1:
            return False
        raise
    return True


def read_status(repo: Repo) -> RepoStatus:
    return RepoStatus(
        branch=current_branch(repo),
        has_uncommitted_changes=has_uncommitted_changes(repo),
        is_replay_in_progress=is_replay_in_progress(repo),
    )


def get_status(repo_path: str) -> RepoStatus:
    """Fresh status snapshot of the repository at ``repo_path``."""
    return read_status(open_repository(repo_path))
