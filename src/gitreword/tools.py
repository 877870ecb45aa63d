"""Operations offered to the outer tool-invocation layer.

These are the only functions that default the working directory to the
process's current directory; everything below them takes an explicit
repository path. Read-only operations hold the repository's shared lock,
rename and undo the exclusive one.
"""

import os
from typing import List, Optional

from loguru import logger

from gitreword.commits import read_commit, read_commits
from gitreword.config import get_settings
from gitreword.errors import CommitNotFoundError, PushedToRemoteError, UnsupportedHistoryError
from gitreword.locking import repository_lock
from gitreword.models.base import CommitInfo, RepoStatus
from gitreword.models.results import RenamePreview, RenameResult, UndoResult
from gitreword.nodes.validation_node import PUSHED_WARNING, plan_rename
from gitreword.remote import read_reachable_from_any_remote
from gitreword.repository import open_repository
from gitreword.status import read_status
from gitreword.undo import undo_last_rename
from gitreword.workflow import run_rename


def _repo_path(cwd: Optional[str]) -> str:
    return cwd if cwd else os.getcwd()


def list_commits(count: Optional[int] = None, cwd: Optional[str] = None) -> List[CommitInfo]:
    """Recent commits, newest first. ``count`` is clamped to 1..GITREWORD_MAX_COMMITS."""
    settings = get_settings()
    count = settings.default_commits if count is None else count
    count = max(1, min(count, settings.max_commits))

    repo = open_repository(_repo_path(cwd))
    with repository_lock(repo, exclusive=False):
        return read_commits(repo, count)


def get_repo_status(cwd: Optional[str] = None) -> RepoStatus:
    repo = open_repository(_repo_path(cwd))
    with repository_lock(repo, exclusive=False):
        return read_status(repo)


def preview_rename(commit_hash: str, new_message: str, cwd: Optional[str] = None) -> RenamePreview:
    """Describe what renaming ``commit_hash`` would do. Never changes the repository."""
    repo = open_repository(_repo_path(cwd))
    with repository_lock(repo, exclusive=False):
        status = read_status(repo)
        commit = read_commit(repo, commit_hash)
        if commit is None:
            raise CommitNotFoundError(f"Commit {commit_hash} not found")

        warnings = []
        if status.has_uncommitted_changes:
            warnings.append("Working directory is not clean. Commit or stash changes before renaming.")
        if status.is_replay_in_progress:
            warnings.append("A rebase is in progress. Complete or abort it before renaming.")
        if not new_message.strip():
            warnings.append("New commit message is empty.")

        pushed = read_reachable_from_any_remote(repo, commit.hash)
        if pushed:
            warnings.append(PUSHED_WARNING)

        path, distance = None, None
        try:
            path, distance = plan_rename(repo, commit)
        except UnsupportedHistoryError as e:
            warnings.append(e.message)

    return RenamePreview(
        commit=commit,
        current_message=commit.message,
        new_message=new_message,
        path=path,
        distance=distance,
        pushed_to_remote=pushed,
        can_proceed=status.is_clean and path is not None and bool(new_message.strip()),
        warnings=warnings,
    )


def rename_commit(
    commit_hash: str, new_message: str, force: bool = False, cwd: Optional[str] = None
) -> RenameResult:
    """Reword ``commit_hash``.

    Without ``force``, a commit reachable from a remote-tracking branch is
    refused with PushedToRemoteError before anything is changed.
    """
    repo = open_repository(_repo_path(cwd))
    with repository_lock(repo, exclusive=True):
        if not force:
            commit = read_commit(repo, commit_hash)
            if commit is None:
                raise CommitNotFoundError(f"Commit {commit_hash} not found")
            if read_reachable_from_any_remote(repo, commit.hash):
                logger.warning(f"Refusing to reword pushed commit {commit.short_hash} without force")
                raise PushedToRemoteError(
                    "This commit has been pushed to remote. Rewriting history can cause issues for "
                    "collaborators. Use force=true to proceed anyway."
                )
        return run_rename(repo.working_tree_dir, commit_hash, new_message)


def undo_rename(cwd: Optional[str] = None) -> UndoResult:
    """Reset to the branch position before its last movement. See ``gitreword.undo``."""
    return undo_last_rename(_repo_path(cwd))
