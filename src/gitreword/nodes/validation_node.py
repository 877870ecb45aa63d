"""
Validation node: precondition checks and amend/replay path selection.

Nothing in this node changes the repository, so every failure raised here is
fully recoverable.
"""

from typing import Tuple

from git import Repo
from loguru import logger

from gitreword.commits import read_commit
from gitreword.errors import (
    CommitNotFoundError,
    InvalidMessageError,
    ReplayInProgressError,
    UnsupportedHistoryError,
    WorkingTreeDirtyError,
)
from gitreword.models.base import CommitInfo
from gitreword.models.state import RenameState
from gitreword.remote import read_reachable_from_any_remote
from gitreword.repository import has_commits, is_ancestor, open_repository, run_git
from gitreword.status import read_status

PUSHED_WARNING = "This commit has been pushed to remote. Rewriting history will require force push."


def plan_rename(repo: Repo, commit: CommitInfo) -> Tuple[str, int]:
    """Choose how ``commit`` gets reworded.

    Returns ``("amend", 0)`` for the tip and ``("replay", distance)`` for a
    strict ancestor, where distance counts the commits after the target up to
    and including the tip.
    """
    if not has_commits(repo):
        raise UnsupportedHistoryError("The current branch has no commits")

    head = repo.head.commit.hexsha
    if commit.hash == head:
        return "amend", 0

    if not is_ancestor(repo, commit.hash, head):
        raise UnsupportedHistoryError(f"Commit {commit.short_hash} is not part of the current branch history")

    distance = int(run_git(repo, "rev-list", "--count", f"{commit.hash}..HEAD").strip())
    merges = int(run_git(repo, "rev-list", "--count", "--merges", f"{commit.hash}..HEAD").strip())
    if merges or len(repo.commit(commit.hash).parents) > 1:
        raise UnsupportedHistoryError(
            f"Merge commits between {commit.short_hash} and the tip would be flattened by the replay"
        )

    return "replay", distance


def validation_node(state: RenameState) -> RenameState:
    """Check preconditions, resolve the target and pick the rename path."""
    logger.info("Executing Validation Node")

    repo = open_repository(state["repo_path"])

    new_message = state.get("new_message") or ""
    if not new_message.strip():
        raise InvalidMessageError("New commit message is empty")

    status = read_status(repo)
    if status.is_replay_in_progress:
        raise ReplayInProgressError("A rebase is already in progress. Please complete or abort it first.")
    if status.has_uncommitted_changes:
        raise WorkingTreeDirtyError("Working directory is not clean. Please commit or stash your changes.")

    commit = read_commit(repo, state["commit_ref"])
    if commit is None:
        raise CommitNotFoundError(f"Commit {state['commit_ref']} not found")

    warnings = list(state.get("warnings", []))
    pushed = read_reachable_from_any_remote(repo, commit.hash)
    if pushed:
        logger.warning(f"Commit {commit.short_hash} is reachable from a remote-tracking branch")
        warnings.append(PUSHED_WARNING)

    path, distance = plan_rename(repo, commit)
    logger.info(f"Rewording {commit.short_hash} via {path} path (distance {distance})")

    return {
        **state,
        "status": status,
        "commit": commit,
        "head_hash": repo.head.commit.hexsha,
        "path": path,
        "distance": distance,
        "pushed_to_remote": pushed,
        "warnings": warnings,
    }
