"""Single-step undo of the last rename, driven by the reflog.

Undo resets the branch and working tree to the position the branch held
before its most recent movement (``refs/heads/<branch>@{1}``). The branch
ref moves once per rename, for an amend as well as for a whole replay, so
right after a rename this is the pre-rename tip.

A detached HEAD has no branch reflog, and ``HEAD@{1}`` after a replay is one
of the replay's intermediate steps. There the recorded pre-rename tip is
used instead, falling back to ``HEAD@{1}`` only when no rename was recorded.

It is a heuristic: undo has no notion of which operation moved the branch.
If anything else moved it after the rename (a commit, a pull, a reset), that
movement is what gets undone. To make this visible, every rename records the
tip it started from in ``refs/gitreword/pre-rename``; when that marker
disagrees with the reflog entry, the result carries a warning. Running undo
twice in a row swaps back, since the reset is itself a branch movement.
"""

from typing import Optional

from git import Repo
from loguru import logger

from gitreword.errors import GitCommandFailedError, UndoUnavailableError
from gitreword.locking import repository_lock
from gitreword.models.results import UndoResult
from gitreword.repository import has_commits, open_repository, resolve_commit, run_git
from gitreword.status import current_branch, read_status

CHECKPOINT_REF = "refs/gitreword/pre-rename"


def record_checkpoint(repo: Repo, tip: str, reason: str) -> None:
    """Remember ``tip`` as the state to return to when undoing the next rename."""
    run_git(repo, "update-ref", "-m", f"gitreword: {reason}", CHECKPOINT_REF, tip)
    logger.debug(f"Recorded checkpoint {tip[:8]} in {CHECKPOINT_REF}")


def read_checkpoint(repo: Repo) -> Optional[str]:
    return resolve_commit(repo, CHECKPOINT_REF)


def clear_checkpoint(repo: Repo) -> None:
    run_git(repo, "update-ref", "-d", CHECKPOINT_REF)


def previous_position_ref(repo: Repo, checkpoint: Optional[str]) -> str:
    """Ref naming the position undo returns to."""
    branch = current_branch(repo)
    if branch != "HEAD":
        return f"refs/heads/{branch}@{{1}}"
    if checkpoint is not None:
        return CHECKPOINT_REF
    return "HEAD@{1}"


def undo_last_rename(repo_path: str) -> UndoResult:
    """Hard-reset to the position before the last branch movement.

    Raises UndoUnavailableError if the working tree is dirty, a replay is in
    progress, or there is no earlier position in the reflog.
    """
    repo = open_repository(repo_path)
    with repository_lock(repo, exclusive=True):
        status = read_status(repo)
        if status.is_replay_in_progress:
            raise UndoUnavailableError("A rebase is in progress. Complete or abort it before undoing.")
        if status.has_uncommitted_changes:
            raise UndoUnavailableError("Working directory is not clean. Cannot safely undo.")
        if not has_commits(repo):
            raise UndoUnavailableError("Repository has no commits, nothing to undo.")

        checkpoint = read_checkpoint(repo)
        target_ref = previous_position_ref(repo, checkpoint)
        restored = resolve_commit(repo, target_ref)
        if restored is None:
            raise UndoUnavailableError(f"No previous position recorded in the reflog ({target_ref}).")

        current = repo.head.commit.hexsha
        warnings = []
        if checkpoint is None:
            warnings.append("No rename checkpoint recorded; undoing the most recent branch movement.")
        elif checkpoint != restored:
            warnings.append(
                f"The branch moved after the last rename; undoing that movement to {restored[:8]} "
                f"instead of returning to the pre-rename tip {checkpoint[:8]}."
            )

        logger.info(f"Resetting {status.branch} from {current[:8]} to {restored[:8]}")
        try:
            run_git(repo, "reset", "--hard", restored)
        except GitCommandFailedError as e:
            raise UndoUnavailableError(f"Resetting to {restored[:8]} failed", details=e.details) from e

        if checkpoint == restored:
            clear_checkpoint(repo)

        return UndoResult(
            success=True,
            previous_tip=current,
            restored_tip=restored,
            message=f"Reverted {status.branch} to {restored[:8]} using {target_ref}",
            warnings=warnings,
        )
