"""Error kinds raised by gitreword.

Every failure leaving the package is a ``RewordError`` subclass with a stable
``code``. Raw ``GitCommandError`` instances are wrapped, keeping git's stderr
in ``details`` for debugging.
"""

from typing import Any, Dict, Optional


class RewordError(Exception):
    """Base class for all gitreword failures."""

    code = "reword_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NotARepositoryError(RewordError):
    code = "not_a_repository"


class CommitNotFoundError(RewordError):
    code = "commit_not_found"


class WorkingTreeDirtyError(RewordError):
    code = "working_tree_dirty"


class ReplayInProgressError(RewordError):
    code = "replay_already_in_progress"


class PushedToRemoteError(RewordError):
    code = "pushed_to_remote_blocked"


class ReplayConflictError(RewordError):
    """The interactive replay failed part way.

    When ``in_progress`` is true the repository has been left mid-replay on
    purpose; it has to be resolved (``git rebase --continue``) or abandoned
    (``git rebase --abort``) by hand.
    """

    code = "replay_conflict"

    def __init__(self, message: str, details: Optional[str] = None, in_progress: bool = True):
        super().__init__(message, details)
        self.in_progress = in_progress

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["in_progress"] = self.in_progress
        return payload


class UndoUnavailableError(RewordError):
    code = "undo_unavailable"


class InvalidMessageError(RewordError):
    code = "invalid_message"


class UnsupportedHistoryError(RewordError):
    code = "unsupported_history"


class VerificationFailedError(RewordError):
    code = "verification_failed"


class GitCommandFailedError(RewordError):
    """Any other git invocation failure; ``status`` is git's exit code when known."""

    code = "git_command_failed"

    def __init__(self, message: str, details: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message, details)
        self.status = status


class RepositoryLockError(RewordError):
    code = "repository_lock_failed"
