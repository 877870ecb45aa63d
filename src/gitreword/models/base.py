"""Base records shared across gitreword."""

from pydantic import BaseModel, ConfigDict, Field, computed_field


class CommitInfo(BaseModel):
    """Point-in-time snapshot of one commit.

    Rewording the commit or any of its ancestors gives it a new hash, so a
    CommitInfo is not a stable handle.
    """

    model_config = ConfigDict(frozen=True)

    hash: str = Field(..., description="The full commit hash")
    short_hash: str = Field(..., description="The abbreviated commit hash")
    message: str = Field(..., description="First line of the commit message")
    author: str = Field(..., description="The commit author's name")
    date: str = Field(..., description="Author date, ISO-like")


class RepoStatus(BaseModel):
    """Snapshot of the working tree, recomputed on every call."""

    model_config = ConfigDict(frozen=True)

    branch: str = Field(..., description="Current branch, or HEAD when detached")
    has_uncommitted_changes: bool = Field(..., description="Staged, unstaged or untracked changes exist")
    is_replay_in_progress: bool = Field(..., description="An interactive rebase is stopped or running")

    @computed_field
    @property
    def is_clean(self) -> bool:
        return not self.has_uncommitted_changes and not self.is_replay_in_progress
