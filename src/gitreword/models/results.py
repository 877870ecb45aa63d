"""Results returned by the caller-facing operations."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from gitreword.models.base import CommitInfo

RenamePath = Literal["amend", "replay"]


class RenamePreview(BaseModel):
    """What a rename would do, computed without touching the repository."""

    model_config = ConfigDict(frozen=True)

    commit: CommitInfo
    current_message: str
    new_message: str
    path: Optional[RenamePath] = Field(None, description="amend for the tip, replay for an ancestor")
    distance: Optional[int] = Field(None, description="Commits between target (exclusive) and tip (inclusive)")
    pushed_to_remote: bool = False
    can_proceed: bool
    warnings: List[str] = Field(default_factory=list)


class RenameResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    old_hash: str
    new_hash: str = Field(..., description="Hash of the reworded commit")
    new_tip: str = Field(..., description="Branch tip after the rewrite")
    new_message: str
    path: RenamePath
    warnings: List[str] = Field(default_factory=list)


class UndoResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    previous_tip: str = Field(..., description="Tip before the undo")
    restored_tip: str = Field(..., description="Tip after the undo")
    message: str
    warnings: List[str] = Field(default_factory=list)
