"""
State carried through the rename workflow graph.
"""

from typing import List, Optional, TypedDict

from gitreword.models.base import CommitInfo, RepoStatus


class RenameState(TypedDict, total=False):
    """State container for the rename workflow.

    TypedDict for LangGraph compatibility; total=False because each node
    only fills in what it knows.
    """

    # Input
    repo_path: str  # Resolved working tree root
    commit_ref: str  # Full or abbreviated hash as supplied by the caller
    new_message: str

    # Validation output
    status: RepoStatus
    commit: CommitInfo  # The resolved target
    head_hash: str  # Tip before the mutation
    path: str  # "amend" or "replay"
    distance: int  # Commits between target (exclusive) and tip (inclusive)
    pushed_to_remote: bool

    # Mutation output
    new_hash: Optional[str]  # Reworded commit
    new_tip: Optional[str]

    warnings: List[str]
