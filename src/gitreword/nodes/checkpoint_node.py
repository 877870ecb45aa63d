"""Checkpoint node: remembers the pre-rename tip for undo."""

from loguru import logger

from gitreword.models.state import RenameState
from gitreword.repository import open_repository
from gitreword.undo import record_checkpoint


def checkpoint_node(state: RenameState) -> RenameState:
    logger.info("Executing Checkpoint Node")
    repo = open_repository(state["repo_path"])
    record_checkpoint(repo, state["head_hash"], f"before rewording {state['commit'].short_hash}")
    return state
