"""Amend node: rewords the tip commit in place."""

from loguru import logger

from gitreword.errors import GitCommandFailedError
from gitreword.models.state import RenameState
from gitreword.repository import open_repository, run_git

# Keeps git from ever opening an interactive editor
NO_EDITOR_ENV = {"GIT_EDITOR": "true"}


def amend_message(repo, message: str) -> str:
    """Replace the message of HEAD, keeping its tree and parents. Returns the new HEAD."""
    run_git(repo, "commit", "--amend", "--allow-empty", "-m", message, env=NO_EDITOR_ENV)
    return repo.head.commit.hexsha


def amend_node(state: RenameState) -> RenameState:
    logger.info("Executing Amend Node")
    repo = open_repository(state["repo_path"])
    commit = state["commit"]

    try:
        new_hash = amend_message(repo, state["new_message"])
    except GitCommandFailedError as e:
        raise GitCommandFailedError(
            f"Amending commit {commit.short_hash} failed", details=e.details, status=e.status
        ) from e

    logger.info(f"Reworded tip {commit.short_hash} -> {new_hash[:8]}")
    return {**state, "new_hash": new_hash, "new_tip": new_hash}
