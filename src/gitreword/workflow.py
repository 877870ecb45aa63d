"""gitreword rename workflow, orchestrated as a LangGraph state graph.

    validation -> checkpoint -> amend | replay -> verification -> END

Nodes raise RewordError subclasses; LangGraph propagates them out of
``invoke`` unchanged. The whole graph runs under the repository's exclusive
lock.
"""

from functools import lru_cache

from langgraph.graph import END, StateGraph
from loguru import logger

from gitreword.locking import repository_lock
from gitreword.models.results import RenameResult
from gitreword.models.state import RenameState
from gitreword.nodes.amend_node import amend_node
from gitreword.nodes.checkpoint_node import checkpoint_node
from gitreword.nodes.replay_node import replay_node
from gitreword.nodes.validation_node import validation_node
from gitreword.nodes.verification_node import verification_node
from gitreword.repository import open_repository


def route_by_path(state: RenameState) -> str:
    return state["path"]


def create_workflow():
    """Create the rename workflow graph."""
    workflow = StateGraph(RenameState)

    # Add nodes
    workflow.add_node("validation_node", validation_node)
    workflow.add_node("checkpoint_node", checkpoint_node)
    workflow.add_node("amend_node", amend_node)
    workflow.add_node("replay_node", replay_node)
    workflow.add_node("verification_node", verification_node)

    workflow.set_entry_point("validation_node")

    # Define edges
    workflow.add_edge("validation_node", "checkpoint_node")
    workflow.add_conditional_edges(
        "checkpoint_node",
        route_by_path,
        {"amend": "amend_node", "replay": "replay_node"},
    )
    workflow.add_edge("amend_node", "verification_node")
    workflow.add_edge("replay_node", "verification_node")
    workflow.add_edge("verification_node", END)

    return workflow.compile()


@lru_cache(maxsize=1)
def get_workflow():
    return create_workflow()


def run_rename(repo_path: str, commit_ref: str, new_message: str) -> RenameResult:
    """Reword one commit of the repository at ``repo_path``.

    The tip is amended in place; an ancestor is reworded through an
    interactive replay. Raises a RewordError subclass on any failure.
    """
    repo = open_repository(repo_path)
    initial_state: RenameState = {
        "repo_path": repo.working_tree_dir,
        "commit_ref": commit_ref,
        "new_message": new_message,
        "warnings": [],
    }

    with repository_lock(repo, exclusive=True):
        final_state = get_workflow().invoke(initial_state)

    logger.info(f"Rename completed: {final_state['commit'].short_hash} -> {final_state['new_hash'][:8]}")
    return RenameResult(
        success=True,
        old_hash=final_state["commit"].hash,
        new_hash=final_state["new_hash"],
        new_tip=final_state["new_tip"],
        new_message=new_message,
        path=final_state["path"],
        warnings=final_state.get("warnings", []),
    )
