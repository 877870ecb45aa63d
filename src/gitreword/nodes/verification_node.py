"""Verification node: checks the rewrite touched nothing but one message."""

from typing import List

from loguru import logger

from gitreword.errors import VerificationFailedError
from gitreword.models.state import RenameState
from gitreword.repository import is_ancestor, open_repository, run_git
from gitreword.status import is_replay_in_progress


def first_line(message: str) -> str:
    lines = message.strip().splitlines()
    return lines[0].strip() if lines else ""


def verification_node(state: RenameState) -> RenameState:
    logger.info("Executing Verification Node")
    repo = open_repository(state["repo_path"])

    old_tip = repo.commit(state["head_hash"])
    original = repo.commit(state["commit"].hash)
    new_tip = repo.commit(state["new_tip"])
    reworded = repo.commit(state["new_hash"])
    problems: List[str] = []

    if state["path"] == "replay":
        if is_replay_in_progress(repo):
            problems.append("a replay is still in progress")
        if not is_ancestor(repo, reworded.hexsha, new_tip.hexsha):
            problems.append(f"reworded commit {reworded.hexsha[:8]} is not in the new history")
        else:
            replayed = int(run_git(repo, "rev-list", "--count", f"{reworded.hexsha}..{new_tip.hexsha}").strip())
            if replayed != state["distance"]:
                problems.append(f"expected {state['distance']} descendants after the reworded commit, found {replayed}")

    if repo.head.commit.hexsha != new_tip.hexsha:
        problems.append("the branch tip moved during the rewrite")
    if new_tip.tree.hexsha != old_tip.tree.hexsha:
        problems.append("the content at the tip changed")
    if [p.hexsha for p in reworded.parents] != [p.hexsha for p in original.parents]:
        problems.append("the reworded commit has different parents")
    if first_line(reworded.message) != first_line(state["new_message"]):
        problems.append("the reworded commit does not carry the new message")

    if problems:
        raise VerificationFailedError(
            f"Rewording {state['commit'].short_hash} completed but verification failed: {'; '.join(problems)}. "
            "Use undo to restore the previous tip."
        )

    logger.info(f"Verified rewrite of {state['commit'].short_hash}: new tip {new_tip.hexsha[:8]}")
    return state
