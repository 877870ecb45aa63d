"""
Replay node: rewords an ancestor of the tip through an interactive rebase.

The replay starts ``distance + 1`` commits back from the tip so that it
includes the target. The generated step list is rewritten by
``gitreword/replay_plan.py`` so that only the target's step stops for
editing; at that stop the message is amended and the replay continued. The
reworded commit's new hash is read from HEAD right after the amend, and the
new tip from HEAD once the replay has finished.

A failure after the replay has started is never retried or aborted here. The
repository stays mid-replay and the error says so.
"""

import shlex
import sys
from typing import Dict

from git import Repo
from loguru import logger

import gitreword.replay_plan as replay_plan
from gitreword.errors import GitCommandFailedError, ReplayConflictError
from gitreword.models.state import RenameState
from gitreword.nodes.amend_node import NO_EDITOR_ENV, amend_message
from gitreword.repository import open_repository, run_git
from gitreword.status import is_replay_in_progress

RESOLVE_HINT = "Resolve the conflict and run 'git rebase --continue', or run 'git rebase --abort' to give up."


def sequence_editor_command() -> str:
    """Shell command git runs to rewrite the replay's step list."""
    return f"{shlex.quote(sys.executable)} {shlex.quote(replay_plan.__file__)}"


def replay_env(target: str) -> Dict[str, str]:
    return {
        **NO_EDITOR_ENV,
        "GIT_SEQUENCE_EDITOR": sequence_editor_command(),
        replay_plan.TARGET_ENV: target,
        replay_plan.VERB_ENV: "edit",
    }


def replay_failure(repo: Repo, short_hash: str, error: GitCommandFailedError) -> ReplayConflictError:
    in_progress = is_replay_in_progress(repo)
    if in_progress:
        message = f"Replay while rewording {short_hash} stopped with a failure. Manual intervention required. {RESOLVE_HINT}"
    else:
        message = f"Replay for {short_hash} failed before any commit was rewritten"
    logger.error(f"{message} ({error.details})")
    return ReplayConflictError(message, details=error.details, in_progress=in_progress)


def replay_node(state: RenameState) -> RenameState:
    logger.info("Executing Replay Node")
    repo = open_repository(state["repo_path"])
    commit = state["commit"]
    distance = state["distance"]
    target = repo.commit(commit.hash)

    upstream = ["--root"] if not target.parents else [f"HEAD~{distance + 1}"]
    logger.info(f"Replaying {distance + 1} commits to reword {commit.short_hash}")
    try:
        run_git(repo, "rebase", "--interactive", "--no-autosquash", *upstream, env=replay_env(commit.hash))
    except GitCommandFailedError as e:
        raise replay_failure(repo, commit.short_hash, e) from e

    in_progress = is_replay_in_progress(repo)
    stopped = repo.head.commit
    if not in_progress:
        raise ReplayConflictError(
            f"Replay did not stop at {commit.short_hash} for rewording.", in_progress=False
        )
    if stopped.tree.hexsha != target.tree.hexsha:
        raise ReplayConflictError(
            f"Replay stopped at {stopped.hexsha[:7]} instead of {commit.short_hash}. {RESOLVE_HINT}",
            in_progress=True,
        )

    try:
        new_hash = amend_message(repo, state["new_message"])
    except GitCommandFailedError as e:
        raise replay_failure(repo, commit.short_hash, e) from e
    logger.debug(f"Reworded {commit.short_hash} as {new_hash[:8]}, continuing replay")

    try:
        run_git(repo, "rebase", "--continue", env=NO_EDITOR_ENV)
    except GitCommandFailedError as e:
        raise replay_failure(repo, commit.short_hash, e) from e

    if is_replay_in_progress(repo):
        raise ReplayConflictError(
            f"Replay stopped after rewording {commit.short_hash}. {RESOLVE_HINT}", in_progress=True
        )

    new_tip = repo.head.commit.hexsha
    logger.info(f"Reworded {commit.short_hash} -> {new_hash[:8]}, new tip {new_tip[:8]}")
    return {**state, "new_hash": new_hash, "new_tip": new_tip}
