"""Whether a commit is already visible through a remote-tracking branch."""

from git import Repo
from loguru import logger

from gitreword.errors import GitCommandFailedError
from gitreword.repository import open_repository, run_git


def read_reachable_from_any_remote(repo: Repo, commit_hash: str) -> bool:
    try:
        output = run_git(repo, "branch", "-r", "--contains", commit_hash)
    except GitCommandFailedError as e:
        logger.debug(f"Remote reachability check failed for {commit_hash[:8]}, assuming unpushed: {e.details}")
        return False
    return bool(output.strip())


def is_reachable_from_any_remote(repo_path: str, commit_hash: str) -> bool:
    """True if some remote-tracking branch contains ``commit_hash``.

    Git failures (no remotes, unknown object) degrade to False.
    """
    return read_reachable_from_any_remote(open_repository(repo_path), commit_hash)
