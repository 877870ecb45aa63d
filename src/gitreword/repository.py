"""Opening repositories and the single entry point for running git commands."""

from pathlib import Path
from typing import Dict, Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from loguru import logger

from gitreword.config import get_settings
from gitreword.errors import GitCommandFailedError, NotARepositoryError


def open_repository(repo_path: str) -> Repo:
    """Open the working tree containing ``repo_path``.

    Raises NotARepositoryError when the path is missing, is not inside a
    repository, or belongs to a bare repository.
    """
    try:
        repo = Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise NotARepositoryError(f"{repo_path} is not a git repository") from e

    if repo.bare or repo.working_tree_dir is None:
        raise NotARepositoryError(f"{repo_path} is a bare repository without a working tree")

    return repo


def git_dir(repo: Repo) -> Path:
    """Private git directory of the working tree (``.git`` or a worktree's gitdir)."""
    return Path(repo.git_dir)


def _diagnostic(error: GitCommandError) -> str:
    stderr = (error.stderr or "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:") :].strip().strip("'")
    return stderr or str(error)


def run_git(repo: Repo, command: str, *args: str, env: Optional[Dict[str, str]] = None) -> str:
    """Run ``git <command> <args>`` in the repository and return stdout.

    Every invocation carries the configured timeout. Failures come back as
    GitCommandFailedError with git's stderr in ``details``.
    """
    settings = get_settings()
    logger.debug(f"git {command} {' '.join(args)}")
    try:
        return getattr(repo.git, command.replace("-", "_"))(
            *args,
            env=env,
            kill_after_timeout=settings.kill_after_timeout,
        )
    except GitCommandError as e:
        raise GitCommandFailedError(f"git {command} failed", details=_diagnostic(e), status=e.status) from e


def has_commits(repo: Repo) -> bool:
    """False for a repository whose current branch is unborn."""
    return repo.head.is_valid()


def resolve_commit(repo: Repo, ref: str) -> Optional[str]:
    """Full hash of the commit ``ref`` names, or None if it names nothing."""
    if not ref or ref.startswith("-"):
        return None
    try:
        return run_git(repo, "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}").strip() or None
    except GitCommandFailedError:
        return None


def is_ancestor(repo: Repo, ancestor: str, descendant: str) -> bool:
    try:
        run_git(repo, "merge-base", "--is-ancestor", ancestor, descendant)
    except GitCommandFailedError as e:
        if e.status == 1:
            return False
        raise
    return True
