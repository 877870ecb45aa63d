"""Commit lookup and listing.

Metadata is read with a single ``git log`` query per call. Fields are
separated by the ASCII unit separator and records by the record separator,
neither of which can occur in a subject line, author name or date.
"""

from typing import List, Optional

from git import Repo
from loguru import logger

from gitreword.models.base import CommitInfo
from gitreword.repository import has_commits, open_repository, resolve_commit, run_git

FIELD_SEP = "\x1f"
RECORD_SEP = "\x1e"
LOG_FORMAT = "%H%x1f%h%x1f%s%x1f%an%x1f%ai%x1e"


def parse_log(output: str) -> List[CommitInfo]:
    """Split ``git log --format=LOG_FORMAT`` output into CommitInfo records."""
    commits = []
    for record in output.split(RECORD_SEP):
        record = record.lstrip("\n")
        if not record:
            continue
        fields = record.split(FIELD_SEP)
        if len(fields) != 5:
            logger.warning(f"Skipping malformed log record: {record!r}")
            continue
        full_hash, short_hash, message, author, date = fields
        commits.append(
            CommitInfo(hash=full_hash, short_hash=short_hash, message=message, author=author, date=date)
        )
    return commits


def read_commits(repo: Repo, count: int) -> List[CommitInfo]:
    if count <= 0 or not has_commits(repo):
        return []
    output = run_git(repo, "log", "-n", str(count), f"--format={LOG_FORMAT}")
    return parse_log(output)


def read_commit(repo: Repo, ref: str) -> Optional[CommitInfo]:
    full_hash = resolve_commit(repo, ref)
    if full_hash is None:
        return None
    commits = parse_log(run_git(repo, "log", "-n", "1", f"--format={LOG_FORMAT}", full_hash, "--"))
    return commits[0] if commits else None


def list_commits(repo_path: str, count: int) -> List[CommitInfo]:
    """Up to ``count`` commits reachable from HEAD, newest first.

    An empty repository yields an empty list.
    """
    return read_commits(open_repository(repo_path), count)


def get_commit_by_hash(repo_path: str, ref: str) -> Optional[CommitInfo]:
    """Resolve a full or abbreviated hash; None when it names no commit."""
    return read_commit(open_repository(repo_path), ref)
