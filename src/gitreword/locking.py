"""Per-repository locking.

Mutating operations hold an exclusive ``fcntl.flock`` on
``<git-dir>/gitreword.lock`` from validation until verification; read-only
inspections hold a shared one, so they never observe a half-replayed branch.
The lock is re-entrant per thread: inspections called from inside a mutation
reuse the lock already held.
"""

import contextlib
import fcntl
import threading
from pathlib import Path
from typing import Dict, Generator, TextIO

from git import Repo
from loguru import logger

from gitreword.errors import RepositoryLockError
from gitreword.repository import git_dir

LOCK_FILENAME = "gitreword.lock"

_held = threading.local()


def _open_lock_file(lock_file: Path) -> TextIO:
    lock_file.touch(exist_ok=True)
    return open(lock_file, "r")


def _held_locks() -> Dict[str, int]:
    if not hasattr(_held, "locks"):
        _held.locks = {}
    return _held.locks


@contextlib.contextmanager
def repository_lock(repo: Repo, exclusive: bool = True) -> Generator[None, None, None]:
    """Hold the repository lock for the duration of the ``with`` block.

    Blocks while another thread or process holds a conflicting lock.
    """
    lock_file = git_dir(repo) / LOCK_FILENAME
    key = str(lock_file.resolve())
    held = _held_locks()

    if key in held:
        # Already held by this thread; shared-to-exclusive upgrades are not
        # supported, callers take the exclusive lock first.
        held[key] += 1
        try:
            yield
        finally:
            held[key] -= 1
        return

    try:
        lock_f = _open_lock_file(lock_file)
    except OSError as e:
        if exclusive:
            raise RepositoryLockError(f"Cannot create lock file {lock_file}", details=str(e)) from e
        # Read-only git dir: inspections go ahead unlocked
        logger.warning(f"Reading without a repository lock, {lock_file} is not writable: {e}")
        yield
        return

    with lock_f:
        fcntl.flock(lock_f.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
        logger.debug(f"Acquired {'exclusive' if exclusive else 'shared'} lock: {lock_file}")
        held[key] = 1
        try:
            yield
        finally:
            del held[key]
            fcntl.flock(lock_f.fileno(), fcntl.LOCK_UN)
            logger.debug(f"Released lock: {lock_file}")
