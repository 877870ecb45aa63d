"""Shared fixtures: real repositories built with GitPython under tmp_path."""

from pathlib import Path

import pytest
from git import Repo

from gitreword.config import get_settings


def create_commit(repo: Repo, file_name: str, content: str, message: str) -> str:
    """Write ``file_name`` and commit it, returning the new hash."""
    file_path = Path(repo.working_dir) / file_name
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(content)
    repo.index.add([file_name])
    return repo.index.commit(message).hexsha


def history(repo: Repo) -> list:
    """(hash, subject) pairs from the tip backwards."""
    output = repo.git.log("--format=%H %s")
    return [tuple(line.split(" ", 1)) for line in output.splitlines()]


@pytest.fixture
def make_commit():
    return create_commit


@pytest.fixture
def log_of():
    return history


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from GITREWORD_* variables of the calling shell."""
    for name in (
        "GITREWORD_DEFAULT_BRANCH",
        "GITREWORD_GIT_TIMEOUT",
        "GITREWORD_DEFAULT_COMMITS",
        "GITREWORD_MAX_COMMITS",
        "GITREWORD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def temp_git_repo(tmp_path):
    """Create an empty repository on branch main with a committer identity."""
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()
    repo = Repo.init(repo_path, initial_branch="main")
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
        config.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture
def three_commit_repo(temp_git_repo):
    """C1("a") <- C2("b") <- C3("c"), C3 at the tip of main."""
    repo = temp_git_repo
    create_commit(repo, "a.txt", "alpha", "a")
    create_commit(repo, "b.txt", "beta", "b")
    create_commit(repo, "a.txt", "alpha two", "c")
    return repo


@pytest.fixture
def pushed_repo(three_commit_repo, tmp_path):
    """three_commit_repo pushed to a bare origin, plus one unpushed commit."""
    repo = three_commit_repo
    remote_path = tmp_path / "origin.git"
    Repo.init(remote_path, bare=True)
    origin = repo.create_remote("origin", str(remote_path))
    origin.push("main")
    create_commit(repo, "d.txt", "delta", "d")
    return repo
