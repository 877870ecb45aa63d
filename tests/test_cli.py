"""Tests for the command line entry point."""

import json
import sys

import pytest
from loguru import logger

from gitreword.cli import main


@pytest.fixture(autouse=True)
def restore_logging():
    """main() replaces loguru sinks; put the default one back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_list_prints_commits(three_commit_repo, capsys):
    exit_code = main(["--repo-path", three_commit_repo.working_dir, "list", "-n", "2"])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert [c["message"] for c in output["commits"]] == ["c", "b"]


def test_status_prints_derived_clean_flag(three_commit_repo, capsys):
    assert main(["--repo-path", three_commit_repo.working_dir, "status"]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["is_clean"] is True
    assert output["branch"] == "main"


def test_rename_and_undo(three_commit_repo, capsys):
    old_tip = three_commit_repo.head.commit.hexsha

    assert main(["--repo-path", three_commit_repo.working_dir, "rename", "HEAD~1", "b2"]) == 0
    renamed = json.loads(capsys.readouterr().out)
    assert renamed["path"] == "replay"
    assert three_commit_repo.commit("HEAD~1").summary == "b2"

    assert main(["--repo-path", three_commit_repo.working_dir, "undo"]) == 0
    undone = json.loads(capsys.readouterr().out)
    assert undone["restored_tip"] == old_tip


def test_errors_are_reported_as_json(tmp_path, capsys):
    exit_code = main(["--repo-path", str(tmp_path), "status"])

    err = capsys.readouterr().err
    error = json.loads(err[err.index("{") :])
    assert exit_code == 1
    assert error["error"] == "not_a_repository"
