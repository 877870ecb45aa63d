"""Tests for the replay step list rewriting."""

import pytest

from gitreword.replay_plan import PlanError, main, mark_step, parse_step

TARGET = "3f2a9c1d0b7e4a5c6d8e9f0a1b2c3d4e5f6a7b8c"

TODO = [
    "pick 3f2a9c1 a\n",
    "pick 91bd0aa b\n",
    "pick 7c11e02 c\n",
    "\n",
    "# Rebase 12ab34c..7c11e02 onto 12ab34c (3 commands)\n",
    "#\n",
    "# pick 3f2a9c1 would match if comments were parsed\n",
]


def test_parse_step():
    assert parse_step("pick 3f2a9c1 add feature\n") == ("pick", "3f2a9c1", "add feature")
    assert parse_step("pick 3f2a9c1 # add feature") == ("pick", "3f2a9c1", "# add feature")
    assert parse_step("# pick 3f2a9c1 comment") is None
    assert parse_step("   \n") is None
    assert parse_step("noop") is None


def test_marks_only_the_target_step():
    result = mark_step(TODO, TARGET, "edit")

    assert result[0] == "edit 3f2a9c1 a\n"
    assert result[1:] == TODO[1:]


def test_marks_with_reword_verb():
    assert mark_step(TODO, TARGET, "reword")[0] == "reword 3f2a9c1 a\n"


def test_short_form_verb_is_recognised():
    assert mark_step(["p 3f2a9c1 a"], TARGET) == ["edit 3f2a9c1 a"]


def test_subject_containing_target_hash_is_not_matched():
    todo = ["pick 91bd0aa revert 3f2a9c1\n", "pick 3f2a9c1 a\n"]

    result = mark_step(todo, TARGET)

    assert result == ["pick 91bd0aa revert 3f2a9c1\n", "edit 3f2a9c1 a\n"]


def test_missing_target_is_an_error():
    with pytest.raises(PlanError):
        mark_step(TODO[1:], TARGET)


def test_too_short_abbreviation_is_not_matched():
    with pytest.raises(PlanError):
        mark_step(["pick 3f2 a\n"], TARGET)


def test_main_rewrites_file_in_place(tmp_path, monkeypatch):
    todo_file = tmp_path / "git-rebase-todo"
    todo_file.write_text("".join(TODO))
    monkeypatch.setenv("GITREWORD_TARGET", TARGET)
    monkeypatch.setenv("GITREWORD_VERB", "edit")

    assert main([str(todo_file)]) == 0
    assert todo_file.read_text().splitlines()[0] == "edit 3f2a9c1 a"


def test_main_fails_without_match(tmp_path, monkeypatch):
    todo_file = tmp_path / "git-rebase-todo"
    todo_file.write_text("pick 91bd0aa b\n")
    monkeypatch.setenv("GITREWORD_TARGET", TARGET)

    assert main([str(todo_file)]) == 1
    assert todo_file.read_text() == "pick 91bd0aa b\n"


def test_main_requires_target(tmp_path, monkeypatch):
    monkeypatch.delenv("GITREWORD_TARGET", raising=False)
    assert main([str(tmp_path / "git-rebase-todo")]) == 2
