"""
Sequence editor for the interactive replay.

Git runs this file as ``GIT_SEQUENCE_EDITOR`` with the path of the generated
todo list. The list is parsed into steps and the single ``pick`` step whose
abbreviated hash belongs to the target commit gets a new verb. Everything
else, comments included, is written back untouched.

The target's full hash comes from ``GITREWORD_TARGET`` and the verb from
``GITREWORD_VERB`` (default ``edit``). A non-zero exit makes git abandon the
replay before any commit is rewritten.

Kept free of third-party imports because it runs under a bare interpreter
spawned by git.
"""

import os
import sys
from typing import List, NamedTuple, Optional

TARGET_ENV = "GITREWORD_TARGET"
VERB_ENV = "GITREWORD_VERB"

PICK_VERBS = ("pick", "p")


class PlanError(Exception):
    pass


class Step(NamedTuple):
    verb: str
    commit: str
    rest: str


def parse_step(line: str) -> Optional[Step]:
    """Parse one todo line, or None for comments, blanks and verbs without a commit."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    parts = stripped.split(None, 2)
    if len(parts) < 2:
        return None
    verb, commit = parts[0], parts[1]
    rest = parts[2] if len(parts) == 3 else ""
    return Step(verb, commit, rest)


def matches(step: Step, target: str) -> bool:
    commit = step.commit.lower()
    return len(commit) >= 4 and target.lower().startswith(commit)


def mark_step(lines: List[str], target: str, verb: str = "edit") -> List[str]:
    """Return ``lines`` with the target's pick step switched to ``verb``.

    Raises PlanError unless exactly one pick step belongs to ``target``.
    """
    found = []
    for index, line in enumerate(lines):
        step = parse_step(line)
        if step and step.verb in PICK_VERBS and matches(step, target):
            found.append(index)

    if len(found) != 1:
        raise PlanError(f"expected one step for {target[:12]}, found {len(found)}")

    index = found[0]
    step = parse_step(lines[index])
    ending = "\n" if lines[index].endswith("\n") else ""
    rewritten = " ".join(part for part in (verb, step.commit, step.rest) if part)

    result = list(lines)
    result[index] = rewritten + ending
    return result


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    target = os.environ.get(TARGET_ENV, "").strip()
    verb = os.environ.get(VERB_ENV, "edit").strip() or "edit"
    if len(argv) != 1 or not target:
        print(f"usage: {TARGET_ENV}=<hash> replay_plan.py <todo-file>", file=sys.stderr)
        return 2

    todo_path = argv[0]
    with open(todo_path, "r", encoding="utf-8") as f:
        lines = f.readlines()

    try:
        lines = mark_step(lines, target, verb)
    except PlanError as e:
        print(f"gitreword: {e}", file=sys.stderr)
        return 1

    with open(todo_path, "w", encoding="utf-8") as f:
        f.writelines(lines)
    return 0


if __name__ == "__main__":
    sys.exit(main())
