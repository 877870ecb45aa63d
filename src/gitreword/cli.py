"""Command line entry point for gitreword."""

import argparse
import json
import os
import sys
from typing import List, Optional

from loguru import logger

from gitreword import tools
from gitreword.config import get_settings
from gitreword.errors import RewordError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reword a single commit without touching the rest of history")
    parser.add_argument("--repo-path", type=str, help="Path to the Git repository", default=".")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List recent commits")
    list_parser.add_argument("-n", "--count", type=int, default=None, help="Number of commits to list")

    subparsers.add_parser("status", help="Show branch and working tree status")

    preview_parser = subparsers.add_parser("preview", help="Show what a rename would do")
    preview_parser.add_argument("commit", help="Commit hash (full or short)")
    preview_parser.add_argument("message", help="New commit message")

    rename_parser = subparsers.add_parser("rename", help="Rename a commit message (rewrites history)")
    rename_parser.add_argument("commit", help="Commit hash (full or short)")
    rename_parser.add_argument("message", help="New commit message")
    rename_parser.add_argument("--force", action="store_true", help="Proceed even if the commit was pushed")

    subparsers.add_parser("undo", help="Undo the last rename using the reflog")
    return parser


def run_command(args: argparse.Namespace):
    cwd = os.path.abspath(args.repo_path)
    if args.command == "list":
        return {"commits": [c.model_dump() for c in tools.list_commits(args.count, cwd=cwd)]}
    if args.command == "status":
        return tools.get_repo_status(cwd=cwd).model_dump()
    if args.command == "preview":
        return tools.preview_rename(args.commit, args.message, cwd=cwd).model_dump()
    if args.command == "rename":
        return tools.rename_commit(args.commit, args.message, force=args.force, cwd=cwd).model_dump()
    if args.command == "undo":
        return tools.undo_rename(cwd=cwd).model_dump()
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else get_settings().log_level)

    try:
        output = run_command(args)
    except RewordError as e:
        logger.debug(f"{args.command} failed: {e.code}")
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
