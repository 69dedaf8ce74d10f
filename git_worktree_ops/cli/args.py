"""Command-line argument parsing for git-worktree-ops."""

import argparse
from typing import List, Optional

from git_worktree_ops.__version__ import __version__


def positive_float(value: str) -> float:
    """argparse type for a strictly positive number of seconds."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-worktree-ops",
        description="List git worktrees and branches, and switch branches without losing uncommitted work",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-worktree-ops {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the raw response envelope as JSON"
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        metavar="SECONDS",
        help="Kill any git command that runs longer than this (default: no limit)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    list_parser = subparsers.add_parser("list", help="List worktrees of a repository")
    list_parser.add_argument("path", nargs="?", default=".", help="Repository path (default: .)")
    list_parser.add_argument(
        "--details", action="store_true", help="Include uncommitted change counts per worktree"
    )

    branches_parser = subparsers.add_parser("branches", help="List local branches of a worktree")
    branches_parser.add_argument("path", nargs="?", default=".", help="Worktree path (default: .)")

    switch_parser = subparsers.add_parser(
        "switch", help="Switch a worktree to another branch, stashing changes if needed"
    )
    switch_parser.add_argument("branch", help="Branch to check out")
    switch_parser.add_argument("path", nargs="?", default=".", help="Worktree path (default: .)")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
