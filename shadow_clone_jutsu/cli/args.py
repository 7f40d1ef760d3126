"""Command-line argument parsing for shadow-clone-jutsu."""

import argparse
from typing import List, Optional

from shadow_clone_jutsu.__version__ import __version__
from shadow_clone_jutsu.constants import TMUX_LAYOUTS
from shadow_clone_jutsu.models.conflict import ConflictResolution


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _add_conflict_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-y", "--yes", action="store_true",
        help="Skip prompts; an existing worktree directory is deleted",
    )
    parser.add_argument(
        "--on-conflict",
        choices=ConflictResolution.choices(),
        help="What to do when the worktree directory already exists (default: ask)",
    )
    parser.add_argument(
        "--skip-dir-check", action="store_true",
        help="Do not check for an existing worktree directory",
    )


def _add_tmux_arguments(parser: argparse.ArgumentParser, with_enable: bool = True) -> None:
    group = parser.add_argument_group("tmux")
    if with_enable:
        group.add_argument("--tmux", action="store_true", help="Open a tmux session for the worktree")
    group.add_argument("--tmux-h", action="store_true", help="Split the session into two side-by-side panes")
    group.add_argument("--tmux-v", action="store_true", help="Split the session into two stacked panes")
    group.add_argument(
        "--tmux-h-panes", type=_positive_int, metavar="N",
        help="Split the session into N side-by-side panes (max 10)",
    )
    group.add_argument(
        "--tmux-v-panes", type=_positive_int, metavar="N",
        help="Split the session into N stacked panes (max 15)",
    )
    group.add_argument("--tmux-layout", choices=TMUX_LAYOUTS, help="tmux layout applied after splitting")
    group.add_argument("--no-attach", action="store_true", help="Do not offer to attach to the session")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scj",
        description="Parallel development with git worktrees and tmux sessions",
    )
    parser.add_argument("--version", action="version", version=f"shadow-clone-jutsu {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    create = subparsers.add_parser("create", help="Create a worktree on a new branch")
    create.add_argument("branch", help="Name of the new branch")
    create.add_argument("-b", "--base", help="Branch to fork from (default: current branch)")
    _add_conflict_arguments(create)
    _add_tmux_arguments(create)

    attach = subparsers.add_parser("attach", help="Create a worktree for an existing branch")
    attach.add_argument("branch", help="Existing branch to check out")
    _add_conflict_arguments(attach)
    _add_tmux_arguments(attach)

    list_parser = subparsers.add_parser("list", aliases=["ls"], help="List worktrees")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    delete = subparsers.add_parser("delete", aliases=["rm"], help="Delete a worktree")
    delete.add_argument("branch", help="Branch whose worktree is removed")
    delete.add_argument("-f", "--force", action="store_true", help="Skip confirmation and force removal")

    where = subparsers.add_parser("where", aliases=["w"], help="Print the path of a worktree")
    where.add_argument("branch", nargs="?", help="Branch to look up")
    where.add_argument("--current", action="store_true", help="Worktree containing the current directory")

    tmux = subparsers.add_parser("tmux", aliases=["t"], help="Open a tmux session for an existing worktree")
    tmux.add_argument("branch", help="Branch whose worktree the session opens in")
    _add_tmux_arguments(tmux, with_enable=False)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    args = build_parser().parse_args(argv)
    # Normalize aliases to the primary command name
    aliases = {"ls": "list", "rm": "delete", "w": "where", "t": "tmux"}
    args.command = aliases.get(args.command, args.command)
    return args
