"""Command-line entry point for shadow-clone-jutsu"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from shadow_clone_jutsu.core import ShadowClone
from shadow_clone_jutsu.exceptions import OperationCancelledError, ShadowCloneError
from shadow_clone_jutsu.logging_config import get_logger, setup_logging
from shadow_clone_jutsu.models.conflict import ConflictResolution
from shadow_clone_jutsu.models.tmux import TmuxOptions
from shadow_clone_jutsu.services.tmux import validate_tmux_options
from .args import parse_args

console = Console(stderr=True)
logger = get_logger(__name__)


def tmux_options_from_args(args) -> Optional[TmuxOptions]:
    """TmuxOptions for commands that take tmux flags, else None."""
    if not hasattr(args, "tmux_h"):
        return None
    return TmuxOptions(
        enabled=getattr(args, "tmux", False) or args.command == "tmux",
        horizontal=args.tmux_h,
        vertical=args.tmux_v,
        horizontal_panes=args.tmux_h_panes,
        vertical_panes=args.tmux_v_panes,
        layout=args.tmux_layout,
        attach=not args.no_attach,
    )


def forced_resolution_from_args(args) -> Optional[ConflictResolution]:
    if getattr(args, "on_conflict", None):
        return ConflictResolution(args.on_conflict)
    if getattr(args, "yes", False):
        return ConflictResolution.DELETE
    return None


def run_command(args) -> int:
    tmux_options = tmux_options_from_args(args)
    if tmux_options is not None and tmux_options.requested:
        # Pane flags are rejected before the repository is touched
        validate_tmux_options(tmux_options)

    overrides = {
        "assume_yes": getattr(args, "yes", False),
        "verbose": args.verbose,
        "debug": args.debug,
    }
    clone = ShadowClone.open(
        os.getcwd(),
        overrides=overrides,
        forced_resolution=forced_resolution_from_args(args),
    )

    if args.command == "create":
        clone.create(
            args.branch,
            base=args.base,
            skip_directory_check=args.skip_dir_check,
            tmux=tmux_options,
        )
    elif args.command == "attach":
        clone.attach(args.branch, skip_directory_check=args.skip_dir_check, tmux=tmux_options)
    elif args.command == "list":
        clone.list_worktrees(as_json=args.json)
    elif args.command == "delete":
        clone.delete(args.branch, force=args.force)
    elif args.command == "where":
        clone.where(args.branch, current=args.current)
    elif args.command == "tmux":
        clone.open_session(args.branch, tmux_options)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)
        log_path = setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)
        if log_path is not None:
            console.print(f"[yellow]Debug mode enabled, logging to {log_path}[/yellow]", soft_wrap=True)
        return run_command(parsed_args)
    except OperationCancelledError as e:
        console.print(e.message, style="yellow", markup=False, highlight=False, soft_wrap=True)
        return 1
    except ShadowCloneError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        console.print(e.format_message(), style="red", markup=False, highlight=False, soft_wrap=True)
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"Unexpected error: {e}", style="red", markup=False, soft_wrap=True)
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
