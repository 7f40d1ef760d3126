"""Display service for worktree listings"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from shadow_clone_jutsu.constants import (
    SYMBOL_DETACHED,
    SYMBOL_LOCKED,
    SYMBOL_MAIN_WORKTREE,
    SYMBOL_PRUNABLE,
)
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.worktree import Worktree

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    @staticmethod
    def _ordered(worktrees: List[Worktree]) -> List[Worktree]:
        """Main worktree first, the rest by branch name."""
        main = [wt for wt in worktrees if wt.is_main]
        others = sorted(
            (wt for wt in worktrees if not wt.is_main),
            key=lambda wt: (wt.branch_name or "", wt.path),
        )
        return main + others

    def display_worktree_table(self, worktrees: List[Worktree]) -> None:
        """Display a table of worktrees."""
        if not worktrees:
            self.console.print("[yellow]No worktrees found[/yellow]")
            return

        table = Table()
        table.add_column("")
        table.add_column("Branch")
        table.add_column("Path")
        table.add_column("HEAD")
        table.add_column("Status")

        for wt in self._ordered(worktrees):
            status = []
            if wt.locked:
                status.append(f"{SYMBOL_LOCKED}: {wt.lock_reason}" if wt.lock_reason else SYMBOL_LOCKED)
            if wt.prunable:
                status.append(SYMBOL_PRUNABLE)

            table.add_row(
                SYMBOL_MAIN_WORKTREE if wt.is_main else "",
                wt.branch_name or SYMBOL_DETACHED,
                wt.path,
                wt.head_commit[:7],
                ", ".join(status),
                style="bold" if wt.is_main else ("red" if wt.prunable else None),
            )

        self.console.print(table)

    def display_worktree_json(self, worktrees: List[Worktree]) -> None:
        self.console.print_json(data=[wt.to_dict() for wt in self._ordered(worktrees)])
