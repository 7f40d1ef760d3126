"""Idempotent creation of tmux sessions for worktrees."""

import sys
from typing import Callable, Optional

from rich.console import Console

from shadow_clone_jutsu.constants import ATTACH_HINT
from shadow_clone_jutsu.exceptions import OperationCancelledError, PaneLimitExceededError, TmuxCommandError
from shadow_clone_jutsu.logging_config import get_logger
from shadow_clone_jutsu.models.tmux import AttachResult, Orientation, SessionResult
from shadow_clone_jutsu.services.naming import sanitize_session_name
from shadow_clone_jutsu.services.prompt_service import PromptService
from shadow_clone_jutsu.services.tmux.client import TmuxClient

console = Console()
logger = get_logger(__name__)


def is_interactive_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


class TmuxSessionOrchestrator:
    """Creates a named session, splits it into panes and optionally attaches.

    Sessions are looked up live; calling create_session again for a session
    that already exists changes nothing in tmux.
    """

    def __init__(
        self,
        client: Optional[TmuxClient] = None,
        prompt: Optional[PromptService] = None,
        is_interactive: Callable[[], bool] = is_interactive_terminal,
    ):
        self.client = client or TmuxClient()
        self.prompt = prompt or PromptService()
        self.is_interactive = is_interactive

    def create_session(
        self,
        session_name: str,
        worktree_path: str,
        pane_count: int = 1,
        orientation: Orientation = Orientation.VERTICAL,
        layout: Optional[str] = None,
        interactive_attach: bool = True,
        title: Optional[str] = None,
    ) -> SessionResult:
        """Create or reuse the session `session_name` rooted at `worktree_path`.

        Args:
            session_name: Branch-derived name; sanitized for tmux
            worktree_path: Working directory of every pane
            pane_count: Total panes, including the first one
            orientation: Split direction for the extra panes
            layout: Named layout applied after splitting
            interactive_attach: Offer to attach when on a terminal
            title: Pane title and window name (defaults to session_name)

        Returns:
            SessionResult describing whether a session was created and how
            attaching went

        Raises:
            MultiplexerUnavailableError: If tmux is not installed
            PaneLimitExceededError: If tmux has no room for a split; the new
                session is killed before the error propagates
            TmuxCommandError: For any other tmux failure
        """
        title = title or session_name
        name = sanitize_session_name(session_name)

        # CheckExisting
        if self.client.has_session(name):
            logger.info(f"tmux session '{name}' already exists")
            console.print(f"[yellow]tmux session '{name}' already exists[/yellow]")
            attach = self._offer_attach(name, interactive_attach)
            return SessionResult(session_name=name, created=False, attach=attach)

        # CreateBase
        logger.debug(f"Creating tmux session '{name}' in {worktree_path}")
        self.client.new_session(name, worktree_path)

        try:
            # SplitPanes
            for _ in range(pane_count - 1):
                self.client.split_window(name, orientation, worktree_path, pane_count=pane_count)

            # ApplyLayout
            if layout:
                self.client.select_layout(name, layout)

            self._finish_window(name, title, pane_count)
        except (PaneLimitExceededError, TmuxCommandError):
            self._discard(name)
            raise

        logger.info(f"Created tmux session '{name}' with {pane_count} pane(s)")
        console.print(f"[green]Created tmux session '{name}'{self._describe(pane_count, orientation, layout)}[/green]")

        attach = self._offer_attach(name, interactive_attach)
        return SessionResult(session_name=name, created=True, attach=attach)

    def _discard(self, name: str) -> None:
        """Kill a session left half-built by a failed step."""
        logger.warning(f"Killing incomplete tmux session '{name}'")
        try:
            self.client.kill_session(name)
        except TmuxCommandError as e:
            logger.error(f"Could not kill tmux session '{name}': {e.message}")
            console.print(
                f"[red]Could not remove tmux session '{name}'. Run: tmux kill-session -t {name}[/red]",
                soft_wrap=True,
            )

    def _finish_window(self, name: str, title: str, pane_count: int) -> None:
        """Title every pane, focus the first one and name the window."""
        for index in range(pane_count):
            try:
                self.client.select_pane(f"{name}:0.{index}", title=title)
            except TmuxCommandError as e:
                # base-index settings can shift pane numbering
                logger.debug(f"Could not title pane {index}: {e.message}")
        try:
            self.client.select_pane(f"{name}:0.0")
        except TmuxCommandError as e:
            logger.debug(f"Could not focus first pane: {e.message}")
        self.client.rename_window(name, title)

    def _offer_attach(self, name: str, interactive_attach: bool) -> Optional[AttachResult]:
        if interactive_attach and self.is_interactive():
            try:
                should_attach = self.prompt.confirm("Attach to the session?", default=True)
            except OperationCancelledError:
                should_attach = False
            if should_attach:
                console.print(f"[cyan]Attaching to tmux session '{name}'...[/cyan]")
                return self.client.attach(name)

        self._print_attach_hint(name)
        return None

    @staticmethod
    def _print_attach_hint(name: str) -> None:
        console.print("\n[yellow]To attach to the session later, run:[/yellow]")
        console.print(f"   tmux attach -t {name}")
        console.print(f"[dim]{ATTACH_HINT}[/dim]")

    @staticmethod
    def _describe(pane_count: int, orientation: Orientation, layout: Optional[str]) -> str:
        if pane_count <= 1:
            return ""
        layout_msg = f", {layout} layout" if layout else ""
        return f" with {pane_count} {orientation.value} panes{layout_msg}"
